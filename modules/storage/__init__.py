"""Storage package: metadata table and repository for stored mixes."""

from .models import MixedFile, MixRecord
from .repository import MixedFileRepository

__all__ = [
    "MixedFile",
    "MixRecord",
    "MixedFileRepository",
]
