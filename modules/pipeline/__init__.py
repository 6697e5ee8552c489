"""Pipeline package: DTOs and the mix service used by the web application."""

from .dto import (
    UploadResult,
    MixResponse,
)
from .service import (
    MixService,
    MixServiceConfig,
    EmptyUploadError,
    UploadTooLargeError,
)

__all__ = [
    "UploadResult",
    "MixResponse",
    "MixService",
    "MixServiceConfig",
    "EmptyUploadError",
    "UploadTooLargeError",
]
