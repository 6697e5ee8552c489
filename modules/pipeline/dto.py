"""Dataclass-based DTOs returned by the mix service and the HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from modules.storage.models import MixRecord


@dataclass
class UploadResult:
    url: str
    filename: str
    path: Path
    size: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "filename": self.filename,
        }


@dataclass
class MixResponse:
    status: Literal["ok", "error"]
    mix_id: Optional[str] = None
    download_url: Optional[str] = None
    filename: Optional[str] = None
    duration: Optional[float] = None
    size: Optional[int] = None
    original_files: List[str] = field(default_factory=list)
    detail: Optional[str] = None

    @classmethod
    def from_record(cls, record: MixRecord, download_url: str) -> "MixResponse":
        return cls(
            status="ok",
            mix_id=record.id,
            download_url=download_url,
            filename=Path(record.path).name,
            duration=record.duration,
            size=record.size,
            original_files=list(record.original_files),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "id": self.mix_id,
            "url": self.download_url,
            "filename": self.filename,
            "duration": self.duration,
            "size": self.size,
            "original_files": self.original_files,
            "detail": self.detail,
        }
