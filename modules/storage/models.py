"""SQLAlchemy table for stored mixes and the record DTO handed to callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class MixedFile(Base):
    __tablename__ = "mixed_files"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    original_files: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    duration: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    path: Mapped[str] = mapped_column(Text, nullable=False)
    size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False, index=True)

    def to_record(self) -> "MixRecord":
        return MixRecord(
            id=self.id,
            original_files=list(self.original_files or []),
            duration=self.duration,
            path=self.path,
            size=self.size,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class MixRecord:
    """Metadata of one stored mix. Records are never updated."""

    id: str
    path: str
    created_at: str
    original_files: List[str] = field(default_factory=list)
    duration: Optional[float] = None
    size: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "original_files": list(self.original_files),
            "duration": self.duration,
            "path": self.path,
            "size": self.size,
            "created_at": self.created_at,
        }
