"""Metadata store for stored mixes (create / get / list / delete)."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from .models import Base, MixedFile, MixRecord


logger = logging.getLogger("adlib.storage")


class MixedFileRepository:
    """SQLAlchemy-backed store of MixRecord rows."""

    def __init__(self, database_url: str):
        connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
        self.engine = create_engine(database_url, connect_args=connect_args)
        Base.metadata.create_all(self.engine)
        self._session = sessionmaker(bind=self.engine, expire_on_commit=False)
        logger.info("Metadata store ready (%s)", self.engine.url.render_as_string(hide_password=True))

    def create(
        self,
        path: str,
        original_files: Iterable[str] = (),
        duration: Optional[float] = None,
        size: Optional[int] = None,
        record_id: Optional[str] = None,
        created_at: Optional[str] = None,
    ) -> MixRecord:
        row = MixedFile(
            id=record_id or uuid.uuid4().hex,
            original_files=list(original_files),
            duration=duration,
            path=str(path),
            size=size,
            created_at=created_at or datetime.now(timezone.utc).isoformat(),
        )
        with self._session.begin() as session:
            session.add(row)
        logger.info("Created mix record %s -> %s", row.id, row.path)
        return row.to_record()

    def get(self, record_id: str) -> Optional[MixRecord]:
        with self._session() as session:
            row = session.get(MixedFile, record_id)
            return row.to_record() if row is not None else None

    def list_all(self) -> List[MixRecord]:
        """All records, newest first."""
        stmt = select(MixedFile).order_by(MixedFile.created_at.desc())
        with self._session() as session:
            return [row.to_record() for row in session.scalars(stmt)]

    def delete(self, record_id: str) -> bool:
        with self._session.begin() as session:
            row = session.get(MixedFile, record_id)
            if row is None:
                return False
            session.delete(row)
        logger.info("Deleted mix record %s", record_id)
        return True

    def dispose(self) -> None:
        self.engine.dispose()
