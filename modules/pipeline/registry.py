"""Global service registry for lazy initialization and reuse.

This module holds the singleton MixService (and its metadata repository)
used by the web application and exposes getter functions to retrieve
them. It also provides a `warm_up()` function that creates storage
directories and database tables at application startup.
"""

from __future__ import annotations

import threading
from typing import Optional
import logging

from modules import storage_config
from modules.storage import MixedFileRepository

from .service import MixService, MixServiceConfig


_lock = threading.RLock()
_repository: Optional[MixedFileRepository] = None
_service: Optional[MixService] = None


def get_repository() -> MixedFileRepository:
    """Get a singleton instance of the MixedFileRepository."""
    global _repository
    with _lock:
        if _repository is None:
            storage_config.setup_storage_directories()
            _repository = MixedFileRepository(storage_config.get_database_url())
        return _repository


def get_mix_service() -> MixService:
    """Get a singleton instance of the MixService configured from the environment."""
    global _service
    with _lock:
        if _service is None:
            config = MixServiceConfig(
                sample_rate=storage_config.get_sample_rate(),
                max_upload_bytes=storage_config.get_max_upload_bytes(),
            )
            _service = MixService(
                uploads_dir=storage_config.get_uploads_dir(),
                repository=get_repository(),
                config=config,
            )
            logging.getLogger("adlib.service").info(
                "Mix service ready (uploads=%s, sample_rate=%d)",
                _service.uploads_dir,
                config.sample_rate,
            )
        return _service


def warm_up() -> None:
    """Create storage and the metadata table to avoid work on the first request."""
    get_mix_service()
