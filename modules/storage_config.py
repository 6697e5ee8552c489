"""
Storage path and environment configuration.

All persistent state (uploaded files, stored mixes, the metadata database)
lives under one data root. It defaults to ``data/`` inside the project and
can be moved with the ADLIB_DATA_ROOT environment variable.
"""

import os
from pathlib import Path


ENV_DATA_ROOT = "ADLIB_DATA_ROOT"
ENV_DATABASE_URL = "ADLIB_DATABASE_URL"
ENV_SAMPLE_RATE = "ADLIB_SAMPLE_RATE"
ENV_MAX_UPLOAD_MB = "ADLIB_MAX_UPLOAD_MB"

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_MAX_UPLOAD_MB = 100


def get_project_root(project_root: Path | None = None) -> Path:
    """
    Return the project root. When not given explicitly it is resolved
    relative to this file (one level up).
    """
    if project_root is None:
        project_root = Path(__file__).resolve().parent.parent
    return project_root


def get_data_root(project_root: Path | None = None) -> Path:
    """
    Return the root directory for persistent data.

    Priority:
    1. ADLIB_DATA_ROOT environment variable.
    2. ``data`` directory inside the project.
    """
    env_root = os.environ.get(ENV_DATA_ROOT)
    if env_root:
        return Path(env_root).expanduser().resolve()
    return get_project_root(project_root) / "data"


def get_uploads_dir(project_root: Path | None = None) -> Path:
    return get_data_root(project_root) / "uploads"


def get_database_url(project_root: Path | None = None) -> str:
    env_url = os.environ.get(ENV_DATABASE_URL)
    if env_url:
        return env_url
    return f"sqlite:///{get_data_root(project_root) / 'audio.sqlite'}"


def get_sample_rate() -> int:
    return int(os.environ.get(ENV_SAMPLE_RATE, DEFAULT_SAMPLE_RATE))


def get_max_upload_bytes() -> int:
    return int(float(os.environ.get(ENV_MAX_UPLOAD_MB, DEFAULT_MAX_UPLOAD_MB)) * 1024 * 1024)


def setup_storage_directories(project_root: Path | None = None) -> Path:
    """
    Create the data root and uploads directory.
    Returns the data root.
    """
    data_root = get_data_root(project_root)
    data_root.mkdir(parents=True, exist_ok=True)
    get_uploads_dir(project_root).mkdir(parents=True, exist_ok=True)
    return data_root
