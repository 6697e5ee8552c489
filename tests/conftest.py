"""
Shared pytest fixtures.

Audio inputs are generated in memory and serialized with the project's own
WAV encoder, so decoding stays on pydub's built-in WAV reader and no
ffmpeg binary is needed.
"""

import numpy as np
import pytest
from fastapi.testclient import TestClient

from modules.mixer import PcmBuffer, encode_wav
from modules.pipeline import MixService, MixServiceConfig
from modules.pipeline.registry import get_mix_service
from modules.storage import MixedFileRepository


SAMPLE_RATE = 44100


def _sine(amplitude, seconds, channels=1, sample_rate=SAMPLE_RATE, frequency=440.0):
    t = np.arange(int(round(seconds * sample_rate))) / sample_rate
    wave = amplitude * np.sin(2 * np.pi * frequency * t)
    return PcmBuffer(sample_rate=sample_rate, channels=np.tile(wave, (channels, 1)))


@pytest.fixture
def make_sine():
    """Factory: make_sine(amplitude, seconds, channels=1, sample_rate=44100)."""
    return _sine


@pytest.fixture
def stereo_wav():
    """1 second stereo 0.5-amplitude sine as WAV bytes."""
    return encode_wav(_sine(0.5, 1.0, channels=2))


@pytest.fixture
def mono_wav():
    """Half a second mono 0.3-amplitude sine as WAV bytes."""
    return encode_wav(_sine(0.3, 0.5, channels=1))


@pytest.fixture
def repository(tmp_path):
    repo = MixedFileRepository(f"sqlite:///{tmp_path / 'audio.sqlite'}")
    yield repo
    repo.dispose()


@pytest.fixture
def service(tmp_path, repository):
    return MixService(
        uploads_dir=tmp_path / "uploads",
        repository=repository,
        config=MixServiceConfig(sample_rate=SAMPLE_RATE, max_upload_bytes=1024 * 1024),
    )


@pytest.fixture
def client(service):
    from app.main import app

    app.dependency_overrides[get_mix_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def corrupt_wav():
    """RIFF/WAVE magic followed by a fmt chunk with an unknown format code."""
    return b"RIFF\x24\0\0\0WAVEfmt \x10\0\0\0" + b"\xff" * 40
