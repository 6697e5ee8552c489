"""Mix service sitting between the HTTP layer and the mixing core.

The MixService validates uploads, runs the decode -> mix -> encode pipeline,
writes stored mixes under the uploads directory and keeps their metadata in
the MixedFileRepository.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional
import logging
import time
import uuid

from modules.mixer import AudioMixer, MixerConfig, MixRequest, MixResult, TrackInput
from modules.mixer.decoder import sniff_format, wav_duration
from modules.mixer.errors import DecodeError
from modules.storage import MixedFileRepository, MixRecord

from .dto import UploadResult


UPLOADS_URL_PREFIX = "/uploads"


class EmptyUploadError(ValueError):
    pass


class UploadTooLargeError(ValueError):
    pass


@dataclass
class MixServiceConfig:
    sample_rate: int = 44100
    max_upload_bytes: int = 100 * 1024 * 1024


def safe_filename(prefix: str = "upload", suffix: str = ".wav") -> str:
    return f"{prefix}_{uuid.uuid4().hex}{suffix}"


class MixService:
    """Runs mixes and manages stored files plus their metadata."""

    def __init__(
        self,
        uploads_dir: Path,
        repository: MixedFileRepository,
        config: Optional[MixServiceConfig] = None,
    ):
        self.config = config or MixServiceConfig()
        self.uploads_dir = Path(uploads_dir)
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        self.repository = repository
        self.mixer = AudioMixer(MixerConfig(sample_rate=self.config.sample_rate))
        self.logger = logging.getLogger("adlib.service")

    # -----------------------------
    # Mixing
    # -----------------------------
    def check_upload_size(self, size: Optional[int], label: str) -> None:
        """Reject a part by its declared size, before its body is read."""
        if size is not None and size > self.config.max_upload_bytes:
            raise UploadTooLargeError(
                f"{label} file is {size} bytes, limit is {self.config.max_upload_bytes}"
            )

    def check_upload(self, data: bytes, label: str) -> None:
        if not data:
            raise EmptyUploadError(f"{label} file is empty (0 bytes)")
        self.check_upload_size(len(data), label)

    async def mix(self, original: TrackInput, mic: TrackInput) -> MixResult:
        """Mix the backing track and the microphone take into WAV bytes.

        Raises:
            EmptyUploadError / UploadTooLargeError: rejected upload
            DecodeError / EncodeError: from the mixing core
        """
        self.check_upload(original.data, "Original")
        self.check_upload(mic.data, "Mic")

        self.logger.info(
            "Mix started (original=%s, %d bytes, gain=%.2f; mic=%s, %d bytes, gain=%.2f)",
            original.name, len(original.data), original.gain,
            mic.name, len(mic.data), mic.gain,
        )
        t0 = time.perf_counter()
        result = await self.mixer.render_async(MixRequest(first=original, second=mic))
        t1 = time.perf_counter()
        self.logger.info(
            "Mix completed in %.2fs (channels=%d, frames=%d, wav=%d bytes)",
            (t1 - t0),
            result.buffer.channel_count,
            result.buffer.frame_count,
            result.size,
        )
        return result

    async def mix_and_store(self, original: TrackInput, mic: TrackInput) -> MixRecord:
        result = await self.mix(original, mic)
        return self.store_mix(result, MixRequest(first=original, second=mic).names)

    def store_mix(self, result: MixResult, original_files: Iterable[str] = ()) -> MixRecord:
        """Write mixed WAV bytes to the uploads directory and record them."""
        path = self.uploads_dir / safe_filename(prefix="mix", suffix=".wav")
        path.write_bytes(result.wav)
        try:
            return self.repository.create(
                path=str(path),
                original_files=original_files,
                duration=result.duration,
                size=result.size,
            )
        except Exception:
            self.logger.exception("Failed to record stored mix %s; removing file", path.name)
            path.unlink(missing_ok=True)
            raise

    # -----------------------------
    # Plain uploads
    # -----------------------------
    def save_upload(self, data: bytes, filename: Optional[str], prefix: str = "upload") -> UploadResult:
        self.check_upload(data, prefix.capitalize())
        suffix = Path(filename or "").suffix.lower()
        stored_name = safe_filename(prefix=prefix, suffix=suffix)
        path = self.uploads_dir / stored_name
        path.write_bytes(data)
        self.logger.info("Saved upload %s as %s (%d bytes)", filename, stored_name, len(data))
        return UploadResult(url=self.url_for(path), filename=stored_name, path=path, size=len(data))

    def save_mixed_upload(
        self,
        data: bytes,
        filename: Optional[str],
        source_files: Iterable[str] = (),
    ) -> MixRecord:
        """Store a mix rendered by the client and create its metadata record."""
        upload = self.save_upload(data, filename or "mix.wav", prefix="mix")
        try:
            return self.repository.create(
                path=str(upload.path),
                original_files=source_files,
                duration=self._read_duration(data),
                size=upload.size,
            )
        except Exception:
            self.logger.exception("Failed to record uploaded mix %s; removing file", upload.filename)
            upload.path.unlink(missing_ok=True)
            raise

    def _read_duration(self, data: bytes) -> Optional[float]:
        # Only the WAV header is read; ffmpeg is never involved
        if sniff_format(data) != "wav":
            return None
        try:
            return wav_duration(data)
        except DecodeError as e:
            self.logger.warning("Could not read duration of uploaded mix: %s", e)
            return None

    # -----------------------------
    # Stored files and metadata
    # -----------------------------
    def url_for(self, path: Path) -> str:
        return f"{UPLOADS_URL_PREFIX}/{Path(path).name}"

    def resolve_upload(self, filename: str) -> Optional[Path]:
        """Path of a stored file, or None if missing or outside the uploads directory."""
        root = self.uploads_dir.resolve()
        candidate = (root / filename).resolve()
        if candidate.parent != root or not candidate.is_file():
            return None
        return candidate

    def list_mixes(self) -> List[MixRecord]:
        return self.repository.list_all()

    def get_mix(self, mix_id: str) -> Optional[MixRecord]:
        return self.repository.get(mix_id)

    def delete_mix(self, mix_id: str) -> bool:
        record = self.repository.get(mix_id)
        if record is None:
            return False
        deleted = self.repository.delete(mix_id)
        Path(record.path).unlink(missing_ok=True)
        self.logger.info("Deleted mix %s (%s)", mix_id, Path(record.path).name)
        return deleted
