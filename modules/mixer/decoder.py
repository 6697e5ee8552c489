"""
Decoding of compressed or raw audio blobs into PcmBuffer using pydub.

WAV input is parsed by pydub directly; every other container goes through
ffmpeg, so the ffmpeg binary must be installed for MP3/WebM/OGG uploads.
"""

from __future__ import annotations

import asyncio
import io
from typing import Optional

import numpy as np

from .errors import DecodeError
from .pcm import PcmBuffer


def sniff_format(data: bytes) -> Optional[str]:
    """Return "wav" for RIFF/WAVE data, None to let ffmpeg detect the rest."""
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WAVE":
        return "wav"
    return None


def _audio_segment_class():
    try:
        from pydub import AudioSegment
    except ImportError:
        raise ImportError(
            "pydub is required. Install it with: pip install pydub\n"
            "Also install ffmpeg system package for codec support."
        )
    return AudioSegment


def wav_duration(data: bytes) -> float:
    """
    Length in seconds of a WAV blob at its own sample rate.

    Uses pydub's built-in WAV reader only, so ffmpeg is never invoked and
    nothing is resampled.

    Raises:
        DecodeError: if the data is not a readable PCM WAV file
    """
    AudioSegment = _audio_segment_class()
    if sniff_format(data) != "wav":
        raise DecodeError("Not a WAV file")
    try:
        return AudioSegment(data=data).duration_seconds
    except Exception as exc:
        raise DecodeError(f"Could not read WAV header: {exc}") from exc


def segment_to_pcm(segment) -> PcmBuffer:
    """Normalize a pydub AudioSegment's integer samples to floats in [-1.0, 1.0)."""
    samples = np.array(segment.get_array_of_samples(), dtype=np.float64)
    full_scale = float(1 << (8 * segment.sample_width - 1))
    return PcmBuffer.from_interleaved(samples / full_scale, segment.channels, segment.frame_rate)


def decode_audio(data: bytes, sample_rate: int, format: Optional[str] = None) -> PcmBuffer:
    """
    Decode an audio blob and resample it to ``sample_rate``.

    Args:
        data: Encoded audio bytes (WAV, MP3, WebM, ...)
        sample_rate: Target sample rate; every buffer of one mix must share it
        format: Optional container hint passed to pydub/ffmpeg

    Raises:
        DecodeError: if the buffer is empty or cannot be decoded
    """
    AudioSegment = _audio_segment_class()

    if not data:
        raise DecodeError("Audio buffer is empty")

    fmt = format or sniff_format(data)
    try:
        segment = AudioSegment.from_file(io.BytesIO(data), format=fmt)
    except Exception as exc:
        # pydub surfaces bad input as CouldntDecodeError, IndexError (no audio
        # stream) or OSError (ffprobe/ffmpeg missing); all mean undecodable here
        raise DecodeError(f"Could not decode audio ({len(data)} bytes): {exc}") from exc

    if segment.frame_rate != sample_rate:
        segment = segment.set_frame_rate(sample_rate)

    return segment_to_pcm(segment)


async def decode_audio_async(data: bytes, sample_rate: int, format: Optional[str] = None) -> PcmBuffer:
    """
    Awaitable decode. The blocking decode runs in a worker thread; if the
    caller is cancelled the thread still runs to completion and its result
    is dropped.
    """
    return await asyncio.to_thread(decode_audio, data, sample_rate, format)
