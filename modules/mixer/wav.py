"""
16-bit PCM WAV serialization.

Writes the canonical 44-byte RIFF header followed by interleaved signed
16-bit little-endian samples.
"""

from __future__ import annotations

import struct

import numpy as np

from .errors import EncodeError
from .pcm import PcmBuffer


BITS_PER_SAMPLE = 16
BYTES_PER_SAMPLE = BITS_PER_SAMPLE // 8
HEADER_SIZE = 44
WAVE_FORMAT_PCM = 1

# RIFF id, chunk size, WAVE, "fmt ", fmt size, format, channels,
# sample rate, byte rate, block align, bits per sample, "data", data size
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")
_MAX_DATA_SIZE = 0xFFFFFFFF - 36


def quantize(samples: np.ndarray) -> np.ndarray:
    """
    Convert float samples to signed 16-bit integers.

    Samples are clamped to [-1.0, 1.0]; negative values scale by 32768 and
    non-negative values by 32767, so -1.0 -> -32768 and 1.0 -> 32767.
    Scaled values are rounded half-to-even (numpy.round), not truncated,
    so -1.5 -> -2 and -2.5 -> -2. NaN is treated as silence.
    """
    s = np.nan_to_num(np.asarray(samples, dtype=np.float64), nan=0.0, posinf=1.0, neginf=-1.0)
    s = np.clip(s, -1.0, 1.0)
    scaled = np.where(s < 0, s * 32768.0, s * 32767.0)
    return np.round(scaled).astype("<i2")


def wav_header(channel_count: int, sample_rate: int, data_size: int) -> bytes:
    block_align = channel_count * BYTES_PER_SAMPLE
    return _HEADER.pack(
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        WAVE_FORMAT_PCM,
        channel_count,
        sample_rate,
        sample_rate * block_align,
        block_align,
        BITS_PER_SAMPLE,
        b"data",
        data_size,
    )


def encode_wav(buffer: PcmBuffer) -> bytes:
    """
    Serialize a PcmBuffer into WAV bytes.

    Raises:
        EncodeError: if the buffer has no channels or no frames, or is too
                     large for a RIFF container
    """
    if buffer.channel_count <= 0 or buffer.frame_count <= 0:
        raise EncodeError(
            f"Cannot encode empty audio (channels={buffer.channel_count}, frames={buffer.frame_count})"
        )

    data_size = buffer.frame_count * buffer.channel_count * BYTES_PER_SAMPLE
    if data_size > _MAX_DATA_SIZE:
        raise EncodeError(f"Audio data of {data_size} bytes does not fit in a WAV file")

    # (channels, frames) -> (frames, channels) so ravel yields frame-major order
    interleaved = np.ascontiguousarray(buffer.channels.T).ravel()
    data = quantize(interleaved).tobytes()
    return wav_header(buffer.channel_count, buffer.sample_rate, data_size) + data
