"""
PCM sample buffer shared by the decoder, the mixer and the WAV encoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np


ChannelData = Union[np.ndarray, Sequence[Sequence[float]]]


@dataclass(frozen=True, eq=False)
class PcmBuffer:
    """
    Immutable block of floating-point PCM audio.

    Attributes:
        sample_rate: Samples per second
        channels: Read-only float64 array shaped (channel_count, frame_count).
                  Samples are nominally in [-1.0, 1.0] but are not clamped.
    """

    sample_rate: int
    channels: ChannelData

    def __post_init__(self) -> None:
        sample_rate = int(self.sample_rate)
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")

        channels = self.channels
        if not isinstance(channels, np.ndarray):
            channels = list(channels)
            if len({len(ch) for ch in channels}) > 1:
                raise ValueError("All channels must have the same frame count")

        data = np.array(channels, dtype=np.float64)
        if data.ndim == 1 and data.size == 0:
            data = data.reshape(0, 0)
        if data.ndim != 2:
            raise ValueError(f"channels must be 2-D (channels, frames), got shape {data.shape}")
        data.setflags(write=False)

        object.__setattr__(self, "sample_rate", sample_rate)
        object.__setattr__(self, "channels", data)

    @classmethod
    def from_interleaved(cls, samples: Sequence[float], channel_count: int, sample_rate: int) -> "PcmBuffer":
        """Build a buffer from frame-major interleaved samples (L, R, L, R, ...)."""
        if channel_count <= 0:
            raise ValueError(f"channel_count must be positive, got {channel_count}")
        flat = np.asarray(samples, dtype=np.float64)
        if flat.size % channel_count:
            raise ValueError(
                f"{flat.size} interleaved samples do not divide into {channel_count} channels"
            )
        return cls(sample_rate=sample_rate, channels=flat.reshape(-1, channel_count).T)

    @classmethod
    def silence(cls, channel_count: int, frame_count: int, sample_rate: int) -> "PcmBuffer":
        return cls(sample_rate=sample_rate, channels=np.zeros((channel_count, frame_count)))

    @property
    def channel_count(self) -> int:
        return int(self.channels.shape[0])

    @property
    def frame_count(self) -> int:
        return int(self.channels.shape[1])

    @property
    def duration(self) -> float:
        """Length in seconds."""
        return self.frame_count / self.sample_rate

    def channel(self, index: int) -> np.ndarray:
        return self.channels[index]

    def __repr__(self) -> str:
        return (
            f"PcmBuffer(sample_rate={self.sample_rate}, channel_count={self.channel_count}, "
            f"frame_count={self.frame_count})"
        )
