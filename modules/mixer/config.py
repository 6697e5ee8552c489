"""
Mixer configuration and track specification.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TrackInput:
    """
    Description of a single input track.

    Attributes:
        data: Encoded audio bytes as uploaded or recorded
        gain: Linear gain multiplier. Values outside [0, 1] amplify or
              invert the signal.
        name: Original filename, kept for metadata
        format: Container hint for the decoder (e.g., 'wav', 'webm')
    """

    data: bytes = field(repr=False)
    gain: float = 1.0
    name: Optional[str] = None
    format: Optional[str] = None


@dataclass(frozen=True)
class MixRequest:
    """Two tracks to be mixed together: the backing track and the take."""

    first: TrackInput
    second: TrackInput

    @property
    def names(self) -> list[str]:
        return [t.name for t in (self.first, self.second) if t.name]


@dataclass
class MixerConfig:
    """Configuration for the audio mixer."""

    # Both tracks are decoded at this rate so samples align by index
    sample_rate: int = 44100
    default_gain: float = 1.0
