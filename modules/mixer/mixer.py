"""
Audio Mixer engine.

Decodes two tracks, sums them sample-by-sample with independent gains and
exports the result as a 16-bit WAV file.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .config import MixerConfig, MixRequest
from .decoder import decode_audio, decode_audio_async
from .pcm import PcmBuffer
from .wav import encode_wav


@dataclass(frozen=True)
class MixResult:
    buffer: PcmBuffer
    wav: bytes = field(repr=False)

    @property
    def duration(self) -> float:
        return self.buffer.duration

    @property
    def size(self) -> int:
        return len(self.wav)


def mix_buffers(
    buffer_a: PcmBuffer,
    buffer_b: PcmBuffer,
    gain_a: float = 1.0,
    gain_b: float = 1.0,
) -> PcmBuffer:
    """
    Sum two buffers into a new one.

    The output is as long as the longer input and has as many channels as
    the wider one. A shorter input contributes silence past its end; an
    input with fewer channels repeats its last channel into the missing
    ones, so a mono take lands in both sides of a stereo mix. Samples are
    not clamped here, that happens at quantization.
    """
    if buffer_a.sample_rate != buffer_b.sample_rate:
        raise ValueError(
            f"Sample rates differ ({buffer_a.sample_rate} != {buffer_b.sample_rate}); "
            "decode both tracks at the same rate"
        )

    frame_count = max(buffer_a.frame_count, buffer_b.frame_count)
    channel_count = max(buffer_a.channel_count, buffer_b.channel_count)
    out = np.zeros((channel_count, frame_count), dtype=np.float64)

    for source, gain in ((buffer_a, gain_a), (buffer_b, gain_b)):
        if source.channel_count == 0:
            continue
        for c in range(channel_count):
            src = source.channels[min(c, source.channel_count - 1)]
            out[c, : source.frame_count] += src * float(gain)

    return PcmBuffer(sample_rate=buffer_a.sample_rate, channels=out)


class AudioMixer:
    """High-level two-track mixer: decode -> mix -> encode."""

    def __init__(self, config: MixerConfig | None = None):
        self.config = config or MixerConfig()

    # ---------------------
    # Public API
    # ---------------------
    def mix(
        self,
        buffer_a: PcmBuffer,
        buffer_b: PcmBuffer,
        gain_a: Optional[float] = None,
        gain_b: Optional[float] = None,
    ) -> PcmBuffer:
        default = self.config.default_gain
        return mix_buffers(
            buffer_a,
            buffer_b,
            default if gain_a is None else gain_a,
            default if gain_b is None else gain_b,
        )

    def render(self, request: MixRequest) -> MixResult:
        """
        Mix the two tracks of a request into WAV bytes.

        Raises:
            DecodeError: if either track cannot be decoded
            EncodeError: if the mix holds no audio
        """
        rate = self.config.sample_rate
        buffer_a = decode_audio(request.first.data, rate, request.first.format)
        buffer_b = decode_audio(request.second.data, rate, request.second.format)
        return self._finish(buffer_a, buffer_b, request)

    async def render_async(self, request: MixRequest) -> MixResult:
        """Like render(), with both decodes awaited concurrently."""
        rate = self.config.sample_rate
        buffer_a, buffer_b = await asyncio.gather(
            decode_audio_async(request.first.data, rate, request.first.format),
            decode_audio_async(request.second.data, rate, request.second.format),
        )
        return await asyncio.to_thread(self._finish, buffer_a, buffer_b, request)

    # ---------------------
    # Internals
    # ---------------------
    def _finish(self, buffer_a: PcmBuffer, buffer_b: PcmBuffer, request: MixRequest) -> MixResult:
        mixed = self.mix(buffer_a, buffer_b, request.first.gain, request.second.gain)
        return MixResult(buffer=mixed, wav=encode_wav(mixed))
