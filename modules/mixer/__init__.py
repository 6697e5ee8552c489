"""
Audio Mixer

Combines a backing track and a microphone take into a single 16-bit WAV
file, with an independent linear gain per track.

Example:
    >>> from modules.mixer import AudioMixer, MixerConfig, MixRequest, TrackInput
    >>> request = MixRequest(
    ...     first=TrackInput(data=open("beat.wav", "rb").read(), name="beat.wav"),
    ...     second=TrackInput(data=open("take.webm", "rb").read(), gain=0.8, name="take.webm"),
    ... )
    >>> result = AudioMixer(MixerConfig(sample_rate=48000)).render(request)
    >>> open("mixed.wav", "wb").write(result.wav)
"""

from .config import MixerConfig, MixRequest, TrackInput
from .decoder import decode_audio, decode_audio_async
from .errors import DecodeError, EncodeError, MixerError
from .mixer import AudioMixer, MixResult, mix_buffers
from .pcm import PcmBuffer
from .wav import encode_wav, quantize

__all__ = [
    'MixerConfig',
    'MixRequest',
    'TrackInput',
    'AudioMixer',
    'MixResult',
    'PcmBuffer',
    'mix_buffers',
    'decode_audio',
    'decode_audio_async',
    'encode_wav',
    'quantize',
    'MixerError',
    'DecodeError',
    'EncodeError',
]

__version__ = '0.1.0'
