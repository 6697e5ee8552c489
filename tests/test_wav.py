import struct

import numpy as np
import pytest

from modules.mixer import EncodeError, PcmBuffer, encode_wav, quantize
from modules.mixer.wav import HEADER_SIZE, wav_header


def _samples(wav: bytes) -> np.ndarray:
    return np.frombuffer(wav[HEADER_SIZE:], dtype="<i2")


def test_header_fields():
    buf = PcmBuffer.silence(channel_count=2, frame_count=10, sample_rate=48000)
    wav = encode_wav(buf)

    fields = struct.unpack("<4sI4s4sIHHIIHH4sI", wav[:HEADER_SIZE])
    assert fields == (
        b"RIFF", 36 + 40, b"WAVE", b"fmt ", 16, 1, 2, 48000,
        48000 * 2 * 2, 4, 16, b"data", 40,
    )


def test_quantization_boundaries():
    buf = PcmBuffer(sample_rate=8000, channels=[[1.0, -1.0, 0.0]])

    assert _samples(encode_wav(buf)).tolist() == [32767, -32768, 0]


def test_out_of_range_samples_saturate():
    # two full-scale 0.8 sources added together
    buf = PcmBuffer(sample_rate=8000, channels=[[1.6, -1.6, 250.0]])

    assert _samples(encode_wav(buf)).tolist() == [32767, -32768, 32767]


def test_asymmetric_scale_rounds():
    assert quantize(np.array([0.5, -0.5, 0.25, -0.25])).tolist() == [16384, -16384, 8192, -8192]


def test_halves_round_to_even():
    halves = np.array([-0.5, -1.5, -2.5, -3.5]) / 32768

    assert quantize(halves).tolist() == [0, -2, -2, -4]


def test_nan_encodes_as_silence():
    assert quantize(np.array([np.nan])).tolist() == [0]


def test_interleaving_is_frame_major():
    buf = PcmBuffer(sample_rate=8000, channels=[[0.0, 1.0], [-1.0, 0.0]])

    assert _samples(encode_wav(buf)).tolist() == [0, -32768, 32767, 0]


@pytest.mark.parametrize("channels,frames", [(1, 1), (1, 441), (2, 100), (6, 33)])
def test_byte_length(channels, frames):
    buf = PcmBuffer.silence(channel_count=channels, frame_count=frames, sample_rate=44100)

    assert len(encode_wav(buf)) == 44 + frames * channels * 2


def test_zero_frames_rejected():
    with pytest.raises(EncodeError):
        encode_wav(PcmBuffer.silence(channel_count=2, frame_count=0, sample_rate=44100))


def test_zero_channels_rejected():
    with pytest.raises(EncodeError):
        encode_wav(PcmBuffer(sample_rate=44100, channels=[]))


def test_encoding_is_deterministic(make_sine):
    buf = make_sine(0.7, 0.1, channels=2)

    assert encode_wav(buf) == encode_wav(buf)


def test_header_helper_matches_encoder():
    buf = PcmBuffer.silence(channel_count=1, frame_count=5, sample_rate=22050)

    assert encode_wav(buf)[:HEADER_SIZE] == wav_header(1, 22050, 10)
