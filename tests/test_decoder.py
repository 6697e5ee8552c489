import asyncio

import numpy as np
import pytest

from modules.mixer import DecodeError, PcmBuffer, decode_audio, decode_audio_async, encode_wav
from modules.mixer.decoder import sniff_format, wav_duration
from modules.mixer.wav import wav_header


def test_decodes_wav_to_float_samples():
    source = PcmBuffer(sample_rate=44100, channels=[[0.5, -0.5, 0.0, -1.0], [0.25, 0.0, -0.25, 1.0]])

    buf = decode_audio(encode_wav(source), sample_rate=44100)

    assert buf.sample_rate == 44100
    assert buf.channel_count == 2
    assert buf.frame_count == 4
    np.testing.assert_allclose(buf.channels, source.channels, atol=1 / 32767)
    assert buf.channel(0)[3] == -1.0


def test_resamples_to_target_rate(stereo_wav):
    buf = decode_audio(stereo_wav, sample_rate=22050)

    assert buf.sample_rate == 22050
    assert abs(buf.frame_count - 22050) <= 2
    assert buf.duration == pytest.approx(1.0, abs=1e-3)


def test_wav_without_frames_decodes_empty():
    buf = decode_audio(wav_header(1, 44100, 0), sample_rate=44100)

    assert buf.channel_count == 1
    assert buf.frame_count == 0


def test_empty_bytes_rejected():
    with pytest.raises(DecodeError):
        decode_audio(b"", sample_rate=44100)


def test_corrupt_wav_raises_decode_error(corrupt_wav):
    with pytest.raises(DecodeError, match="Could not decode"):
        decode_audio(corrupt_wav, sample_rate=44100)


def test_non_audio_bytes_raise_decode_error():
    with pytest.raises(DecodeError, match="Could not decode"):
        decode_audio(b"garbage that is not audio", sample_rate=44100)


def test_wav_duration_reads_header(mono_wav):
    assert wav_duration(mono_wav) == pytest.approx(0.5)


def test_wav_duration_rejects_corrupt_wav(corrupt_wav):
    with pytest.raises(DecodeError, match="Could not read WAV header"):
        wav_duration(corrupt_wav)


@pytest.mark.parametrize("data", [b"garbage that is not audio", b"RIFF\x24\0\0\0WAVEfmt "])
def test_wav_duration_rejects_unreadable_data(data):
    with pytest.raises(DecodeError):
        wav_duration(data)


def test_sniff_format():
    assert sniff_format(wav_header(2, 44100, 0)) == "wav"
    assert sniff_format(b"ID3\x04\x00") is None
    assert sniff_format(b"RIFF") is None


def test_decode_async(mono_wav):
    buf = asyncio.run(decode_audio_async(mono_wav, sample_rate=44100))

    assert buf.channel_count == 1
    assert buf.frame_count == 22050
