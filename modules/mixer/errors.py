"""
Errors raised by the mixing pipeline.
"""


class MixerError(Exception):
    """Base class for failures of a single mix request."""

    user_message = "audio mix failed"


class DecodeError(MixerError):
    """Input bytes could not be parsed as audio."""

    user_message = "could not process this audio file"


class EncodeError(MixerError):
    """A degenerate buffer (no channels or no frames) reached the encoder."""

    user_message = "no audio data captured"
