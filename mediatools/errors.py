from __future__ import annotations

class MediaToolsError(Exception):
    """Base error for the mediatools package."""


class WavError(MediaToolsError):
    """Raised when WAV decoding, validation or encoding fails."""


class InvalidFormatError(WavError):
    """Raised when an input buffer is not a recognized PCM WAV file."""


class FormatMismatchError(WavError):
    """Raised when concatenation inputs disagree on sample rate or channel count."""


class EmptyInputError(WavError, ValueError):
    """Raised when concatenation is called without any input buffers."""


class EncodingFailureError(WavError):
    """Raised when the concatenated audio cannot be re-encoded."""


class FrameExtractionError(MediaToolsError):
    """Raised when video frame extraction fails."""


class DecodeFailureError(FrameExtractionError, ValueError):
    """Raised when the base64 video payload cannot be decoded."""


class ExternalProcessError(FrameExtractionError):
    """Raised when the transcoder cannot be started or exits non-zero."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
