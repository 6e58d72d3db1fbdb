"""Small media helpers: WAV concatenation, PCM-to-WAV wrapping, video frame sampling.

The CLI scripts at the repository root import from here.
"""

from mediatools.errors import (
    DecodeFailureError,
    EmptyInputError,
    EncodingFailureError,
    ExternalProcessError,
    FormatMismatchError,
    FrameExtractionError,
    InvalidFormatError,
    MediaToolsError,
    WavError,
)
from mediatools.frames import extract_frames_as_base64
from mediatools.types import AudioFormat, PCMFrameBuffer
from mediatools.wav import concat_wav_bytes, decode_wav, encode_wav, pcm_to_wav

__all__ = [
    "AudioFormat",
    "PCMFrameBuffer",
    "concat_wav_bytes",
    "decode_wav",
    "encode_wav",
    "extract_frames_as_base64",
    "pcm_to_wav",
    "DecodeFailureError",
    "EmptyInputError",
    "EncodingFailureError",
    "ExternalProcessError",
    "FormatMismatchError",
    "FrameExtractionError",
    "InvalidFormatError",
    "MediaToolsError",
    "WavError",
]
