from __future__ import annotations

import io
import struct
import wave
from typing import List, Sequence

import numpy as np

from mediatools.errors import (
    EmptyInputError,
    EncodingFailureError,
    FormatMismatchError,
    InvalidFormatError,
)
from mediatools.logging_utils import get_logger
from mediatools.types import AudioFormat, PCMFrameBuffer

log = get_logger(__name__)

WAV_HEADER_SIZE = 44
PCM_FORMAT_TAG = 1

# RIFF, size, WAVE, "fmt ", fmt size, tag, channels, rate, byte rate, align, bits, "data", size
_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")

_SAMPLE_DTYPES = {
    1: np.dtype(np.uint8),  # 8-bit WAV is unsigned
    2: np.dtype("<i2"),
    4: np.dtype("<i4"),
}


def _samples_from_bytes(raw: bytes, sample_width: int) -> np.ndarray:
    if sample_width == 3:
        triplets = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3)
        padded = np.zeros((len(triplets), 4), dtype=np.uint8)
        padded[:, 1:] = triplets
        # Shift the value down from the top three bytes to sign-extend.
        return padded.view("<i4").reshape(-1) >> 8
    dtype = _SAMPLE_DTYPES.get(sample_width)
    if dtype is None:
        raise InvalidFormatError(f"Unsupported sample width: {sample_width} bytes")
    return np.frombuffer(raw, dtype=dtype).astype(np.int32)


def _samples_to_bytes(samples: np.ndarray, sample_width: int) -> bytes:
    if sample_width == 3:
        wide = samples.astype("<i4").view(np.uint8).reshape(-1, 4)
        return wide[:, :3].tobytes()
    dtype = _SAMPLE_DTYPES.get(sample_width)
    if dtype is None:
        raise EncodingFailureError(f"Unsupported sample width: {sample_width} bytes")
    # Out-of-range values wrap to the target width.
    return samples.astype(dtype).tobytes()


def decode_wav(data: bytes) -> PCMFrameBuffer:
    """Parse a WAV byte buffer into its format and full integer sample buffer.

    Raises InvalidFormatError when the data is not a PCM WAV file the stdlib
    reader understands. A trailing partial frame is dropped.
    """
    try:
        with wave.open(io.BytesIO(data), "rb") as reader:
            fmt = AudioFormat(
                sample_rate=reader.getframerate(),
                num_channels=reader.getnchannels(),
                bit_depth=reader.getsampwidth() * 8,
            )
            raw = reader.readframes(reader.getnframes())
    except (wave.Error, EOFError) as e:
        raise InvalidFormatError(f"invalid WAV file: {e}") from e

    if fmt.num_channels <= 0 or fmt.block_align <= 0:
        raise InvalidFormatError(f"invalid WAV format: {fmt}")
    usable = len(raw) - len(raw) % fmt.block_align
    samples = _samples_from_bytes(raw[:usable], fmt.sample_width)
    return PCMFrameBuffer(format=fmt, samples=samples)


def encode_wav(buffers: Sequence[PCMFrameBuffer], fmt: AudioFormat) -> bytes:
    """Write the sample buffers, in order, into a single WAV using ``fmt``."""
    try:
        with io.BytesIO() as target:
            with wave.open(target, "wb") as writer:
                writer.setnchannels(fmt.num_channels)
                writer.setsampwidth(fmt.sample_width)
                writer.setframerate(fmt.sample_rate)
                for buf in buffers:
                    writer.writeframes(_samples_to_bytes(buf.samples, fmt.sample_width))
            return target.getvalue()
    except (wave.Error, struct.error, OverflowError) as e:
        raise EncodingFailureError(f"failed to encode WAV: {e}") from e


def concat_wav_bytes(wav_bytes: Sequence[bytes]) -> bytes:
    """Concatenate WAV buffers into one WAV buffer, preserving input order.

    Every input must share the first input's sample rate and channel count.
    Bit depth is not compared; the output uses the bit depth of the last
    input, with samples written as integers at that width.

    Raises:
        InvalidFormatError: an input is not a readable PCM WAV.
        FormatMismatchError: sample rate or channel count differs from the first input.
        EmptyInputError: no inputs were given.
        EncodingFailureError: the combined audio could not be written.
    """
    combined: List[PCMFrameBuffer] = []
    reference: AudioFormat | None = None
    bit_depth = 0

    for index, data in enumerate(wav_bytes):
        try:
            buf = decode_wav(data)
        except InvalidFormatError as e:
            raise InvalidFormatError(f"input {index}: {e}") from e
        log.debug("decoded wav input", extra={
            "index": index, "sample_rate": buf.format.sample_rate,
            "channels": buf.format.num_channels, "bit_depth": buf.format.bit_depth,
            "byte_rate": buf.format.byte_rate,
            "frames": buf.num_frames,
        })

        if reference is None:
            reference = buf.format
        elif not reference.same_layout(buf.format):
            raise FormatMismatchError(
                f"input {index}: {buf.format.sample_rate} Hz/{buf.format.num_channels} ch "
                f"does not match {reference.sample_rate} Hz/{reference.num_channels} ch"
            )

        combined.append(buf)
        bit_depth = buf.format.bit_depth

    if reference is None:
        raise EmptyInputError("no WAV inputs to concatenate")

    out_format = AudioFormat(reference.sample_rate, reference.num_channels, bit_depth)
    result = encode_wav(combined, out_format)
    log.info("concatenated WAV inputs", extra={
        "count": len(combined), "frames": sum(b.num_frames for b in combined), "bytes": len(result),
    })
    return result


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return -quotient if value < 0 else quotient


def pcm_to_wav(pcm_bytes: bytes, sample_rate: int, num_channels: int, bit_depth: int) -> bytes:
    """Prepend a canonical 44-byte PCM WAV header to raw PCM bytes.

    sample_rate: e.g. 16000, 44100
    num_channels: 1 mono, 2 stereo
    bit_depth: bits per sample, usually 16

    No parameter validation is done; each header field holds its value
    truncated to the field width. The payload is copied verbatim.
    """
    file_size = WAV_HEADER_SIZE + len(pcm_bytes)
    header = _HEADER_STRUCT.pack(
        b"RIFF",
        (file_size - 8) & 0xFFFFFFFF,
        b"WAVE",
        b"fmt ",
        16,
        PCM_FORMAT_TAG,
        num_channels & 0xFFFF,
        sample_rate & 0xFFFFFFFF,
        _trunc_div(sample_rate * num_channels * bit_depth, 8) & 0xFFFFFFFF,
        _trunc_div(num_channels * bit_depth, 8) & 0xFFFF,
        bit_depth & 0xFFFF,
        b"data",
        len(pcm_bytes) & 0xFFFFFFFF,
    )
    return header + bytes(pcm_bytes)
