from __future__ import annotations

import io
import wave
from typing import Sequence

import pytest


def make_wav(samples: Sequence[int], sample_rate: int = 16000, channels: int = 1, sample_width: int = 2) -> bytes:
    """Build a WAV buffer with the stdlib writer from interleaved integer samples."""
    signed = sample_width > 1
    raw = b"".join(int(s).to_bytes(sample_width, "little", signed=signed) for s in samples)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(sample_rate)
        wf.writeframes(raw)
    return buf.getvalue()


def read_wav(data: bytes):
    """Return (params, raw frame bytes) using the stdlib reader."""
    with wave.open(io.BytesIO(data), "rb") as wf:
        return wf.getparams(), wf.readframes(wf.getnframes())


@pytest.fixture
def wav_factory():
    return make_wav
