"""Environment-driven settings for mediatools."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Knobs read once from the environment.

    Only the frame extractor consumes these; the WAV helpers take
    all of their parameters explicitly.
    """

    # Transcoder executable, resolved through PATH when not absolute.
    ffmpeg_bin: str = field(default_factory=lambda: os.getenv("MEDIATOOLS_FFMPEG_BIN", "ffmpeg"))
    frame_rate: int = field(default_factory=lambda: _env_int("MEDIATOOLS_FRAME_RATE", 2))
    # ffmpeg -qscale:v, 2..31, lower is higher quality.
    jpeg_quality: int = field(default_factory=lambda: _env_int("MEDIATOOLS_JPEG_QUALITY", 2))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance to avoid repeated environment reads."""

    return Settings()
