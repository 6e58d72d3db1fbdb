from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class AudioFormat:
    sample_rate: int
    num_channels: int
    bit_depth: int

    @property
    def sample_width(self) -> int:
        return self.bit_depth // 8

    @property
    def block_align(self) -> int:
        return self.num_channels * self.bit_depth // 8

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.num_channels * self.bit_depth // 8

    def same_layout(self, other: "AudioFormat") -> bool:
        """True when sample rate and channel count match; bit depth is ignored."""
        return (self.sample_rate, self.num_channels) == (other.sample_rate, other.num_channels)


@dataclass
class PCMFrameBuffer:
    """Decoded interleaved integer samples and the format they came from."""

    format: AudioFormat
    samples: np.ndarray

    @property
    def num_frames(self) -> int:
        if self.format.num_channels <= 0:
            return 0
        return len(self.samples) // self.format.num_channels
