"""
Audio value types shared by the codec, playback and view layers.
"""

from dataclasses import dataclass, field

import numpy as np


@dataclass
class FloatAudioBuffer:
    """Decoded audio: one float32 sample array per channel."""
    sample_rate: int
    channels: list[np.ndarray] = field(default_factory=list)

    @property
    def channel_count(self) -> int:
        return len(self.channels)

    @property
    def frame_count(self) -> int:
        return len(self.channels[0]) if self.channels else 0

    @property
    def duration_seconds(self) -> float:
        if not self.sample_rate:
            return 0.0
        return self.frame_count / self.sample_rate


@dataclass(frozen=True)
class WavHeader:
    """Fields of a canonical 44-byte PCM WAV header."""
    sample_rate: int
    channel_count: int
    bits_per_sample: int
    data_length: int
    chunk_size: int
    byte_rate: int
    block_align: int
    audio_format: int = 1
