"""BYTESONG WAV output — buffer rendered samples, encode with soundfile."""

from __future__ import annotations

import io
from enum import IntEnum
from pathlib import Path

import numpy as np
import soundfile as sf
from numpy.typing import NDArray


class ChannelMode(IntEnum):
    MONO = 1
    STEREO = 2

    @classmethod
    def parse(cls, value: str | int) -> ChannelMode:
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown channel mode: {value}. Use: mono, stereo") from None
        return cls(value)


class WaveWriter:
    """Collects mono samples, exposes them as a 16-bit PCM WAV container.

    Stereo output duplicates the mono signal on both channels.
    """

    def __init__(self, mode: ChannelMode = ChannelMode.STEREO, sampling_rate: int = 22000) -> None:
        self.mode = ChannelMode(mode)
        self.sampling_rate = sampling_rate
        self._chunks: list[NDArray[np.float64]] = []

    def write(self, samples: NDArray[np.float64]) -> None:
        data = np.asarray(samples, dtype=np.float64)
        if data.ndim != 1:
            raise ValueError(f"expected mono samples, got shape {data.shape}")
        self._chunks.append(np.clip(data, -1.0, 1.0))

    @property
    def frames(self) -> int:
        return sum(len(c) for c in self._chunks)

    def samples(self) -> NDArray[np.float64]:
        audio = np.concatenate(self._chunks) if self._chunks else np.zeros(0, dtype=np.float64)
        if self.mode == ChannelMode.STEREO:
            return np.column_stack([audio, audio])
        return audio

    def reader(self) -> io.BytesIO:
        """Encoded WAV bytes, positioned at the start."""
        buf = io.BytesIO()
        sf.write(buf, self.samples(), self.sampling_rate, format="WAV", subtype="PCM_16")
        buf.seek(0)
        return buf

    def save(self, path: str | Path) -> Path:
        """Write the WAV container to disk."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(self.reader().getvalue())
        return p
