"""BYTESONG Plucked-String Synthesis — Karplus-Strong rendering of a Song.

A string is a delay line one period long, filled with a noise burst.
Each pass around the loop averages neighbouring samples and scales them
by `decay`, so high partials die first and the tone settles like a
plucked string. Pure numpy, one vector op per period.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from bytesong.grid.song import Song
from bytesong.grid.theory import note_to_freq

DEFAULT_SR = 22000
RING_S = 0.6  # how long a pluck keeps sounding past its note length
FADE_S = 0.05
HEADROOM = 0.9


class SampleSink(Protocol):
    def write(self, samples: NDArray[np.float64]) -> None: ...


# ── String Model ─────────────────────────────────────────


def pluck(
    freq_hz: float,
    duration_s: float,
    sr: int = DEFAULT_SR,
    decay: float = 0.996,
    rng: np.random.Generator | None = None,
) -> NDArray[np.float64]:
    """Render one plucked note.

    Args:
        freq_hz: Pitch of the string.
        duration_s: Length of the rendered audio.
        sr: Sample rate.
        decay: Loss per trip around the loop (0-1, closer to 1 rings longer).
        rng: Source of the excitation burst; seed it for repeatable output.

    Returns:
        Mono audio, peak at most 1.0.
    """
    n = int(duration_s * sr)
    if n <= 0:
        return np.zeros(0, dtype=np.float64)

    rng = rng or np.random.default_rng(0)
    period = max(2, int(round(sr / freq_hz)))
    line = rng.uniform(-1.0, 1.0, period)
    line -= line.mean()  # no DC offset in the burst
    peak = np.max(np.abs(line))
    if peak > 0:
        line /= peak

    out = np.empty(n, dtype=np.float64)
    for start in range(0, n, period):
        take = min(period, n - start)
        out[start : start + take] = line[:take]
        line = decay * 0.5 * (line + np.roll(line, -1))

    return out


# ── Song Rendering ───────────────────────────────────────


class KarplusSong:
    """Plays every note of a Song on a plucked string."""

    def __init__(self, song: Song, sampling_rate: int = DEFAULT_SR) -> None:
        if sampling_rate <= 0:
            raise ValueError(f"sampling rate must be positive, got {sampling_rate}")
        self.song = song
        self.sampling_rate = sampling_rate

    def _rng(self) -> np.random.Generator:
        seed = int.from_bytes(bytes.fromhex(self.song.digest)[:8], "little")
        return np.random.default_rng(seed)

    def render(self) -> NDArray[np.float64]:
        """Mix all notes into one mono buffer."""
        sr = self.sampling_rate
        spb = self.song.seconds_per_beat
        total = int((self.song.duration_s + RING_S) * sr) + 1
        mix = np.zeros(total, dtype=np.float64)
        rng = self._rng()

        t = 0.0
        for note in self.song.notes:
            length_s = note.beats * spb
            pitch = self.song.pitch(note)
            if pitch is not None:
                start = int(t * sr)
                tone = pluck(
                    note_to_freq(pitch),
                    length_s + RING_S,
                    sr,
                    decay=self.song.decay,
                    rng=rng,
                )
                end = min(start + len(tone), total)
                mix[start:end] += note.velocity * tone[: end - start]
            t += length_s

        fade = min(int(FADE_S * sr), total)
        if fade > 0:
            mix[-fade:] *= np.linspace(1.0, 0.0, fade)

        peak = np.max(np.abs(mix)) if len(mix) else 0.0
        if peak > 0:
            mix = mix / peak * HEADROOM
        return mix

    def sound(self, sink: SampleSink) -> None:
        """Render the song and hand the samples to `sink`."""
        sink.write(self.render())
