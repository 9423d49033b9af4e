"""BYTESONG Music Theory — scales, scale degrees, and pitch conversion.

Turns the small integers a digest produces into playable pitches:
a scale degree counted from a root note, spread over several octaves.
"""

from __future__ import annotations

# ── Scale Constants ──────────────────────────────────────

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Intervals from root for each scale type (insertion order is the digest order)
SCALE_INTERVALS: dict[str, list[int]] = {
    "major": [0, 2, 4, 5, 7, 9, 11],
    "minor": [0, 2, 3, 5, 7, 8, 10],
    "dorian": [0, 2, 3, 5, 7, 9, 10],
    "mixolydian": [0, 2, 4, 5, 7, 9, 10],
    "phrygian": [0, 1, 3, 5, 7, 8, 10],
    "lydian": [0, 2, 4, 6, 7, 9, 11],
    "harmonic_minor": [0, 2, 3, 5, 7, 8, 11],
    "pentatonic_major": [0, 2, 4, 7, 9],
    "pentatonic_minor": [0, 3, 5, 7, 10],
    "blues": [0, 3, 5, 6, 7, 10],
}

SCALE_NAMES: list[str] = list(SCALE_INTERVALS)


# ── Conversions ──────────────────────────────────────────


def note_to_freq(midi_note: int) -> float:
    """Convert MIDI note number to frequency in Hz."""
    return 440.0 * (2.0 ** ((midi_note - 69) / 12.0))


def midi_to_name(midi_note: int) -> str:
    """Convert MIDI number to a note name like 'A2'."""
    octave = midi_note // 12 - 1
    return f"{NOTE_NAMES[midi_note % 12]}{octave}"


def degree_to_midi(root: int, scale: str, degree: int) -> int:
    """MIDI note of a scale degree counted upward from `root`.

    Degrees past the end of the scale continue into the next octave,
    e.g. degree 7 of a major scale is the root an octave up.
    """
    intervals = SCALE_INTERVALS.get(scale, SCALE_INTERVALS["minor"])
    octave, step = divmod(degree, len(intervals))
    return root + 12 * octave + intervals[step]
