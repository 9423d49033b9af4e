"""BYTESONG Song Digest — hash a byte stream into a fixed-shape score.

The whole input is folded into a 64-byte BLAKE2b digest; every digest byte
then has a job:

  byte 0      tempo (90-217 BPM)
  byte 1      root note (A2..G#3)
  byte 2      scale
  byte 3      string decay (how long each pluck rings)
  bytes 4-63  one note each

Note byte layout (LSB first):
  bits 0-3  scale degree 0-14 over two octaves, 15 = rest
  bits 4-5  length: 1-4 sixteenths
  bits 6-7  velocity step
"""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass, field
from typing import Any, Protocol

from bytesong.grid.theory import SCALE_NAMES, degree_to_midi, midi_to_name

DIGEST_SIZE = 64
HEADER_SIZE = 4
NOTE_COUNT = DIGEST_SIZE - HEADER_SIZE
CHUNK_SIZE = 64 * 1024

REST = 0x0F
MIN_TEMPO = 90
BASE_ROOT = 45  # A2
MIN_VELOCITY = 0.45
MIN_DECAY = 0.990
DECAY_RANGE = 0.008


class ByteSource(Protocol):
    def read(self, size: int = -1, /) -> bytes: ...


# ── Data Types ───────────────────────────────────────────


@dataclass
class Note:
    """One step of the score."""

    degree: int | None  # scale degree, None for a rest
    beats: float  # 0.25 - 1.0
    velocity: float = 1.0  # 0-1

    @property
    def is_rest(self) -> bool:
        return self.degree is None


@dataclass
class Song:
    """Score derived from a digest."""

    digest: str
    tempo_bpm: int
    root: int  # MIDI note
    scale: str
    decay: float  # Karplus-Strong loop loss, 0-1
    notes: list[Note] = field(default_factory=list)

    @property
    def seconds_per_beat(self) -> float:
        return 60.0 / self.tempo_bpm

    @property
    def duration_s(self) -> float:
        return sum(n.beats for n in self.notes) * self.seconds_per_beat

    def pitch(self, note: Note) -> int | None:
        """MIDI pitch of a note in this song's key, None for rests."""
        if note.degree is None:
            return None
        return degree_to_midi(self.root, self.scale, note.degree)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["key"] = f"{midi_to_name(self.root)} {self.scale}"
        data["duration_s"] = round(self.duration_s, 3)
        return data


# ── Decoding ─────────────────────────────────────────────


def note_from_byte(value: int) -> Note:
    degree_bits = value & 0x0F
    beats = (((value >> 4) & 0x03) + 1) * 0.25
    velocity = MIN_VELOCITY + ((value >> 6) & 0x03) * (1.0 - MIN_VELOCITY) / 3
    return Note(
        degree=None if degree_bits == REST else degree_bits,
        beats=beats,
        velocity=round(velocity, 4),
    )


def song_from_digest(digest: bytes) -> Song:
    """Interpret a 64-byte digest as a Song."""
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"digest must be {DIGEST_SIZE} bytes, got {len(digest)}")

    return Song(
        digest=digest.hex(),
        tempo_bpm=MIN_TEMPO + digest[0] % 128,
        root=BASE_ROOT + digest[1] % 12,
        scale=SCALE_NAMES[digest[2] % len(SCALE_NAMES)],
        decay=round(MIN_DECAY + digest[3] / 255 * DECAY_RANGE, 6),
        notes=[note_from_byte(b) for b in digest[HEADER_SIZE:]],
    )


class Hasher:
    """Digest a byte source into a Song.

    Accepts anything with read(n): open files, BytesIO, or the corpus
    streams. Reads until an empty chunk, so a bounded stream's final
    bytes are hashed before its end is seen.
    """

    def __init__(self, source: ByteSource, chunk_size: int = CHUNK_SIZE) -> None:
        self.source = source
        self.chunk_size = chunk_size
        self.bytes_read = 0

    def digest(self) -> bytes:
        h = hashlib.blake2b(digest_size=DIGEST_SIZE)
        while True:
            chunk = self.source.read(self.chunk_size)
            if not chunk:
                break
            h.update(chunk)
            self.bytes_read += len(chunk)
        return h.digest()

    def hash(self) -> Song:
        return song_from_digest(self.digest())
