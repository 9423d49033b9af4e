"""BYTESONG synthetic corpora — seeded byte streams for hashing into songs.

Three generators, each owning its own numpy Generator:

  - RandReader: bounded uniform noise, produced lazily per read.
  - StructuredReader: a 4-byte block tiled across the output, re-scrambled
    with invert() every time it has been copied out.
  - HoloReader: folded Gaussian indices decoded through move-to-front,
    then one invert() pass over the whole buffer.
"""

from __future__ import annotations

import io

import numpy as np
import structlog

from bytesong.corpus.transform import MoveToFrontDecoder, invert

logger = structlog.get_logger()

BLOCK_SIZE = 4
GAUSSIAN_SCALE = 8.0
GAUSSIAN_CEILING = 256.0

_SEED_MASK = (1 << 64) - 1


def make_rng(seed: int) -> np.random.Generator:
    """Seeded generator for one stream; negative seeds fold into uint64."""
    return np.random.default_rng(int(seed) & _SEED_MASK)


def _check_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise ValueError(f"size must be an integer, got {size!r}")
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    return int(size)


# ── Bounded Random ───────────────────────────────────────


class RandReader(io.RawIOBase):
    """Finite stream of uniform random bytes.

    The read that hands out the last byte of the budget also flips
    `exhausted`; callers must keep the bytes returned by that read.
    Reads after that return b"".
    """

    def __init__(self, size: int, seed: int) -> None:
        super().__init__()
        self.size = _check_size(size)
        self.remaining = self.size
        self.exhausted = False
        self._rng = make_rng(seed)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        view = memoryview(buffer).cast("B")
        n = min(len(view), self.remaining)
        if n == 0:
            return 0

        view[:n] = self._rng.integers(0, 256, size=n, dtype=np.uint8).tobytes()
        self.remaining -= n
        if self.remaining == 0:
            self.exhausted = True
        return n


# ── Tiled Structured ─────────────────────────────────────


def tile_eras(block: bytes | bytearray, size: int) -> bytes:
    """Lay out `size` bytes of eras: block, invert(block), invert(invert(block)), ...

    The era map is deterministic over a 4-byte state, so the sequence
    always falls into a short cycle; once a block repeats, the cycle is
    tiled instead of re-inverted.
    """
    n_eras = -(-size // len(block))
    eras: list[bytes] = []
    seen: dict[bytes, int] = {}
    current = bytearray(block)

    while len(eras) < n_eras:
        key = bytes(current)
        if key in seen:
            start = seen[key]
            cycle = eras[start:]
            logger.debug("corpus.structured.period", lead_in=start, period=len(cycle))
            missing = n_eras - len(eras)
            eras.extend(cycle[i % len(cycle)] for i in range(missing))
            break
        seen[key] = len(eras)
        eras.append(key)
        invert(current)

    return b"".join(eras)[:size]


class StructuredReader(io.BytesIO):
    """Self-similar corpus of slowly evolving 4-byte eras."""

    def __init__(self, size: int, seed: int) -> None:
        size = _check_size(size)
        rng = make_rng(seed)
        self.seed_block = rng.integers(0, 256, size=BLOCK_SIZE, dtype=np.uint8).tobytes()
        super().__init__(tile_eras(self.seed_block, size))


# ── Gaussian Holo ────────────────────────────────────────


def gaussian_indices(rng: np.random.Generator, size: int) -> np.ndarray:
    """|N(0, 1) * 8| clamped to 256 and truncated to a byte (256 wraps to 0)."""
    samples = np.abs(rng.standard_normal(size) * GAUSSIAN_SCALE)
    samples = np.minimum(samples, GAUSSIAN_CEILING)
    return (samples.astype(np.int64) & 0xFF).astype(np.uint8)


class HoloReader(io.BytesIO):
    """Recency-biased corpus: Gaussian MTF indices, decoded and scrambled."""

    def __init__(self, size: int, seed: int) -> None:
        size = _check_size(size)
        rng = make_rng(seed)
        indices = gaussian_indices(rng, size)

        out = MoveToFrontDecoder().decode_all(indices.tolist())
        invert(out)

        super().__init__(bytes(out))


# ── Factory ──────────────────────────────────────────────

GENERATORS: dict[str, type[io.IOBase]] = {
    "random": RandReader,
    "structured": StructuredReader,
    "holo": HoloReader,
}


def open_generator(kind: str, size: int, seed: int) -> io.IOBase:
    """Build one of the named corpus streams."""
    if kind not in GENERATORS:
        raise ValueError(f"Unknown generator: {kind}. Use: {', '.join(GENERATORS)}")
    return GENERATORS[kind](size, seed)
