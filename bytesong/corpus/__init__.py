"""CORPUS — Synthetic byte sources.

Seeded, deterministic byte streams that stand in for real files when
hashing into a song:
- transform: rank inversion (invert) + move-to-front decoder
- streams: RandReader, StructuredReader, HoloReader
"""

from bytesong.corpus.streams import (
    GENERATORS,
    HoloReader,
    RandReader,
    StructuredReader,
    open_generator,
)
from bytesong.corpus.transform import MoveToFrontDecoder, invert

__all__ = [
    "GENERATORS",
    "HoloReader",
    "RandReader",
    "StructuredReader",
    "open_generator",
    "MoveToFrontDecoder",
    "invert",
]
