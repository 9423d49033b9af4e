"""GRID — Composition layer.

- theory: scales, scale degrees, pitch conversion
- song: digest a byte source into a fixed-shape Song
"""

from bytesong.grid.song import Hasher, Note, Song, song_from_digest

__all__ = [
    "Hasher",
    "Note",
    "Song",
    "song_from_digest",
]
