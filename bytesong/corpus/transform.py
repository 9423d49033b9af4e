"""BYTESONG corpus primitives — rank inversion and move-to-front decoding.

Two in-place building blocks shared by the synthetic stream generators:

  - invert(): counting-sort ranks every byte occurrence, then walks the
    cycles of next(k) = offset[value(k)] + rank(k) and writes each visited
    byte into the buffer from the last slot backward.
  - MoveToFrontDecoder: array-backed recency list (front index + next array)
    that maps move-to-front indices back to byte values.

No primary index is kept, so invert() scrambles structure; it is not an
inverse BWT.
"""

from __future__ import annotations

from collections.abc import Iterable

ALPHABET_SIZE = 256
_CONSUMED = -1


# ── Rank Permutation ─────────────────────────────────────


def occurrence_ranks(buffer: bytes | bytearray | memoryview) -> tuple[list[int], list[int]]:
    """Count-sort the buffer's byte occurrences.

    Returns:
        (ranks, offsets): ranks[k] is how many times buffer[k] appeared
        before position k; offsets[v] is the number of bytes strictly
        smaller than v.
    """
    counts = [0] * ALPHABET_SIZE
    ranks = [0] * len(buffer)
    for k, value in enumerate(buffer):
        ranks[k] = counts[value]
        counts[value] += 1

    offsets = [0] * ALPHABET_SIZE
    total = 0
    for value, count in enumerate(counts):
        offsets[value] = total
        total += count

    return ranks, offsets


def invert(buffer: bytearray | memoryview) -> None:
    """Permute a mutable byte buffer in place by following its rank cycles.

    The multiset of byte values is preserved; a buffer of one repeated value
    is returned unchanged. Empty buffers are a no-op.
    """
    if isinstance(buffer, memoryview) and buffer.readonly:
        raise TypeError("invert() needs a writable buffer")
    if not isinstance(buffer, (bytearray, memoryview)):
        raise TypeError(f"invert() needs a bytearray, got {type(buffer).__name__}")

    length = len(buffer)
    if length == 0:
        return

    source = bytes(buffer)
    ranks, offsets = occurrence_ranks(source)

    cursor = length - 1
    for start in range(length):
        position = start
        while ranks[position] != _CONSUMED:
            value = source[position]
            buffer[cursor] = value
            cursor -= 1
            following = offsets[value] + ranks[position]
            ranks[position] = _CONSUMED
            position = following


# ── Move-To-Front ────────────────────────────────────────


class MoveToFrontDecoder:
    """Recency list over the 256 byte values.

    Node i initially links to node i + 1 (node 255 wraps to node 0) and
    node 0 is the front, so decode(i) starts out as the identity.
    """

    def __init__(self) -> None:
        self._next = [(node + 1) % ALPHABET_SIZE for node in range(ALPHABET_SIZE)]
        self._front = 0

    @property
    def front(self) -> int:
        return self._front

    def decode(self, index: int) -> int:
        """Return the value `index` steps behind the front and move it there."""
        if not 0 <= index < ALPHABET_SIZE:
            raise ValueError(f"move-to-front index out of range: {index}")

        previous = 0
        node = self._front
        for _ in range(index):
            previous, node = node, self._next[node]

        if index:
            self._next[previous] = self._next[node]
            self._next[node] = self._front
            self._front = node

        return node

    def decode_all(self, indices: Iterable[int]) -> bytearray:
        """Decode a whole index sequence in order."""
        return bytearray(self.decode(index) for index in indices)

    def order(self, count: int = ALPHABET_SIZE) -> list[int]:
        """The first `count` values in current recency order."""
        values = []
        node = self._front
        for _ in range(count):
            values.append(node)
            node = self._next[node]
        return values
