"""Tests for BYTESONG corpus primitives — rank inversion and move-to-front."""

from __future__ import annotations

import random

import pytest

from bytesong.corpus.transform import MoveToFrontDecoder, invert, occurrence_ranks


# ── Rank tables ──────────────────────────────────────────


def test_occurrence_ranks_count_per_value() -> None:
    """Ranks restart at 0 for each byte value; offsets are prefix sums."""
    ranks, offsets = occurrence_ranks(bytes([5, 1, 5, 5, 1]))

    assert ranks == [0, 0, 1, 2, 1]
    assert offsets[1] == 0
    assert offsets[5] == 2
    assert offsets[6] == 5
    assert offsets[255] == 5


def test_offsets_monotonic_and_bounded() -> None:
    """Offset table never decreases and tops out at the buffer length."""
    data = bytes(random.Random(3).randrange(256) for _ in range(500))
    _, offsets = occurrence_ranks(data)

    assert all(a <= b for a, b in zip(offsets, offsets[1:]))
    assert offsets[-1] <= len(data)
    assert len(offsets) == 256


# ── invert ───────────────────────────────────────────────


def test_invert_sorted_distinct_reverses() -> None:
    """Every position of an ascending distinct block is a 1-cycle."""
    buf = bytearray([0, 1, 2, 3])
    invert(buf)
    assert buf == bytearray([3, 2, 1, 0])


def test_invert_follows_cycles() -> None:
    """Two 2-cycles, written from the last slot backward."""
    buf = bytearray([3, 2, 1, 0])
    invert(buf)
    assert buf == bytearray([1, 2, 0, 3])


def test_invert_with_repeated_values() -> None:
    """Repeated values are ranked by occurrence."""
    buf = bytearray([1, 0, 1, 0])
    invert(buf)
    assert buf == bytearray([0, 0, 1, 1])

    invert(buf)
    assert buf == bytearray([1, 1, 0, 0])


@pytest.mark.parametrize("length", [1, 2, 7, 64, 1000])
@pytest.mark.parametrize("value", [0, 42, 255])
def test_invert_identical_bytes_unchanged(length: int, value: int) -> None:
    """A run of one value is a fixed point."""
    buf = bytearray([value] * length)
    invert(buf)
    assert buf == bytearray([value] * length)


@pytest.mark.parametrize("seed", range(8))
def test_invert_preserves_multiset(seed: int) -> None:
    """Output is a permutation of the input bytes."""
    rnd = random.Random(seed)
    length = rnd.randrange(1, 2000)
    original = bytes(rnd.randrange(256) for _ in range(length))

    buf = bytearray(original)
    invert(buf)

    assert len(buf) == length
    assert sorted(buf) == sorted(original)


def test_invert_low_alphabet_preserves_multiset() -> None:
    """Long cycles through heavily repeated values stay a bijection."""
    rnd = random.Random(11)
    original = bytes(rnd.choice(b"ab") for _ in range(4096))

    buf = bytearray(original)
    invert(buf)

    assert buf.count(b"a") == original.count(b"a")
    assert buf.count(b"b") == original.count(b"b")


def test_invert_empty_is_noop() -> None:
    """Zero-length buffers are left alone."""
    buf = bytearray()
    invert(buf)
    assert buf == bytearray()


def test_invert_writable_memoryview() -> None:
    """Slices of a larger buffer can be inverted through a memoryview."""
    backing = bytearray([9, 0, 1, 2, 3, 9])
    invert(memoryview(backing)[1:5])
    assert backing == bytearray([9, 3, 2, 1, 0, 9])


def test_invert_rejects_immutable() -> None:
    """bytes and read-only views cannot be permuted in place."""
    with pytest.raises(TypeError):
        invert(b"\x01\x02")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        invert(memoryview(b"\x01\x02"))


# ── MoveToFrontDecoder ───────────────────────────────────


def test_decode_zero_is_stable() -> None:
    """decode(0) keeps returning the front."""
    mtf = MoveToFrontDecoder()
    assert [mtf.decode(0) for _ in range(5)] == [0] * 5

    mtf.decode(17)
    assert [mtf.decode(0) for _ in range(5)] == [17] * 5


def test_decode_moves_to_front() -> None:
    """A decoded value becomes the new front; the old front shifts back."""
    mtf = MoveToFrontDecoder()

    assert mtf.decode(3) == 3
    assert mtf.order(6) == [3, 0, 1, 2, 4, 5]
    assert mtf.decode(0) == 3
    assert mtf.decode(1) == 0
    assert mtf.decode(1) == 3
    assert mtf.order(4) == [3, 0, 1, 2]


def test_fresh_decoder_is_identity_order() -> None:
    """Before any decode, recency order is ascending."""
    assert MoveToFrontDecoder().order() == list(range(256))


def test_decode_last_node_keeps_all_values() -> None:
    """Moving the tail to the front keeps the list a permutation."""
    mtf = MoveToFrontDecoder()
    assert mtf.decode(255) == 255
    assert mtf.front == 255

    order = mtf.order()
    assert order[0] == 255
    assert sorted(order) == list(range(256))


def test_decode_stays_within_introduced_symbols() -> None:
    """Indices bounded by k only ever reach values 0..k."""
    rnd = random.Random(5)
    for bound in (0, 1, 4, 20):
        mtf = MoveToFrontDecoder()
        values = [mtf.decode(rnd.randint(0, bound)) for _ in range(300)]
        assert max(values) <= bound


def test_order_remains_permutation_after_many_decodes() -> None:
    """Arbitrary splices never lose or duplicate a node."""
    rnd = random.Random(9)
    mtf = MoveToFrontDecoder()
    for _ in range(2000):
        mtf.decode(rnd.randrange(256))
    assert sorted(mtf.order()) == list(range(256))


def test_decode_all_matches_sequential_decode() -> None:
    """decode_all is decode() applied in order."""
    indices = [0, 5, 5, 0, 1, 200, 3, 0]
    one = MoveToFrontDecoder()
    expected = bytearray(one.decode(i) for i in indices)

    assert MoveToFrontDecoder().decode_all(indices) == expected


@pytest.mark.parametrize("index", [-1, 256, 1000])
def test_decode_rejects_out_of_range(index: int) -> None:
    """Indices outside the alphabet are a caller error."""
    with pytest.raises(ValueError, match="out of range"):
        MoveToFrontDecoder().decode(index)
