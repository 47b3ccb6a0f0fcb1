import numpy as np

from conftest import distinct_tiles, solid_tile
from tileslicer.dedup import Deduplicator, fingerprint


def test_fingerprint_identical_bytes_match(rng):
    a = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
    assert fingerprint(a) == fingerprint(a.copy())


def test_fingerprint_single_byte_difference(rng):
    a = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
    b = a.copy()
    b[7, 3, 3] ^= 1
    assert fingerprint(a) != fingerprint(b)


def test_fingerprint_sees_rgb_under_zero_alpha():
    a = solid_tile(8, (0, 0, 0, 0))
    b = solid_tile(8, (255, 0, 0, 0))
    assert fingerprint(a) != fingerprint(b)


def test_fingerprint_ignores_memory_layout(rng):
    a = rng.integers(0, 256, size=(8, 8, 4), dtype=np.uint8)
    strided = np.asfortranarray(a)
    assert fingerprint(a) == fingerprint(strided)


def test_fingerprint_includes_shape():
    flat = np.zeros((4, 16, 4), dtype=np.uint8)
    square = np.zeros((8, 8, 4), dtype=np.uint8)
    assert fingerprint(flat) != fingerprint(square)


def test_first_seen_order_and_ids():
    a, b, c = distinct_tiles(3, 4)
    d = Deduplicator()
    assert d.offer(b) == 0
    assert d.offer(a) == 1
    assert d.offer(b) is None
    assert d.offer(c) == 2
    assert d.offer(a) is None
    assert len(d) == 3
    assert d.seen == 5
    assert d.duplicates == 2
    for kept, expected in zip(d.uniques, [b, a, c]):
        np.testing.assert_array_equal(kept, expected)


def test_retained_buffer_is_a_copy():
    scratch = solid_tile(4, (1, 2, 3, 255))
    d = Deduplicator()
    d.offer(scratch)
    scratch[:] = 0
    assert d.uniques[0][0, 0, 0] == 1
    assert d.offer(scratch) == 1
