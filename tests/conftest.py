from __future__ import annotations

import numpy as np
import pytest

from tileslicer.models import SourceImage


def solid_tile(size: int, rgba: tuple[int, int, int, int]) -> np.ndarray:
    tile = np.empty((size, size, 4), dtype=np.uint8)
    tile[:, :] = rgba
    return tile


def tile_with_coverage(size: int, opaque_pixels: int, alpha: int = 255) -> np.ndarray:
    tile = np.zeros((size, size, 4), dtype=np.uint8)
    flat = tile.reshape(-1, 4)
    flat[:opaque_pixels] = (30, 120, 60, alpha)
    return tile


def compose(rows: list[list[np.ndarray]], pad_right: int = 0, pad_bottom: int = 0) -> SourceImage:
    """Stitch tile buffers into one source image, optionally with ragged edges."""
    pixels = np.concatenate([np.concatenate(r, axis=1) for r in rows], axis=0)
    if pad_right or pad_bottom:
        pixels = np.pad(pixels, ((0, pad_bottom), (0, pad_right), (0, 0)), constant_values=200)
    return SourceImage(pixels)


def distinct_tiles(count: int, size: int) -> list[np.ndarray]:
    return [solid_tile(size, (i * 20 % 256, 255 - i, i, 255)) for i in range(count)]


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
