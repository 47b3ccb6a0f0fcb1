from __future__ import annotations

import numpy as np

from .errors import SurfaceAllocationFailure
from .models import SourceImage


def allocate_surface(width: int, height: int) -> np.ndarray:
    """Zeroed (fully transparent) RGBA buffer of the given pixel size."""
    try:
        return np.zeros((height, width, 4), dtype=np.uint8)
    except (MemoryError, ValueError) as exc:
        raise SurfaceAllocationFailure(f"Cannot allocate a {width}x{height} RGBA surface: {exc}") from exc


class TileRasterizer:
    """Copies grid-aligned tile blocks out of a source image.

    One scratch buffer is owned per rasterizer, so a single pipeline run reuses
    the same memory for every cell it visits.
    """

    def __init__(self, source: SourceImage, tile_size: int) -> None:
        self.source = source
        self.tile_size = tile_size
        self.cols = source.width // tile_size
        self.rows = source.height // tile_size
        self._scratch = allocate_surface(tile_size, tile_size)

    def _box(self, col: int, row: int) -> tuple[int, int, int, int]:
        if not (0 <= col < self.cols and 0 <= row < self.rows):
            raise IndexError(f"Cell ({col}, {row}) outside {self.cols}x{self.rows} grid")
        x0 = col * self.tile_size
        y0 = row * self.tile_size
        return x0, y0, x0 + self.tile_size, y0 + self.tile_size

    def extract_into(self, col: int, row: int) -> np.ndarray:
        # The returned array is the scratch buffer: overwritten by the next call.
        x0, y0, x1, y1 = self._box(col, row)
        np.copyto(self._scratch, self.source.pixels[y0:y1, x0:x1])
        return self._scratch

    def extract(self, col: int, row: int) -> np.ndarray:
        x0, y0, x1, y1 = self._box(col, row)
        return self.source.pixels[y0:y1, x0:x1].copy()
