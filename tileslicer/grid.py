from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .errors import InvalidDimensions


@dataclass(frozen=True)
class GridSpec:
    cols: int
    rows: int
    tile_size: int

    @property
    def total(self) -> int:
        return self.cols * self.rows

    @property
    def pixel_size(self) -> tuple[int, int]:
        # Area actually covered by whole tiles; anything right/below of it is dropped.
        return self.cols * self.tile_size, self.rows * self.tile_size

    def origin(self, col: int, row: int) -> tuple[int, int]:
        return col * self.tile_size, row * self.tile_size

    def cells(self) -> Iterator[tuple[int, int]]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield col, row


def partition_grid(width: int, height: int, tile_size: int) -> GridSpec:
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive, got {tile_size}")
    cols = width // tile_size
    rows = height // tile_size
    if cols * rows == 0:
        raise InvalidDimensions(width, height, tile_size)
    return GridSpec(cols=cols, rows=rows, tile_size=tile_size)
