from __future__ import annotations

import io
import math

import numpy as np
from PIL import Image

from .grid import GridSpec
from .models import Tile
from .raster import allocate_surface


class AtlasPacker:
    """Fills a fixed-column grid of tile slots, left to right then top to bottom.

    Slot ``i`` lands at column ``i % columns`` and row ``i // columns``.  With
    ``columns`` equal to the source grid width this is the identity layout, so
    both processing modes go through the same placement code.
    """

    def __init__(self, tile_size: int, columns: int, rows: int) -> None:
        self.tile_size = tile_size
        self.columns = columns
        self.rows = rows
        self.pixels = allocate_surface(columns * tile_size, rows * tile_size)
        self.tiles: list[Tile] = []

    @classmethod
    def identity(cls, grid: GridSpec) -> AtlasPacker:
        return cls(grid.tile_size, grid.cols, grid.rows)

    @classmethod
    def packed(cls, tile_size: int, columns: int, count: int) -> AtlasPacker:
        return cls(tile_size, columns, math.ceil(count / columns))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def capacity(self) -> int:
        return self.columns * self.rows

    def place(self, buffer: np.ndarray, is_solid: bool) -> Tile:
        slot = len(self.tiles)
        if slot >= self.capacity:
            raise IndexError(f"Atlas is full ({self.capacity} slots)")
        ts = self.tile_size
        x = (slot % self.columns) * ts
        y = (slot // self.columns) * ts
        self.pixels[y:y + ts, x:x + ts] = buffer
        tile = Tile(id=slot, x=x, y=y, is_solid=is_solid)
        self.tiles.append(tile)
        return tile


def encode_png(pixels: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(pixels).save(buf, format="PNG")
    return buf.getvalue()
