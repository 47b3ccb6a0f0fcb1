from __future__ import annotations


class TileSlicerError(Exception):
    """Base class for every failure raised by tileslicer."""


class InvalidDimensions(TileSlicerError):
    def __init__(self, width: int, height: int, tile_size: int) -> None:
        self.width = width
        self.height = height
        self.tile_size = tile_size
        super().__init__(
            f"Image {width}x{height} is too small to cut a single {tile_size}x{tile_size} tile"
        )


class SurfaceAllocationFailure(TileSlicerError):
    pass


class CollisionProbeFailure(TileSlicerError):
    pass


class ProcessCancelled(TileSlicerError):
    pass


class ConfigError(TileSlicerError, ValueError):
    pass


class ManifestError(TileSlicerError, ValueError):
    pass
