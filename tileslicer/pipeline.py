from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Protocol

from .atlas import AtlasPacker, encode_png
from .collision import is_solid
from .dedup import Deduplicator
from .errors import ProcessCancelled
from .grid import GridSpec, partition_grid
from .manifest import build_manifest
from .models import Mode, ProcessConfig, ProcessResult, SourceImage
from .raster import TileRasterizer

logger = logging.getLogger(__name__)


class CancelSignal(Protocol):
    def is_set(self) -> bool: ...


def _check_cancel(cancel: Optional[CancelSignal]) -> None:
    if cancel is not None and cancel.is_set():
        raise ProcessCancelled("Tile processing was cancelled")


def _pack_original(
    rasterizer: TileRasterizer,
    grid: GridSpec,
    config: ProcessConfig,
    cancel: Optional[CancelSignal],
) -> AtlasPacker:
    packer = AtlasPacker.identity(grid)
    for col, row in grid.cells():
        _check_cancel(cancel)
        buffer = rasterizer.extract_into(col, row)
        packer.place(buffer, is_solid(buffer))
    return packer


def _pack_optimized(
    rasterizer: TileRasterizer,
    grid: GridSpec,
    config: ProcessConfig,
    cancel: Optional[CancelSignal],
) -> AtlasPacker:
    dedup = Deduplicator()
    for col, row in grid.cells():
        _check_cancel(cancel)
        dedup.offer(rasterizer.extract_into(col, row))
    logger.info(f"Found {len(dedup)} unique tiles, {dedup.duplicates} duplicates dropped")

    packer = AtlasPacker.packed(grid.tile_size, config.columns, len(dedup))
    for buffer in dedup.uniques:
        _check_cancel(cancel)
        packer.place(buffer, is_solid(buffer))
    return packer


_PACKERS: dict[Mode, Callable[..., AtlasPacker]] = {
    Mode.ORIGINAL: _pack_original,
    Mode.OPTIMIZED: _pack_optimized,
}


def process_image(
    source: SourceImage,
    config: ProcessConfig,
    *,
    cancel: Optional[CancelSignal] = None,
    generated_at: Optional[datetime] = None,
) -> ProcessResult:
    """Slice ``source`` into tiles and build the output tileset plus its manifest.

    Raises InvalidDimensions before doing any work when the image cannot hold a
    single tile, SurfaceAllocationFailure when a pixel buffer cannot be created,
    and ProcessCancelled when ``cancel`` is set between two cells.
    """
    grid = partition_grid(source.width, source.height, config.tile_size)
    logger.info(
        f"Slicing {source.width}x{source.height} image into {grid.cols}x{grid.rows} "
        f"tiles of {config.tile_size}px ({config.mode.value} mode)"
    )
    dropped_w = source.width - grid.pixel_size[0]
    dropped_h = source.height - grid.pixel_size[1]
    if dropped_w or dropped_h:
        logger.debug(f"Discarding {dropped_w}px on the right and {dropped_h}px at the bottom")

    rasterizer = TileRasterizer(source, config.tile_size)
    packer = _PACKERS[config.mode](rasterizer, grid, config, cancel)
    tiles = tuple(packer.tiles)

    manifest = build_manifest(
        tile_size=config.tile_size,
        mode=config.mode,
        width=packer.width,
        height=packer.height,
        tiles=tiles,
        generated_at=generated_at,
    )
    result = ProcessResult(
        pixels=packer.pixels,
        png=encode_png(packer.pixels),
        width=packer.width,
        height=packer.height,
        total_tiles=grid.total,
        unique_tiles=len(tiles),
        tiles=tiles,
        manifest=manifest,
    )
    logger.info(
        f"Built {result.width}x{result.height} tileset: {result.unique_tiles}/{result.total_tiles} tiles, "
        f"{len(result.solid_tiles)} solid"
    )
    return result
