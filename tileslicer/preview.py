"""Overlay previews of a generated tileset: grid lines and solid-tile markers."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from .manifest import Manifest, read_manifest
from .models import Tile

logger = logging.getLogger(__name__)

GRID_COLOR = (255, 255, 255, 77)
SOLID_FILL = (239, 68, 68, 102)
SOLID_OUTLINE = (248, 113, 113, 153)
LABEL_COLOR = (255, 255, 255, 204)


def _load_font(size: int) -> ImageFont.ImageFont:
    for name in ("DejaVuSansMono.ttf", "DejaVuSans.ttf", "Arial.ttf"):
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default()


def render_preview(
    image: Image.Image,
    tiles: Iterable[Tile],
    tile_size: int,
    *,
    scale: int = 1,
    grid: bool = True,
    collision: bool = True,
    labels: bool = True,
    font_size: int = 10,
) -> Image.Image:
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    base = image.convert("RGBA")
    if scale != 1:
        base = base.resize((base.width * scale, base.height * scale), Image.NEAREST)

    overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    cell = tile_size * scale

    if grid:
        for x in range(cell, base.width, cell):
            draw.line([(x, 0), (x, base.height - 1)], fill=GRID_COLOR, width=1)
        for y in range(cell, base.height, cell):
            draw.line([(0, y), (base.width - 1, y)], fill=GRID_COLOR, width=1)

    if collision:
        font = _load_font(font_size * scale) if labels else None
        for t in tiles:
            if not t.is_solid:
                continue
            px, py = t.x * scale, t.y * scale
            draw.rectangle([px, py, px + cell - 1, py + cell - 1], fill=SOLID_FILL, outline=SOLID_OUTLINE)
            if font is not None:
                text = str(t.id)
                left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
                tx = px + (cell - (right - left)) // 2 - left
                ty = py + (cell - (bottom - top)) // 2 - top
                draw.text((tx, ty), text, fill=LABEL_COLOR, font=font)

    return Image.alpha_composite(base, overlay)


def tiles_from_manifest(manifest: Manifest) -> list[Tile]:
    # Both modes fill slots row by row, so a tile's position follows from its id.
    cols = manifest.columns
    ts = manifest.tile_size
    return [
        Tile(id=i, x=(i % cols) * ts, y=(i // cols) * ts, is_solid=solid)
        for i, solid in sorted(manifest.collisions.items())
    ]


def render_manifest_preview(
    *,
    image_path: Path,
    manifest_path: Path,
    out_path: Path,
    scale: int = 1,
    grid: bool = True,
    collision: bool = True,
    labels: bool = True,
) -> Path:
    manifest = read_manifest(manifest_path)
    with Image.open(image_path) as img:
        if img.size != (manifest.width, manifest.height):
            logger.warning(
                f"{image_path} is {img.size[0]}x{img.size[1]} but the manifest says "
                f"{manifest.width}x{manifest.height}"
            )
        preview = render_preview(
            img,
            tiles_from_manifest(manifest),
            manifest.tile_size,
            scale=scale,
            grid=grid,
            collision=collision,
            labels=labels,
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    preview.save(out_path)
    logger.info(f"Wrote preview {out_path}")
    return out_path
