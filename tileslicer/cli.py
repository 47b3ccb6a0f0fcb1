from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config import load_config
from .errors import TileSlicerError
from .models import Mode, ProcessConfig, ProcessResult, SourceImage
from .pipeline import process_image
from .preview import render_manifest_preview

logger = logging.getLogger("tileslicer")


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="tileslicer",
        description="Cut a tileset image into grid tiles, optionally deduplicate them, and flag solid tiles.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only report warnings and errors")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("slice", help="Slice an image into a tileset PNG and a JSON manifest")
    s.add_argument("image", type=Path, help="Input tileset image path")
    s.add_argument("--tile-size", type=int, default=None, help="Tile edge in pixels (default: 48)")
    s.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=None,
        help="original keeps the grid as is, optimized drops duplicate tiles and repacks (default: original)",
    )
    s.add_argument("--columns", type=int, default=None, help="Atlas columns in optimized mode (default: 8)")
    s.add_argument("--config", type=Path, default=None, help="JSON file with tileSize/mode/columns")
    s.add_argument("--out", type=Path, default=Path("."), help="Output directory (default: current directory)")
    s.add_argument("--no-manifest", action="store_true", help="Do not write the JSON manifest")

    v = sub.add_parser("preview", help="Render grid and collision overlays for a generated tileset")
    v.add_argument("image", type=Path, help="Tileset PNG produced by 'slice'")
    v.add_argument("manifest", type=Path, help="Manifest JSON produced by 'slice'")
    v.add_argument("--out", type=Path, required=True, help="Output PNG path")
    v.add_argument("--scale", type=int, default=1, help="Nearest-neighbor scale factor")
    v.add_argument("--no-grid", action="store_true", help="Hide tile grid lines")
    v.add_argument("--no-collision", action="store_true", help="Hide solid tile markers")
    v.add_argument("--no-labels", action="store_true", help="Hide tile ids on solid tiles")
    return p.parse_args(argv)


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")


def output_paths(image_path: Path, out_dir: Path, mode: Mode) -> tuple[Path, Path]:
    stem = image_path.stem
    return (
        out_dir / f"{stem}_{mode.value}_tileset.png",
        out_dir / f"{stem}_{mode.value}_data.json",
    )


def slice_image(
    *,
    image_path: Path,
    out_dir: Path,
    config: ProcessConfig,
    write_manifest: bool,
) -> ProcessResult:
    source = SourceImage.open(image_path)
    result = process_image(source, config)

    png_path, json_path = output_paths(image_path, out_dir, config.mode)
    out_dir.mkdir(parents=True, exist_ok=True)
    png_path.write_bytes(result.png)
    logger.info(f"Wrote {png_path}")
    if write_manifest:
        json_path.write_text(result.manifest, encoding="utf-8")
        logger.info(f"Wrote {json_path}")
    return result


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args)

    try:
        if args.command == "slice":
            config = load_config(
                args.config,
                tile_size=args.tile_size,
                mode=args.mode,
                columns=args.columns,
            )
            result = slice_image(
                image_path=args.image,
                out_dir=args.out,
                config=config,
                write_manifest=not args.no_manifest,
            )
            print(
                f"{args.image.name}: {result.total_tiles} tiles, {result.unique_tiles} unique, "
                f"{len(result.solid_tiles)} solid -> {result.width}x{result.height}"
            )
        else:
            render_manifest_preview(
                image_path=args.image,
                manifest_path=args.manifest,
                out_path=args.out,
                scale=args.scale,
                grid=not args.no_grid,
                collision=not args.no_collision,
                labels=not args.no_labels,
            )
    except (TileSlicerError, OSError, ValueError) as e:
        logger.error(f"{e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
