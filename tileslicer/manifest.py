"""JSON manifest written next to every generated tileset image.

Layout::

    {
      "info": {"tool": ..., "version": ..., "generatedAt": ISO-8601},
      "config": {"tileSize": 48, "mode": "optimized", "width": 384, "height": 96},
      "tiles": [{"id": 0, "collision": true}, ...]
    }

Tiles are always listed in ascending id order.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from . import __version__
from .errors import ManifestError
from .models import Mode, Tile

TOOL_NAME = "TileSlicer Pro"


@dataclass(frozen=True)
class Manifest:
    tool: str
    version: str
    generated_at: str
    tile_size: int
    mode: Mode
    width: int
    height: int
    collisions: dict[int, bool]

    @property
    def tile_count(self) -> int:
        return len(self.collisions)

    @property
    def columns(self) -> int:
        return self.width // self.tile_size


def _timestamp(generated_at: Optional[datetime]) -> str:
    when = generated_at or datetime.now(timezone.utc)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return when.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_manifest(
    *,
    tile_size: int,
    mode: Mode,
    width: int,
    height: int,
    tiles: Iterable[Tile],
    generated_at: Optional[datetime] = None,
) -> str:
    doc: dict[str, Any] = {
        "info": {
            "tool": TOOL_NAME,
            "version": __version__,
            "generatedAt": _timestamp(generated_at),
        },
        "config": {
            "tileSize": tile_size,
            "mode": Mode(mode).value,
            "width": width,
            "height": height,
        },
        "tiles": [{"id": t.id, "collision": bool(t.is_solid)} for t in sorted(tiles, key=lambda t: t.id)],
    }
    return json.dumps(doc, indent=2) + "\n"


def _int_field(section: dict[str, Any], key: str) -> int:
    value = section[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ManifestError(f"{key!r} must be an integer, got {value!r}")
    return value


def parse_manifest(text: str) -> Manifest:
    try:
        doc = json.loads(text)
        info = doc["info"]
        config = doc["config"]
        collisions: dict[int, bool] = {}
        for entry in doc["tiles"]:
            tile_id = _int_field(entry, "id")
            if tile_id < 0:
                raise ManifestError(f"Negative tile id {tile_id}")
            if tile_id in collisions:
                raise ManifestError(f"Duplicate tile id {tile_id}")
            collision = entry["collision"]
            if not isinstance(collision, bool):
                raise ManifestError(f"Tile {tile_id} collision must be true or false, got {collision!r}")
            collisions[tile_id] = collision
        tile_size = _int_field(config, "tileSize")
        width = _int_field(config, "width")
        height = _int_field(config, "height")
        if tile_size <= 0:
            raise ManifestError(f"tileSize must be positive, got {tile_size}")
        # An atlas narrower or shorter than one tile cannot hold any tile slot.
        if width < tile_size or height < tile_size:
            raise ManifestError(f"{width}x{height} atlas is smaller than one {tile_size}px tile")
        return Manifest(
            tool=str(info["tool"]),
            version=str(info["version"]),
            generated_at=str(info["generatedAt"]),
            tile_size=tile_size,
            mode=Mode(config["mode"]),
            width=width,
            height=height,
            collisions=collisions,
        )
    except ManifestError:
        raise
    except (ValueError, KeyError, TypeError) as exc:
        raise ManifestError(f"Malformed manifest: {exc}") from exc


def read_manifest(path: Path) -> Manifest:
    return parse_manifest(path.read_text(encoding="utf-8"))
