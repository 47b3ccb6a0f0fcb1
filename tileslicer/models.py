"""Data types shared by the slicing pipeline."""

from __future__ import annotations

import base64
import enum
import io
import numbers
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ConfigError

DEFAULT_TILE_SIZE = 48
DEFAULT_COLUMNS = 8

_CONFIG_KEYS = {"tileSize": "tile_size", "tile_size": "tile_size", "mode": "mode", "columns": "columns"}


class Mode(str, enum.Enum):
    ORIGINAL = "original"
    OPTIMIZED = "optimized"


@dataclass(frozen=True, eq=False)
class SourceImage:
    """Decoded RGBA pixels, shape (height, width, 4), never written to."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        px = self.pixels
        if px.ndim != 3 or px.shape[2] != 4:
            raise ValueError(f"Expected an (h, w, 4) RGBA buffer, got shape {px.shape}")
        if px.dtype != np.uint8:
            raise ValueError(f"Expected uint8 samples, got {px.dtype}")
        if px.flags.writeable:
            px = px.copy()
            px.setflags(write=False)
            object.__setattr__(self, "pixels", px)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @classmethod
    def from_image(cls, img: Image.Image) -> SourceImage:
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return cls(np.array(img, dtype=np.uint8))

    @classmethod
    def open(cls, path: str | Path) -> SourceImage:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Image not found: {path}")
        try:
            with Image.open(path) as img:
                return cls.from_image(img)
        except UnidentifiedImageError as exc:
            raise ValueError(f"Not an image file: {path}") from exc


@dataclass(frozen=True)
class ProcessConfig:
    tile_size: int = DEFAULT_TILE_SIZE
    mode: Mode = Mode.ORIGINAL
    columns: int = DEFAULT_COLUMNS

    def __post_init__(self) -> None:
        try:
            mode = Mode(self.mode)
        except ValueError:
            choices = ", ".join(m.value for m in Mode)
            raise ConfigError(f"Unknown mode {self.mode!r} (expected one of: {choices})") from None
        object.__setattr__(self, "mode", mode)
        for name in ("tile_size", "columns"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
            object.__setattr__(self, name, int(value))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProcessConfig:
        """Build a config from camelCase (tileSize) or snake_case (tile_size) keys."""
        unknown = sorted(set(data) - set(_CONFIG_KEYS))
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        kwargs: dict[str, Any] = {}
        for key, attr in _CONFIG_KEYS.items():
            if data.get(key) is not None:
                kwargs[attr] = data[key]
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {"tileSize": self.tile_size, "mode": self.mode.value, "columns": self.columns}


@dataclass(frozen=True)
class Tile:
    id: int
    x: int
    y: int
    is_solid: bool


@dataclass(frozen=True, eq=False)
class ProcessResult:
    pixels: np.ndarray = field(repr=False)
    png: bytes = field(repr=False)
    width: int
    height: int
    total_tiles: int
    unique_tiles: int
    tiles: tuple[Tile, ...]
    manifest: str = field(repr=False)

    @property
    def solid_tiles(self) -> list[Tile]:
        return [t for t in self.tiles if t.is_solid]

    def to_image(self) -> Image.Image:
        return Image.open(io.BytesIO(self.png))

    def data_url(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.png).decode("ascii")
