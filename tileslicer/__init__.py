"""Cut tileset images into grid tiles, drop duplicates and flag solid tiles."""

__version__ = "1.0.0"

from .errors import (
    CollisionProbeFailure,
    ConfigError,
    InvalidDimensions,
    ManifestError,
    ProcessCancelled,
    SurfaceAllocationFailure,
    TileSlicerError,
)
from .models import Mode, ProcessConfig, ProcessResult, SourceImage, Tile
from .pipeline import process_image
from .manifest import Manifest, build_manifest, parse_manifest
from .config import load_config

__all__ = [
    "CollisionProbeFailure",
    "ConfigError",
    "InvalidDimensions",
    "Manifest",
    "ManifestError",
    "Mode",
    "ProcessCancelled",
    "ProcessConfig",
    "ProcessResult",
    "SourceImage",
    "SurfaceAllocationFailure",
    "Tile",
    "TileSlicerError",
    "build_manifest",
    "load_config",
    "parse_manifest",
    "process_image",
]
