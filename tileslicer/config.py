from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigError
from .models import ProcessConfig

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def load_config(path: Optional[Path] = None, **overrides: Any) -> ProcessConfig:
    """Read a JSON config file (if given) and apply non-None keyword overrides.

    The file may use either the camelCase keys of the manifest (``tileSize``)
    or snake_case ones (``tile_size``).
    """
    data: dict[str, Any] = {}
    if path is not None:
        try:
            loaded = _read_json(path)
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}") from None
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        data.update(loaded)
        logger.debug(f"Loaded config from {path}: {loaded}")
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return ProcessConfig.from_dict(data)
    except TypeError as exc:
        raise ConfigError(f"Invalid config: {exc}") from exc
