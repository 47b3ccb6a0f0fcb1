from __future__ import annotations

import hashlib
import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


def fingerprint(buffer: np.ndarray) -> str:
    """SHA-256 of the raw pixel bytes, prefixed with the buffer shape."""
    arr = np.ascontiguousarray(buffer, dtype=np.uint8)
    h = hashlib.sha256()
    h.update(("x".join(str(d) for d in arr.shape) + ":").encode("ascii"))
    h.update(arr.tobytes())
    return h.hexdigest()


class Deduplicator:
    """Keeps the first occurrence of every distinct tile, in the order offered."""

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}
        self._uniques: list[np.ndarray] = []
        self.seen = 0

    def offer(self, buffer: np.ndarray) -> Optional[int]:
        """Returns the new unique id, or None when an identical tile was already kept."""
        self.seen += 1
        key = fingerprint(buffer)
        if key in self._ids:
            logger.debug(f"Duplicate of tile {self._ids[key]} ({key[:12]})")
            return None
        tile_id = len(self._uniques)
        self._ids[key] = tile_id
        self._uniques.append(np.array(buffer, dtype=np.uint8, copy=True))
        return tile_id

    @property
    def uniques(self) -> list[np.ndarray]:
        return list(self._uniques)

    @property
    def duplicates(self) -> int:
        return self.seen - len(self._uniques)

    def __len__(self) -> int:
        return len(self._uniques)
