"""Opacity-density heuristic for marking tiles as solid terrain.

A tile counts as solid when more than SOLID_RATIO of its pixels have an alpha
above ALPHA_THRESHOLD (walls, tree trunks and the like are painted edge to edge,
decorations mostly are not). Both numbers are fixed policy for now.
"""

from __future__ import annotations

import logging

import numpy as np

from .errors import CollisionProbeFailure

logger = logging.getLogger(__name__)

ALPHA_THRESHOLD = 10
SOLID_RATIO = 0.75


def probe_coverage(buffer: np.ndarray) -> float:
    """Fraction of pixels whose alpha exceeds ALPHA_THRESHOLD."""
    try:
        arr = np.asarray(buffer)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise CollisionProbeFailure(f"Expected an RGBA tile, got shape {arr.shape}")
        h, w = arr.shape[:2]
        if h == 0 or h != w:
            raise CollisionProbeFailure(f"Expected a non-empty square tile, got {w}x{h}")
        opaque = int(np.count_nonzero(arr[:, :, 3] > ALPHA_THRESHOLD))
    except CollisionProbeFailure:
        raise
    except (TypeError, ValueError) as exc:
        raise CollisionProbeFailure(f"Unreadable tile buffer: {exc}") from exc
    return opaque / (h * w)


def is_solid(buffer: np.ndarray) -> bool:
    try:
        return probe_coverage(buffer) > SOLID_RATIO
    except CollisionProbeFailure as exc:
        logger.warning(f"Collision probe failed, treating tile as passable: {exc}")
        return False
