"""Seeded flood fill that bootstraps heat on plain maps with no heat signal."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any

import numpy as np
from numpy.typing import NDArray

from htmap import config
from htmap.models import InputError, IntensityField

from .brush import add_heat
from .classification import RGB, background_distance, boundary_mask

logger = logging.getLogger(__name__)


def seed_candidates(width: int, height: int) -> list[tuple[int, int]]:
    """Sparse grid of candidate seeds around the image center, row by row."""
    cx = width // 2
    cy = height // 2
    offsets = range(-config.FILL_SEED_SPAN, config.FILL_SEED_SPAN + 1, config.FILL_SEED_STEP)
    return [(cx + dx, cy + dy) for dy in offsets for dx in offsets]


def _flood(
    width: int,
    height: int,
    seeds: list[int],
    can_grow: NDArray[np.bool_],
) -> NDArray[np.bool_]:
    """Breadth-first 4-connected expansion over flat indices."""
    visited = np.zeros(width * height, dtype=bool)
    grow = can_grow.reshape(-1)
    queue: deque[int] = deque()
    for idx in seeds:
        visited[idx] = True
        queue.append(idx)

    while queue:
        idx = queue.popleft()
        x = idx % width
        neighbors = []
        if x + 1 < width:
            neighbors.append(idx + 1)
        if x > 0:
            neighbors.append(idx - 1)
        if idx + width < width * height:
            neighbors.append(idx + width)
        if idx >= width:
            neighbors.append(idx - width)
        for nidx in neighbors:
            if not visited[nidx] and grow[nidx]:
                visited[nidx] = True
                queue.append(nidx)

    return visited.reshape(height, width)


def fill_region(
    field: IntensityField,
    source: NDArray[Any],
    bg: RGB = config.MAP_BG_COLOR,
) -> None:
    """
    Flood the region around the image center with a flat heat baseline.

    Seeds come from an 11x11 grid (step 15) centered on the image; a seed must
    differ from the background by more than 10 and be neither a label nor a
    boundary pixel. Growth uses the looser background distance of 8. Every
    reached cell is set to 0.1, then one large brush (radius min(w, h) / 3,
    strength 0.6) is added at the center once the flood has finished.

    Mutates ``field.intensity`` in place. Running it twice compounds the
    centroid brush, so callers wanting repeatable output reset the field first.
    """
    if source.shape[:2] != field.shape:
        raise InputError(
            f"Source pixels {source.shape[:2]} do not match field shape {field.shape}"
        )

    distance = background_distance(source, bg)
    passable = ~field.protection_mask & ~boundary_mask(source)
    can_seed = passable & (distance > config.FILL_SEED_BG_DISTANCE)
    can_grow = passable & (distance > config.FILL_GROW_BG_DISTANCE)

    seeds = [
        field.index(sx, sy)
        for sx, sy in seed_candidates(field.width, field.height)
        if 0 <= sx < field.width and 0 <= sy < field.height and can_seed[sy, sx]
    ]

    reached = _flood(field.width, field.height, seeds, can_grow)
    field.intensity[reached] = config.FILL_BASE_INTENSITY
    logger.debug(f"Region fill: {len(seeds)} seeds, {int(reached.sum())} cells reached")

    add_heat(
        field,
        field.width // 2,
        field.height // 2,
        min(field.width, field.height) / config.FILL_PEAK_RADIUS_DIVISOR,
        config.FILL_PEAK_STRENGTH,
    )
