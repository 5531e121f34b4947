"""Per-pixel predicates separating map labels, boundary lines, background and heat."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from htmap import config

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class PixelClass:
    is_label: bool
    is_boundary: bool
    is_background: bool
    background_distance: float
    hue: float
    saturation: float


def _channels(rgb: NDArray[Any]) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    arr = np.asarray(rgb, dtype=np.float64)
    return arr[..., 0], arr[..., 1], arr[..., 2]


def luma(rgb: NDArray[Any]) -> NDArray[np.float64]:
    r, g, b = _channels(rgb)
    return (r * 299.0 + g * 587.0 + b * 114.0) / 1000.0


def label_mask(rgba: NDArray[Any]) -> NDArray[np.bool_]:
    """Dark, opaque pixels: map text that must never be recolored."""
    alpha = np.asarray(rgba)[..., 3]
    return (alpha >= config.LABEL_MIN_ALPHA) & (luma(rgba) < config.LABEL_MAX_LUMA)


def boundary_mask(rgb: NDArray[Any]) -> NDArray[np.bool_]:
    """Near-achromatic gray/black pixels: cartographic lines."""
    r, g, b = _channels(rgb)
    limit = config.BOUNDARY_MAX_CHANNEL_DIFF
    return (
        (luma(rgb) < config.BOUNDARY_MAX_LUMA)
        & (np.abs(r - g) < limit)
        & (np.abs(g - b) < limit)
    )


def background_distance(rgb: NDArray[Any], bg: RGB) -> NDArray[np.float64]:
    """Euclidean RGB distance from the reference background color."""
    r, g, b = _channels(rgb)
    return np.sqrt((r - bg[0]) ** 2 + (g - bg[1]) ** 2 + (b - bg[2]) ** 2)


def hue_saturation(rgb: NDArray[Any]) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    HSV hue in degrees ``[0, 360)`` and saturation in ``[0, 1]``.

    Achromatic pixels get hue 0. When channels tie for the maximum, red wins
    over green and green over blue.
    """
    r, g, b = _channels(rgb)
    mx = np.maximum(np.maximum(r, g), b)
    mn = np.minimum(np.minimum(r, g), b)
    chroma = mx - mn

    safe_max = np.where(mx == 0, 1.0, mx)
    saturation = np.where(mx == 0, 0.0, chroma / safe_max)

    safe_chroma = np.where(chroma == 0, 1.0, chroma)
    h_red = np.mod((g - b) / safe_chroma, 6.0)
    h_green = (b - r) / safe_chroma + 2.0
    h_blue = (r - g) / safe_chroma + 4.0
    hue = np.where(mx == r, h_red, np.where(mx == g, h_green, h_blue)) * 60.0
    hue = np.where(hue < 0, hue + 360.0, hue)
    hue = np.where(chroma == 0, 0.0, hue)
    return hue, saturation


def in_reserved_band(hue: NDArray[np.float64]) -> NDArray[np.bool_]:
    """Pink/magenta hues kept for UI highlighting, never read as heat."""
    return (hue > config.RESERVED_HUE_MIN) & (hue < config.RESERVED_HUE_MAX)


def classify(
    r: int,
    g: int,
    b: int,
    a: int,
    bg: RGB = config.MAP_BG_COLOR,
    bg_threshold: float = config.EXTRACTION_BG_DISTANCE,
) -> PixelClass:
    """Classify a single pixel; ``is_background`` means within ``bg_threshold`` of ``bg``."""
    px = np.array([[r, g, b, a]], dtype=np.float64)
    distance = float(background_distance(px, bg)[0])
    hue, saturation = hue_saturation(px)
    return PixelClass(
        is_label=bool(label_mask(px)[0]),
        is_boundary=bool(boundary_mask(px)[0]),
        is_background=distance <= bg_threshold,
        background_distance=distance,
        hue=float(hue[0]),
        saturation=float(saturation[0]),
    )
