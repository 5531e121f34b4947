"""Build an intensity field from the colors already present on a map image."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
from numpy.typing import NDArray

from htmap import config
from htmap.models import InputError, IntensityField

from .classification import RGB, background_distance, hue_saturation, in_reserved_band, label_mask
from .region_fill import fill_region

logger = logging.getLogger(__name__)


def validate_source(source: Any) -> NDArray[np.uint8]:
    """Check that ``source`` is a non-empty ``(height, width, 4)`` pixel buffer."""
    if source is None:
        raise InputError("No source image supplied")
    arr = np.asarray(source)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise InputError(f"Expected an RGBA array of shape (height, width, 4), got {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InputError(f"Image has a zero dimension: {arr.shape[1]}x{arr.shape[0]}")
    return arr


def heat_from_hue(hue: NDArray[np.float64]) -> NDArray[np.float64]:
    """Map hot hues (red ~ 0 degrees) to high heat, cool hues toward the 0.01 floor."""
    return np.maximum(config.MIN_HEAT, 1.0 - hue / config.HUE_HEAT_SPAN)


def extract_intensity(
    source: NDArray[Any],
    bg: RGB = config.MAP_BG_COLOR,
    sensitivity: float = config.DEFAULT_SENSITIVITY,
) -> IntensityField:
    """
    Create a new field from the source pixels.

    Label pixels go into the protection mask. Remaining pixels that are far
    from the background (> 40), saturated (> 0.15) and outside the reserved
    pink band get heat from their hue. When nothing qualifies the region fill
    bootstraps the field instead.

    ``sensitivity`` is clamped to ``[0, 1]`` and recorded on the field so a
    change can trigger re-extraction; the thresholds above do not depend on it.

    Raises:
        InputError: if ``source`` is not a non-empty RGBA array
    """
    pixels = validate_source(source)
    height, width = pixels.shape[:2]
    sensitivity = min(1.0, max(0.0, float(sensitivity)))

    protected = label_mask(pixels)
    field = IntensityField.empty(width, height, protection_mask=protected, sensitivity=sensitivity)

    hue, saturation = hue_saturation(pixels)
    heat = (
        ~protected
        & (background_distance(pixels, bg) > config.EXTRACTION_BG_DISTANCE)
        & (saturation > config.EXTRACTION_MIN_SATURATION)
        & ~in_reserved_band(hue)
    )
    field.intensity[heat] = heat_from_hue(hue[heat])

    heat_pixels = int(heat.sum())
    logger.debug(
        f"Extracted {heat_pixels} heat pixels, {int(protected.sum())} label pixels "
        f"from {width}x{height} image"
    )

    if heat_pixels == 0:
        logger.info("No existing heat signal found, bootstrapping with region fill")
        fill_region(field, pixels, bg)
        field.filled = True

    return field
