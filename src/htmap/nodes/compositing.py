"""Band-threshold compositing of the intensity field onto the source image."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from htmap import config
from htmap.models import ColorRamp, ColorStop, InputError, IntensityField
from htmap.models.ramp import coerce_ramp

from .extraction import validate_source


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


def band_factor(
    intensity: NDArray[np.float64],
    threshold: float,
    blur: float,
) -> NDArray[np.float64]:
    """Opacity factor for one band: 1 inside, a linear ramp over the soft edge."""
    factor = np.ones_like(intensity)
    if blur > 0:
        edge = config.BAND_BLUR_WIDTH * blur
        if edge > 0:
            soft = intensity < threshold + edge
            factor = np.where(soft, (intensity - threshold) / edge, factor)
    return factor


def render(
    source: NDArray[Any],
    field: IntensityField,
    ramp: ColorRamp | Sequence[ColorStop],
    global_opacity: float = config.DEFAULT_OPACITY,
    blur: float = 0.0,
) -> NDArray[np.uint8]:
    """
    Composite the ramp layers over the source pixels.

    Layers run base -> peak (ramp stop 3 first, stop 0 last) against the fixed
    thresholds 0.01 / 0.25 / 0.5 / 0.75. Each layer a cell reaches is blended
    "over" the running color with alpha ``stop.alpha * global_opacity * factor``.
    Protected cells and cells below 0.01 keep their source pixel; the alpha
    channel is copied through untouched. ``field`` is only read.

    Raises:
        ConfigurationError: if the ramp does not have exactly four stops
        InputError: if ``source`` does not match the field
    """
    layers = coerce_ramp(ramp).layers()
    pixels = validate_source(source)
    if pixels.shape[:2] != field.shape:
        raise InputError(
            f"Source pixels {pixels.shape[:2]} do not match field shape {field.shape}"
        )

    global_opacity = _clamp01(global_opacity)
    blur = _clamp01(blur)

    intensity = field.intensity
    active = ~field.protection_mask & (intensity >= config.BAND_THRESHOLDS[0])

    # Running alpha starts opaque and stays 1 under "over", so only RGB is tracked
    color = pixels[..., :3].astype(np.float64)

    for (rgb, layer_alpha), threshold in zip(layers, config.BAND_THRESHOLDS):
        reached = active & (intensity >= threshold)
        if not reached.any():
            continue
        a = layer_alpha * global_opacity * band_factor(intensity, threshold, blur)
        a = np.where(reached, a, 0.0)
        inv = 1.0 - a
        color = np.asarray(rgb, dtype=np.float64) * a[..., None] + color * inv[..., None]

    output = pixels.astype(np.uint8, copy=True)
    rgb_out = output[..., :3]
    rgb_out[active] = np.clip(np.rint(color[active]), 0, 255).astype(np.uint8)
    return output
