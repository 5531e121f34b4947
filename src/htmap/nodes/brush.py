"""Gaussian brush operators that raise or lower heat around a point."""

from __future__ import annotations

import math

import numpy as np

from htmap import config
from htmap.models import BrushMode, BrushParameters, ConfigurationError, IntensityField


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


def _axis_range(center: float, radius: float, size: int) -> tuple[int, int]:
    """Inclusive integer range around ``floor(center)`` clipped to ``[0, size)``."""
    c0 = math.floor(center)
    lo = max(0, math.ceil(c0 - radius))
    hi = min(size - 1, math.floor(c0 + radius))
    return lo, hi


def apply_brush(
    field: IntensityField,
    x: float,
    y: float,
    radius: float,
    strength: float,
    alpha_cap: float = 1.0,
    mode: BrushMode = BrushMode.ADD,
) -> None:
    """
    Add or remove heat with a Gaussian-times-linear falloff kernel.

    For each unprotected cell within ``radius`` of the exact ``(x, y)`` center:
    ``delta = exp(-d^2 / (2 sigma^2)) * (1 - d / radius) * strength * alpha_cap``
    with ``sigma = radius / 2.2``; the result is clamped to ``[0, 1]``.
    Mutates ``field.intensity`` in place. A footprint entirely outside the
    field is a no-op.

    Raises:
        ConfigurationError: if ``radius`` is not a positive finite number
    """
    if not math.isfinite(radius) or radius <= 0:
        raise ConfigurationError(f"Brush radius must be positive, got {radius}")
    if not (math.isfinite(x) and math.isfinite(y)):
        return

    strength = _clamp01(strength)
    alpha_cap = _clamp01(alpha_cap)

    x_lo, x_hi = _axis_range(x, radius, field.width)
    y_lo, y_hi = _axis_range(y, radius, field.height)
    if x_lo > x_hi or y_lo > y_hi:
        return

    ys = np.arange(y_lo, y_hi + 1, dtype=np.float64)[:, None]
    xs = np.arange(x_lo, x_hi + 1, dtype=np.float64)[None, :]
    dist_sq = (xs - x) ** 2 + (ys - y) ** 2
    dist = np.sqrt(dist_sq)

    sigma = radius / config.BRUSH_SIGMA_DIVISOR
    gaussian = np.exp(-dist_sq / (2.0 * sigma * sigma))
    fade = 1.0 - dist / radius
    delta = gaussian * fade * strength * alpha_cap

    window = field.intensity[y_lo : y_hi + 1, x_lo : x_hi + 1]
    active = (dist < radius) & ~field.protection_mask[y_lo : y_hi + 1, x_lo : x_hi + 1]

    if mode == BrushMode.ADD:
        updated = np.minimum(1.0, window + delta)
    else:
        updated = np.maximum(0.0, window - delta)
    np.copyto(window, updated, where=active)


def add_heat(
    field: IntensityField,
    x: float,
    y: float,
    radius: float,
    strength: float,
    alpha_cap: float = 1.0,
) -> None:
    apply_brush(field, x, y, radius, strength, alpha_cap, BrushMode.ADD)


def remove_heat(
    field: IntensityField,
    x: float,
    y: float,
    radius: float,
    strength: float,
    alpha_cap: float = 1.0,
) -> None:
    apply_brush(field, x, y, radius, strength, alpha_cap, BrushMode.REMOVE)


def apply_params(field: IntensityField, x: float, y: float, params: BrushParameters) -> None:
    """Apply one stroke sample described by ``params``."""
    apply_brush(field, x, y, params.radius, params.strength, params.alpha_cap, params.mode)
