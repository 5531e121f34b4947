from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ValidationError, field_validator

from htmap import config

from .errors import ConfigurationError

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


def _clamp01(value: object) -> float:
    return min(1.0, max(0.0, float(value)))  # type: ignore[arg-type]


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Parse ``#rrggbb`` (leading ``#`` optional) into an RGB tuple."""
    match = _HEX_COLOR.match(color.strip())
    if match is None:
        raise ConfigurationError(f"Not a 24-bit hex color: {color!r}")
    digits = match.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


class ColorStop(BaseModel):
    offset: float = 0.0
    color: str
    alpha: float = 1.0

    @field_validator("color", mode="before")
    @classmethod
    def _normalize_color(cls, value: object) -> str:
        """Store colors as lowercase ``#rrggbb``."""
        text = str(value).strip()
        match = _HEX_COLOR.match(text)
        if match is None:
            raise ValueError(f"color must be a 24-bit hex string, got {text!r}")
        return "#" + match.group(1).lower()

    @field_validator("offset", "alpha", mode="before")
    @classmethod
    def _clamp(cls, value: object) -> float:
        return _clamp01(value)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return hex_to_rgb(self.color)


class ColorRamp(BaseModel):
    """Four color stops ordered peak -> base (stop 0 renders topmost)."""

    stops: list[ColorStop]

    @classmethod
    def default(cls) -> ColorRamp:
        return cls(
            stops=[
                ColorStop(offset=offset, color=color, alpha=alpha)
                for offset, color, alpha in config.DEFAULT_STOPS
            ]
        )

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[str, float]]) -> ColorRamp:
        """Build a ramp from ``(color, alpha)`` pairs listed peak -> base."""
        items = list(entries)
        check_stop_count(items)
        last = max(1, len(items) - 1)
        try:
            stops = [
                ColorStop(offset=1.0 - i / last, color=color, alpha=alpha)
                for i, (color, alpha) in enumerate(items)
            ]
        except ValidationError as e:
            raise ConfigurationError(f"Invalid ramp stop: {e.errors()[0]['msg']}") from e
        return cls(stops=stops)

    def layers(self) -> list[tuple[tuple[int, int, int], float]]:
        """Stops as ``(rgb, alpha)`` in compositing order, base -> peak."""
        check_stop_count(self.stops)
        return [(stop.rgb, stop.alpha) for stop in reversed(self.stops)]


def check_stop_count(stops: Sequence[object]) -> None:
    if len(stops) != config.RAMP_STOP_COUNT:
        raise ConfigurationError(
            f"Color ramp needs exactly {config.RAMP_STOP_COUNT} stops, got {len(stops)}"
        )


def coerce_ramp(ramp: ColorRamp | Sequence[ColorStop]) -> ColorRamp:
    if isinstance(ramp, ColorRamp):
        check_stop_count(ramp.stops)
        return ramp
    stops = list(ramp)
    check_stop_count(stops)
    return ColorRamp(stops=stops)
