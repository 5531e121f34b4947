import math
from enum import Enum

from pydantic import BaseModel, field_validator

from htmap import config


class BrushMode(str, Enum):
    ADD = "add"
    REMOVE = "remove"


class InteractionMode(str, Enum):
    MOVE = "move"
    DRAW = "draw"
    ERASE = "erase"


class BrushParameters(BaseModel):
    radius: float = config.DEFAULT_BRUSH_RADIUS
    strength: float = config.DEFAULT_BRUSH_STRENGTH
    alpha_cap: float = config.DEFAULT_BRUSH_ALPHA
    mode: BrushMode = BrushMode.ADD

    @field_validator("radius")
    @classmethod
    def _check_radius(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"radius must be a positive finite number, got {value}")
        return value

    @field_validator("strength", "alpha_cap", mode="before")
    @classmethod
    def _clamp(cls, value: object) -> float:
        """Out-of-range energy values are normalized rather than rejected."""
        return min(1.0, max(0.0, float(value)))  # type: ignore[arg-type]


class RenderParameters(BaseModel):
    global_opacity: float = config.DEFAULT_OPACITY
    blur: float = config.DEFAULT_BLUR

    @field_validator("global_opacity", "blur", mode="before")
    @classmethod
    def _clamp(cls, value: object) -> float:
        return min(1.0, max(0.0, float(value)))  # type: ignore[arg-type]
