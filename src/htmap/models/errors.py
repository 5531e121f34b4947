from enum import Enum
from typing import Any

from pydantic import BaseModel


class ProcessingStage(str, Enum):
    LOAD = "load"
    EXTRACT = "extract"
    FILL = "fill"
    RENDER = "render"
    SAVE = "save"


class ProcessingError(BaseModel):
    stage: ProcessingStage
    error_type: str
    recoverable: bool
    message: str
    details: dict[str, Any] = {}


class HeatmapError(Exception):
    """Base class for errors raised by the intensity-field engine."""


class InputError(HeatmapError):
    """Source image is unreadable, empty, or not an RGBA pixel buffer."""


class ConfigurationError(HeatmapError, ValueError):
    """
    A parameter has the wrong shape (stop count, brush radius, hex color string).

    Models validated by pydantic report the same problems as ``ValidationError``;
    ``ColorRamp.from_entries`` converts them.
    """
