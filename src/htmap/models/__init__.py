from .errors import (
    ConfigurationError,
    HeatmapError,
    InputError,
    ProcessingError,
    ProcessingStage,
)
from .field import IntensityField
from .params import BrushMode, BrushParameters, InteractionMode, RenderParameters
from .ramp import ColorRamp, ColorStop, hex_to_rgb
from .state import PipelineConfig, PipelineState

__all__ = [
    "BrushMode",
    "BrushParameters",
    "ColorRamp",
    "ColorStop",
    "ConfigurationError",
    "HeatmapError",
    "InputError",
    "IntensityField",
    "InteractionMode",
    "PipelineConfig",
    "PipelineState",
    "ProcessingError",
    "ProcessingStage",
    "RenderParameters",
    "hex_to_rgb",
]
