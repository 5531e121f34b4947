from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from htmap import config

from .errors import ProcessingError
from .params import RenderParameters
from .ramp import ColorRamp


class PipelineConfig(BaseModel):
    background: tuple[int, int, int] = config.MAP_BG_COLOR
    sensitivity: float = config.DEFAULT_SENSITIVITY
    ramp: ColorRamp = Field(default_factory=ColorRamp.default)
    render: RenderParameters = Field(default_factory=RenderParameters)

    # Discard extracted heat and rebuild it from the region fill
    auto_fill: bool = False

    @field_validator("sensitivity", mode="before")
    @classmethod
    def _clamp_sensitivity(cls, value: object) -> float:
        return min(1.0, max(0.0, float(value)))  # type: ignore[arg-type]


class PipelineState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    image_path: str
    output_path: str | None = None
    config: PipelineConfig = Field(default_factory=PipelineConfig)

    # RGBA uint8 arrays and the IntensityField are held as opaque values
    source: Any = None
    field: Any = None
    output: Any = None

    filled: bool = False
    saved_path: str | None = None

    errors: list[ProcessingError] = []
