"""Pipeline nodes wrapping extraction, region fill and compositing."""

import logging

from htmap.models import HeatmapError, PipelineState, ProcessingError, ProcessingStage

from .compositing import render as render_heatmap
from .extraction import extract_intensity
from .region_fill import fill_region

logger = logging.getLogger(__name__)


def _failure(state: PipelineState, stage: ProcessingStage, error: HeatmapError) -> PipelineState:
    return state.model_copy(update={"errors": state.errors + [ProcessingError(
        stage=stage,
        error_type=type(error).__name__,
        recoverable=False,
        message=str(error),
    )]})


def extract(state: PipelineState) -> PipelineState:
    """
    Build the intensity field from the loaded pixels.

    Updates state with:
    - field: IntensityField
    - filled: True when the region fill bootstrapped the field
    - errors: Any processing errors encountered
    """
    cfg = state.config
    try:
        field = extract_intensity(state.source, cfg.background, cfg.sensitivity)
    except HeatmapError as e:
        return _failure(state, ProcessingStage.EXTRACT, e)

    return state.model_copy(update={"field": field, "filled": field.filled})


def auto_fill(state: PipelineState) -> PipelineState:
    """
    Replace the extracted heat with a fresh region fill.

    The field is zeroed first so the result does not depend on what
    extraction produced.
    """
    field = state.field
    try:
        field.reset()
        fill_region(field, state.source, state.config.background)
        field.filled = True
    except HeatmapError as e:
        return _failure(state, ProcessingStage.FILL, e)

    logger.info("Region fill applied")
    return state.model_copy(update={"field": field, "filled": True})


def render(state: PipelineState) -> PipelineState:
    """
    Composite the field onto the source image.

    Updates state with:
    - output: RGBA uint8 array
    - errors: Any processing errors encountered
    """
    cfg = state.config
    try:
        output = render_heatmap(
            state.source,
            state.field,
            cfg.ramp,
            global_opacity=cfg.render.global_opacity,
            blur=cfg.render.blur,
        )
    except HeatmapError as e:
        return _failure(state, ProcessingStage.RENDER, e)

    return state.model_copy(update={"output": output})
