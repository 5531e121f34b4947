"""Load and save nodes: decode the map image and write the rendered result."""

import logging
from pathlib import Path

from htmap import config
from htmap.models import PipelineState, ProcessingError, ProcessingStage
from htmap.utils import cv_utils

logger = logging.getLogger(__name__)


def default_output_path(image_path: str) -> Path:
    source_path = Path(image_path)
    return source_path.with_name(
        f"{source_path.stem}{config.DEFAULT_OUTPUT_SUFFIX}{config.DEFAULT_OUTPUT_EXTENSION}"
    )


def load(state: PipelineState) -> PipelineState:
    """
    Decode the source image into an RGBA array.

    Updates state with:
    - source: RGBA uint8 array
    - errors: Any processing errors encountered
    """
    image = cv_utils.load_image(state.image_path, stage=ProcessingStage.LOAD)
    if isinstance(image, ProcessingError):
        return state.model_copy(update={"errors": state.errors + [image]})

    info = cv_utils.get_image_info(image)
    logger.info(f"Loaded {state.image_path} ({info.width}x{info.height})")
    return state.model_copy(update={"source": image})


def save(state: PipelineState) -> PipelineState:
    """
    Write the rendered image next to the input unless an output path is set.

    Updates state with:
    - saved_path: Path of the written file
    - errors: Any processing errors encountered
    """
    if state.output is None:
        return state.model_copy(update={"errors": state.errors + [ProcessingError(
            stage=ProcessingStage.SAVE,
            error_type="missing_output",
            recoverable=False,
            message="Nothing was rendered",
        )]})

    out_path = Path(state.output_path) if state.output_path else default_output_path(state.image_path)
    result = cv_utils.save_image(state.output, out_path, stage=ProcessingStage.SAVE)
    if isinstance(result, ProcessingError):
        return state.model_copy(update={"errors": state.errors + [result]})

    logger.info(f"Saved heatmap to {result}")
    return state.model_copy(update={"saved_path": str(result)})
