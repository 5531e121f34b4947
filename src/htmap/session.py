"""Editing session: owns one image's intensity field and its edit history."""

from __future__ import annotations

import logging
from collections import deque
from typing import Any

import numpy as np
from numpy.typing import NDArray

from htmap import config
from htmap.models import (
    BrushMode,
    BrushParameters,
    ColorRamp,
    ColorStop,
    IntensityField,
    InteractionMode,
    RenderParameters,
)
from htmap.models.ramp import coerce_ramp
from htmap.nodes.brush import apply_brush
from htmap.nodes.classification import RGB
from htmap.nodes.compositing import render as render_heatmap
from htmap.nodes.extraction import extract_intensity, validate_source
from htmap.nodes.region_fill import fill_region

logger = logging.getLogger(__name__)


class EditingSession:
    """
    Single-writer owner of a source image, its intensity field and history.

    Brush strokes, fills and renders must be called one at a time; the
    session holds no locks. Heat snapshots and ramp edits are kept in bounded
    undo stacks of ``config.MAX_HISTORY`` entries.
    """

    def __init__(
        self,
        source: NDArray[Any],
        bg: RGB = config.MAP_BG_COLOR,
        sensitivity: float = config.DEFAULT_SENSITIVITY,
        ramp: ColorRamp | None = None,
        render_params: RenderParameters | None = None,
        brush: BrushParameters | None = None,
    ):
        self.source = validate_source(source)
        self.bg = bg
        self.ramp = coerce_ramp(ramp) if ramp is not None else ColorRamp.default()
        self.render_params = render_params or RenderParameters()
        self.brush = brush or BrushParameters()
        self.mode = InteractionMode.MOVE

        self._heat_history: deque[NDArray[np.float64]] = deque(maxlen=config.MAX_HISTORY)
        self._ramp_history: deque[ColorRamp] = deque(maxlen=config.MAX_HISTORY)
        self.field = extract_intensity(self.source, bg, sensitivity)

    @property
    def sensitivity(self) -> float:
        return self.field.sensitivity

    @property
    def heat_history_depth(self) -> int:
        return len(self._heat_history)

    @property
    def ramp_history_depth(self) -> int:
        return len(self._ramp_history)

    # --- heat editing ---

    def set_mode(self, mode: InteractionMode | str) -> None:
        self.mode = InteractionMode(mode)

    def save_heat_snapshot(self) -> None:
        self._heat_history.append(self.field.snapshot())

    def begin_stroke(self) -> None:
        """Record one undo step for the stroke that is about to start."""
        if self.mode in (InteractionMode.DRAW, InteractionMode.ERASE):
            self.save_heat_snapshot()

    def stroke(self, x: float, y: float) -> bool:
        """
        Apply one stroke sample at image coordinates ``(x, y)``.

        Draw mode adds heat, erase mode removes it; move mode ignores the
        sample. Returns whether the field was touched.
        """
        if self.mode == InteractionMode.DRAW:
            mode = BrushMode.ADD
        elif self.mode == InteractionMode.ERASE:
            mode = BrushMode.REMOVE
        else:
            return False
        apply_brush(
            self.field, x, y, self.brush.radius, self.brush.strength, self.brush.alpha_cap, mode
        )
        return True

    def undo_heat(self) -> bool:
        if not self._heat_history:
            return False
        self.field.restore(self._heat_history.pop())
        return True

    def auto_fill(self) -> None:
        """Discard current heat and rebuild it from the region fill."""
        self.save_heat_snapshot()
        self.field.reset()
        fill_region(self.field, self.source, self.bg)
        self.field.filled = True

    def set_sensitivity(self, sensitivity: float) -> None:
        """Re-extract the field; the new field supersedes the old one and its history."""
        self.field = extract_intensity(self.source, self.bg, sensitivity)
        self._heat_history.clear()
        logger.debug(f"Re-extracted field at sensitivity {self.field.sensitivity}")

    # --- ramp editing ---

    def set_ramp(self, ramp: ColorRamp | list[ColorStop]) -> None:
        new_ramp = coerce_ramp(ramp)
        self._ramp_history.append(self.ramp.model_copy(deep=True))
        self.ramp = new_ramp

    def undo_ramp(self) -> bool:
        if not self._ramp_history:
            return False
        self.ramp = self._ramp_history.pop()
        return True

    def undo(self) -> bool:
        """Undo heat while painting, otherwise undo the last ramp edit."""
        if self.mode in (InteractionMode.DRAW, InteractionMode.ERASE) and self._heat_history:
            return self.undo_heat()
        return self.undo_ramp()

    # --- rendering ---

    def set_render_params(
        self,
        global_opacity: float | None = None,
        blur: float | None = None,
    ) -> None:
        update: dict[str, float] = {}
        if global_opacity is not None:
            update["global_opacity"] = global_opacity
        if blur is not None:
            update["blur"] = blur
        self.render_params = RenderParameters(**{**self.render_params.model_dump(), **update})

    def render(self) -> NDArray[np.uint8]:
        return render_heatmap(
            self.source,
            self.field,
            self.ramp,
            global_opacity=self.render_params.global_opacity,
            blur=self.render_params.blur,
        )

    def reset(self) -> None:
        """Back to defaults: default ramp, render and brush settings, fresh field."""
        self.ramp = ColorRamp.default()
        self.render_params = RenderParameters()
        self.brush = BrushParameters()
        self.mode = InteractionMode.MOVE
        self._ramp_history.clear()
        self.set_sensitivity(config.DEFAULT_SENSITIVITY)
