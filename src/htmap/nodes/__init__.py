"""Pipeline nodes for heatmap processing.

This module intentionally uses lazy imports so that importing the package
does not pull in OpenCV until a node actually runs.
"""

from __future__ import annotations

from htmap.models import PipelineState


def load(state: PipelineState) -> PipelineState:
    from htmap.nodes.loading import load as _load

    return _load(state)


def extract(state: PipelineState) -> PipelineState:
    from htmap.nodes.heatmap import extract as _extract

    return _extract(state)


def auto_fill(state: PipelineState) -> PipelineState:
    from htmap.nodes.heatmap import auto_fill as _auto_fill

    return _auto_fill(state)


def render(state: PipelineState) -> PipelineState:
    from htmap.nodes.heatmap import render as _render

    return _render(state)


def save(state: PipelineState) -> PipelineState:
    from htmap.nodes.loading import save as _save

    return _save(state)


__all__ = [
    "auto_fill",
    "extract",
    "load",
    "render",
    "save",
]
