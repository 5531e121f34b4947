"""Intensity field: per-pixel heat values plus the label protection mask."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from htmap import config

from .errors import InputError


@dataclass
class IntensityField:
    """
    Scalar heat field over the image grid.

    ``intensity`` and ``protection_mask`` are ``(height, width)`` C-ordered
    arrays, so the flat index of pixel ``(x, y)`` is ``y * width + x``.
    The field owns both arrays; brush and fill operators mutate ``intensity``
    in place and never touch cells where ``protection_mask`` is set.
    """

    width: int
    height: int
    intensity: NDArray[np.float64]
    protection_mask: NDArray[np.bool_]
    sensitivity: float = config.DEFAULT_SENSITIVITY
    # Set when the region fill produced the heat rather than the image colors
    filled: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InputError(f"Field dimensions must be positive, got {self.width}x{self.height}")
        shape = (self.height, self.width)
        if self.intensity.shape != shape or self.protection_mask.shape != shape:
            raise InputError(
                f"Field arrays must have shape {shape}, got intensity {self.intensity.shape} "
                f"and mask {self.protection_mask.shape}"
            )

    @classmethod
    def empty(
        cls,
        width: int,
        height: int,
        protection_mask: NDArray[np.bool_] | None = None,
        sensitivity: float = config.DEFAULT_SENSITIVITY,
    ) -> IntensityField:
        """Create an all-zero field, optionally with a precomputed mask."""
        if protection_mask is None:
            protection_mask = np.zeros((height, width), dtype=bool)
        return cls(
            width=width,
            height=height,
            intensity=np.zeros((height, width), dtype=np.float64),
            protection_mask=np.ascontiguousarray(protection_mask, dtype=bool),
            sensitivity=sensitivity,
        )

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def has_heat(self) -> bool:
        return bool(np.any(self.intensity > 0.0))

    def reset(self) -> None:
        self.intensity.fill(0.0)

    def snapshot(self) -> NDArray[np.float64]:
        """Verbatim copy of the intensity array for undo history."""
        return self.intensity.copy()

    def restore(self, snapshot: NDArray[np.float64]) -> None:
        if snapshot.shape != self.intensity.shape:
            raise InputError(
                f"Snapshot shape {snapshot.shape} does not match field shape {self.intensity.shape}"
            )
        np.copyto(self.intensity, snapshot)
