import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

BG = (247, 247, 247)


def _make_image(width, height, color=BG, alpha=255):
    img = np.empty((height, width, 4), dtype=np.uint8)
    img[..., :3] = color
    img[..., 3] = alpha
    return img


@pytest.fixture
def bg():
    return BG


@pytest.fixture
def make_image():
    """Factory for uniform RGBA images, ``(height, width, 4)`` uint8."""
    return _make_image


@pytest.fixture
def heat_map_image():
    """40x30 background map with a red and an orange patch (existing heat)."""
    img = _make_image(40, 30)
    img[5:10, 5:10, :3] = (255, 80, 80)
    img[20:25, 25:30, :3] = (255, 128, 0)
    return img
