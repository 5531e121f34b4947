import cv2
import numpy as np
import pytest

from htmap.models import InputError, ProcessingError, ProcessingStage
from htmap.utils import get_image_info, load_image, save_image, to_bgra, to_rgba


def test_to_rgba_from_bgr():
    bgr = np.zeros((2, 3, 3), dtype=np.uint8)
    bgr[..., 0] = 255  # blue in OpenCV order
    rgba = to_rgba(bgr)
    assert rgba.shape == (2, 3, 4)
    assert tuple(rgba[0, 0]) == (0, 0, 255, 255)


def test_to_rgba_from_grayscale_and_16bit():
    gray = np.full((2, 2), 100, dtype=np.uint8)
    assert tuple(to_rgba(gray)[1, 1]) == (100, 100, 100, 255)
    deep = np.full((2, 2, 3), 65535, dtype=np.uint16)
    assert tuple(to_rgba(deep)[0, 0]) == (255, 255, 255, 255)


def test_to_rgba_keeps_alpha():
    bgra = np.zeros((1, 1, 4), dtype=np.uint8)
    bgra[0, 0] = (10, 20, 30, 40)
    assert tuple(to_rgba(bgra)[0, 0]) == (30, 20, 10, 40)
    assert tuple(to_bgra(to_rgba(bgra))[0, 0]) == (10, 20, 30, 40)


def test_to_rgba_rejects_odd_channel_count():
    with pytest.raises(InputError):
        to_rgba(np.zeros((2, 2, 2), dtype=np.uint8))


def test_get_image_info(heat_map_image):
    info = get_image_info(heat_map_image)
    assert (info.width, info.height, info.channels) == (40, 30, 4)
    assert info.has_alpha
    assert info.megapixels == pytest.approx(0.0012)


def test_png_round_trip(tmp_path, heat_map_image):
    img = heat_map_image.copy()
    img[0, 0, 3] = 17
    saved = save_image(img, tmp_path / "nested" / "out.png")
    assert not isinstance(saved, ProcessingError)
    assert saved.exists()
    assert np.array_equal(load_image(saved), img)


def test_load_missing_file(tmp_path):
    result = load_image(tmp_path / "missing.png")
    assert isinstance(result, ProcessingError)
    assert result.error_type == "file_not_found"
    assert result.stage == ProcessingStage.LOAD


def test_load_corrupt_file(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    result = load_image(path)
    assert isinstance(result, ProcessingError)
    assert result.error_type == "imread_failed"


def test_load_three_channel_png_as_rgba(tmp_path):
    path = tmp_path / "map.png"
    bgr = np.zeros((4, 4, 3), dtype=np.uint8)
    bgr[..., 2] = 200
    cv2.imwrite(str(path), bgr)
    rgba = load_image(path)
    assert tuple(rgba[0, 0]) == (200, 0, 0, 255)
