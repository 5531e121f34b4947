import numpy as np
import pytest

from htmap.models import InputError, IntensityField
from htmap.nodes.brush import add_heat
from htmap.nodes.classification import label_mask
from htmap.nodes.region_fill import fill_region, seed_candidates

TINT = (200, 220, 240)


def _centroid_only(width, height):
    field = IntensityField.empty(width, height)
    add_heat(field, width // 2, height // 2, min(width, height) / 3, 0.6)
    return field.intensity


def _field_for(img):
    return IntensityField.empty(img.shape[1], img.shape[0], protection_mask=label_mask(img))


def test_seed_grid_is_eleven_by_eleven_around_center():
    seeds = seed_candidates(200, 200)
    assert len(seeds) == 121
    assert seeds[0] == (20, 20)
    assert seeds[-1] == (170, 170)
    assert (95, 95) in seeds
    assert (100, 100) not in seeds


def test_background_only_image_gets_only_centroid_brush(make_image, bg):
    img = make_image(50, 40)
    field = _field_for(img)
    fill_region(field, img, bg)
    assert np.array_equal(field.intensity, _centroid_only(50, 40))


def test_pixels_within_seed_distance_do_not_seed(make_image, bg):
    # distance 9 from the background: can grow, cannot seed
    img = make_image(60, 60, color=(247, 247, 238))
    field = _field_for(img)
    fill_region(field, img, bg)
    assert np.array_equal(field.intensity, _centroid_only(60, 60))


def test_growth_threshold_is_looser_than_seed_threshold(make_image, bg):
    img = make_image(300, 300, color=(247, 247, 238))
    img[145:156, 145:156, :3] = TINT
    field = _field_for(img)
    fill_region(field, img, bg)
    # corners are beyond the centroid brush (radius 100) but reached by the flood
    assert field.intensity[0, 0] == pytest.approx(0.1)
    assert field.intensity[299, 299] == pytest.approx(0.1)


def test_fill_sets_flat_baseline_and_centroid_peak(make_image, bg):
    img = make_image(400, 400)
    img[180:221, :, :3] = TINT
    field = _field_for(img)
    fill_region(field, img, bg)

    assert field.intensity[200, 5] == pytest.approx(0.1)
    assert field.intensity[200, 395] == pytest.approx(0.1)
    assert field.intensity[5, 5] == 0.0
    assert field.intensity[200, 200] == pytest.approx(0.7)
    assert field.intensity.max() <= 1.0


def test_flood_stops_at_boundary_lines(make_image, bg):
    img = make_image(400, 400)
    img[180:221, :, :3] = TINT
    img[:, 100, :3] = (150, 150, 150)
    field = _field_for(img)
    fill_region(field, img, bg)

    assert field.intensity[200, 50] == 0.0
    assert field.intensity[200, 350] == pytest.approx(0.1)


def test_flood_never_touches_label_pixels(make_image, bg):
    img = make_image(400, 400)
    img[180:221, :, :3] = TINT
    img[:, 300, :3] = (30, 30, 60)
    field = _field_for(img)
    assert field.protection_mask[200, 300]
    fill_region(field, img, bg)

    assert field.intensity[200, 300] == 0.0
    assert field.intensity[200, 350] == 0.0
    assert field.intensity[200, 5] == pytest.approx(0.1)


def test_fill_is_not_idempotent(make_image, bg):
    img = make_image(50, 40)
    field = _field_for(img)
    fill_region(field, img, bg)
    once = field.snapshot()
    fill_region(field, img, bg)
    assert field.intensity[20, 25] > once[20, 25]


def test_shape_mismatch_rejected(make_image, bg):
    field = IntensityField.empty(10, 10)
    with pytest.raises(InputError):
        fill_region(field, make_image(12, 10), bg)
