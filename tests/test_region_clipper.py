import numpy as np
import pytest

from core.errors import InvalidParameter, RegionOutOfBounds
from core.models import ClipRegion, Dimensions
from core.region_clipper import clip, validate_clip_coordinates, validate_clip_region
from tests.helpers import gradient_image


def test_equal_x_coordinates_rejected():
    with pytest.raises(InvalidParameter, match='x2 must be greater than x1'):
        validate_clip_coordinates(ClipRegion(50, 0, 50, 100))


def test_inverted_y_coordinates_rejected():
    with pytest.raises(InvalidParameter, match='y2 must be greater than y1'):
        validate_clip_coordinates(ClipRegion(0, 80, 10, 20))


@pytest.mark.parametrize('region, name', [
    (ClipRegion(-1, 0, 10, 10), 'x1'),
    (ClipRegion(0, -3, 10, 10), 'y1'),
    (ClipRegion(0, 0, -10, 10), 'x2'),
    (ClipRegion(0, 0, 10, -1), 'y2'),
])
def test_negative_coordinate_named(region, name):
    with pytest.raises(InvalidParameter, match=f'{name} cannot be negative'):
        validate_clip_coordinates(region)


def test_region_past_right_edge():
    with pytest.raises(RegionOutOfBounds, match='x2 must not exceed the image width of 64'):
        validate_clip_region(ClipRegion(10, 0, 65, 10), Dimensions(64, 48))


def test_region_past_bottom_edge():
    with pytest.raises(RegionOutOfBounds, match='y2 must not exceed the image height of 48'):
        validate_clip_region(ClipRegion(0, 10, 10, 49), Dimensions(64, 48))


def test_full_frame_region_is_valid():
    validate_clip_region(ClipRegion(0, 0, 64, 48), Dimensions(64, 48))


@pytest.mark.parametrize('region', [
    ClipRegion(0, 0, 1, 1),
    ClipRegion(5, 7, 20, 30),
    ClipRegion(0, 0, 40, 25),
    ClipRegion(39, 24, 40, 25),
])
def test_clip_dimension_law(region):
    out = clip(gradient_image(40, 25), region)
    assert out.size == (region.x2 - region.x1, region.y2 - region.y1)


def test_clip_copies_exact_window():
    src = gradient_image(40, 25)
    region = ClipRegion(5, 7, 20, 20)
    out = clip(src, region)
    assert np.array_equal(np.asarray(out), np.asarray(src)[7:20, 5:20])


def test_clip_keeps_alpha_as_is():
    src = gradient_image(10, 10, mode='RGBA')
    out = clip(src, ClipRegion(0, 0, 4, 4))
    assert out.mode == 'RGBA'
    # Pixel (0, 0) is fully transparent in the gradient and must stay so
    assert out.getpixel((0, 0))[3] == 0
    assert np.array_equal(np.asarray(out), np.asarray(src)[0:4, 0:4])


def test_clip_returns_independent_buffer():
    src = gradient_image(10, 10)
    out = clip(src, ClipRegion(0, 0, 5, 5))
    out.putpixel((0, 0), (255, 255, 255))
    assert src.getpixel((0, 0)) == (0, 0, 0)
