import pytest

from core.errors import InvalidDimensions, InvalidParameter
from core.geometry import (
    calculate_target_dimensions,
    describe_resize_mode,
    round_half_up,
    validate_source_dimensions,
)
from core.models import Bounds, Dimensions


def test_width_only_bound():
    target, resized = calculate_target_dimensions(Dimensions(1920, 1080), Bounds(800, 0))
    assert target == Dimensions(800, 450)
    assert resized


def test_width_limited_box():
    target, resized = calculate_target_dimensions(Dimensions(1920, 1080), Bounds(800, 600))
    assert target == Dimensions(800, 450)
    assert resized


def test_height_limited_box_rounds_half_up():
    # 600 * 1080/1920 = 337.5 exactly, which rounds up
    target, resized = calculate_target_dimensions(Dimensions(1080, 1920), Bounds(800, 600))
    assert target == Dimensions(338, 600)
    assert resized


def test_height_only_bound():
    target, _ = calculate_target_dimensions(Dimensions(1920, 1080), Bounds(0, 540))
    assert target == Dimensions(960, 540)


def test_no_enlarge_keeps_source_when_it_already_fits():
    target, resized = calculate_target_dimensions(Dimensions(800, 600), Bounds(2000, 2000), no_enlarge=True)
    assert target == Dimensions(800, 600)
    assert not resized


def test_enlarge_allowed_by_default():
    target, resized = calculate_target_dimensions(Dimensions(800, 600), Bounds(2000, 2000))
    assert target == Dimensions(2000, 1500)
    assert resized


def test_no_enlarge_single_axis_bound_falls_back_to_source():
    target, resized = calculate_target_dimensions(Dimensions(800, 600), Bounds(1600, 0), no_enlarge=True)
    assert target == Dimensions(800, 600)
    assert not resized


def test_no_enlarge_still_allows_shrinking():
    target, resized = calculate_target_dimensions(Dimensions(1920, 1080), Bounds(800, 0), no_enlarge=True)
    assert target == Dimensions(800, 450)
    assert resized


def test_unconstrained_bounds_are_identity():
    source = Dimensions(123, 456)
    target, resized = calculate_target_dimensions(source, Bounds(0, 0))
    assert target is source
    assert not resized


def test_bounds_equal_to_source_is_not_a_resize():
    target, resized = calculate_target_dimensions(Dimensions(640, 480), Bounds(640, 480))
    assert target == Dimensions(640, 480)
    assert not resized


@pytest.mark.parametrize('bounds', [Bounds(-1, 0), Bounds(0, -5)])
def test_negative_bounds_rejected(bounds):
    with pytest.raises(InvalidParameter, match='cannot be negative'):
        calculate_target_dimensions(Dimensions(100, 100), bounds)


def test_derived_axis_rounding_to_zero_is_invalid():
    with pytest.raises(InvalidDimensions, match='invalid: 10x0'):
        calculate_target_dimensions(Dimensions(1000, 1), Bounds(10, 0))


def test_derived_axis_above_hard_limit_is_invalid():
    with pytest.raises(InvalidDimensions, match='exceed maximum dimension of 65535'):
        calculate_target_dimensions(Dimensions(1, 100), Bounds(1000, 0))


@pytest.mark.parametrize('source', [
    Dimensions(1920, 1080), Dimensions(1080, 1920), Dimensions(333, 777),
    Dimensions(1, 3), Dimensions(4000, 3000), Dimensions(999, 1000),
])
@pytest.mark.parametrize('bound', [3, 7, 100, 640, 1001])
def test_single_axis_bound_preserves_aspect_ratio(source, bound):
    target, _ = calculate_target_dimensions(source, Bounds(bound, 0))
    assert target.width == bound
    assert abs(target.height - bound * source.height / source.width) <= 1

    target, _ = calculate_target_dimensions(source, Bounds(0, bound))
    assert target.height == bound
    assert abs(target.width - bound * source.width / source.height) <= 1


@pytest.mark.parametrize('source', [
    Dimensions(1920, 1080), Dimensions(1080, 1920), Dimensions(500, 500),
    Dimensions(333, 777), Dimensions(4000, 3000),
])
@pytest.mark.parametrize('bounds', [Bounds(800, 600), Bounds(600, 800), Bounds(300, 300), Bounds(1234, 99)])
def test_box_fit_stays_within_and_touches_an_edge(source, bounds):
    target, _ = calculate_target_dimensions(source, bounds)
    assert target.width <= bounds.max_width
    assert target.height <= bounds.max_height
    assert target.width == bounds.max_width or target.height == bounds.max_height


@pytest.mark.parametrize('value, expected', [(337.5, 338), (2.4, 2), (2.5, 3), (0.49, 0), (0.5, 1)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize('dims', [Dimensions(0, 10), Dimensions(10, -1)])
def test_source_with_empty_axis_rejected(dims):
    with pytest.raises(InvalidDimensions, match='invalid dimensions'):
        validate_source_dimensions(dims, 'photo.png')


def test_source_above_hard_limit_rejected():
    with pytest.raises(InvalidDimensions, match='too large: 70000x10'):
        validate_source_dimensions(Dimensions(70000, 10), 'huge.tif')


def test_describe_resize_mode():
    assert describe_resize_mode(Bounds(800, 0), False) == 'maintaining aspect ratio'
    assert describe_resize_mode(Bounds(800, 600), False) == 'fit within 800x600'
    assert describe_resize_mode(Bounds(800, 600), True) == 'fit within 800x600, no enlargement'
