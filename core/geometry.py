"""
Geometry Calculator
Computes fit-within target dimensions from source dimensions and bounds
Maintains aspect ratio, optionally refusing to enlarge
"""
import math
from typing import Tuple

from core.errors import InvalidDimensions
from core.models import MAX_DIMENSION, Bounds, Dimensions
from utils.validator import validate_bounds


def round_half_up(value: float) -> int:
    """Add 0.5 then truncate, identical for every derived axis"""
    return int(math.floor(value + 0.5))


def validate_source_dimensions(dims: Dimensions, label: str) -> None:
    """Reject decoded images that are empty or beyond the hard limit"""
    if dims.width <= 0 or dims.height <= 0:
        raise InvalidDimensions(f"The image {label} has invalid dimensions: {dims}.")

    if dims.width > MAX_DIMENSION or dims.height > MAX_DIMENSION:
        raise InvalidDimensions(
            f"The image {label} is too large: {dims} (maximum dimension is {MAX_DIMENSION})."
        )


def calculate_target_dimensions(source: Dimensions, bounds: Bounds, no_enlarge: bool = False) -> Tuple[Dimensions, bool]:
    """
    Fit source dimensions within bounds.

    Args:
        source: Decoded (and possibly rotated) image size
        bounds: Maximum width/height, zero meaning unconstrained on that axis
        no_enlarge: When set, any target larger than the source on either
            axis is discarded in favour of the source size (both axes)

    Returns:
        (target dimensions, resized flag)
    """
    validate_bounds(bounds.max_width, bounds.max_height)

    if bounds.is_unconstrained:
        return source, False

    target_width = bounds.max_width
    target_height = bounds.max_height

    if bounds.max_width == 0:
        # Height-only bound
        target_width = round_half_up(target_height * source.aspect_ratio)
    elif bounds.max_height == 0:
        # Width-only bound
        target_height = round_half_up(target_width * (source.height / source.width))
    else:
        bounds_aspect = bounds.max_width / bounds.max_height
        if source.aspect_ratio > bounds_aspect:
            # Relatively wider: width touches the box
            target_width = bounds.max_width
            target_height = round_half_up(bounds.max_width / source.aspect_ratio)
        else:
            target_height = bounds.max_height
            target_width = round_half_up(bounds.max_height * source.aspect_ratio)

    if no_enlarge and (target_width > source.width or target_height > source.height):
        target_width = source.width
        target_height = source.height

    if target_width <= 0 or target_height <= 0:
        raise InvalidDimensions(
            f"Calculated target dimensions are invalid: {target_width}x{target_height}."
        )

    if target_width > MAX_DIMENSION or target_height > MAX_DIMENSION:
        raise InvalidDimensions(
            f"Target dimensions {target_width}x{target_height} exceed maximum dimension of {MAX_DIMENSION}."
        )

    target = Dimensions(target_width, target_height)
    return target, target != source


def describe_resize_mode(bounds: Bounds, no_enlarge: bool) -> str:
    mode = "maintaining aspect ratio"
    if bounds.max_width > 0 and bounds.max_height > 0:
        mode = f"fit within {bounds.max_width}x{bounds.max_height}"
    if no_enlarge:
        mode += ", no enlargement"
    return mode
