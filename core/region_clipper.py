"""
Region Clipper
Validates clip rectangles and copies the selected window into a new image
"""
from PIL import Image

from core.errors import InvalidParameter, RegionOutOfBounds
from core.models import ClipRegion, Dimensions


def validate_clip_coordinates(region: ClipRegion) -> None:
    """Checks that need no knowledge of the source image"""
    for name in ('x1', 'y1', 'x2', 'y2'):
        value = getattr(region, name)
        if value < 0:
            raise InvalidParameter(f"{name} cannot be negative, but got {value}.")

    if region.x2 <= region.x1:
        raise InvalidParameter(
            f"x2 must be greater than x1, but got x1={region.x1} and x2={region.x2}."
        )
    if region.y2 <= region.y1:
        raise InvalidParameter(
            f"y2 must be greater than y1, but got y1={region.y1} and y2={region.y2}."
        )


def validate_clip_region(region: ClipRegion, source: Dimensions) -> None:
    validate_clip_coordinates(region)

    if region.x2 > source.width:
        raise RegionOutOfBounds(
            f"x2 must not exceed the image width of {source.width}, but got {region.x2}."
        )
    if region.y2 > source.height:
        raise RegionOutOfBounds(
            f"y2 must not exceed the image height of {source.height}, but got {region.y2}."
        )


def clip(image: Image.Image, region: ClipRegion) -> Image.Image:
    """Straight copy of the window, alpha kept as-is"""
    clipped = image.crop(region.box)
    # crop is lazy for some plugins; force a standalone buffer
    clipped.load()
    return clipped
