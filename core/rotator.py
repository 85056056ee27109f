"""
Rotator
Fixed-angle clockwise rotation of a decoded image
"""
from PIL import Image

from core.errors import InvalidParameter
from core.models import Dimensions

VALID_ANGLES = (0, 90, 180, 270)

# Pillow's ROTATE_* constants turn counter-clockwise
CLOCKWISE_TRANSPOSE = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


def validate_angle(angle: int) -> None:
    if angle not in VALID_ANGLES:
        raise InvalidParameter(
            f"Rotation angle must be one of 0, 90, 180 or 270 degrees, but got {angle}."
        )


def rotated_dimensions(dims: Dimensions, angle: int) -> Dimensions:
    if angle in (90, 270):
        return Dimensions(dims.height, dims.width)
    return dims


def rotate(image: Image.Image, angle: int) -> Image.Image:
    """
    Rotate clockwise by angle.

    0 hands back the very same image; any other valid angle returns a new
    image and leaves the source untouched.
    """
    validate_angle(angle)
    if angle == 0:
        return image
    return image.transpose(CLOCKWISE_TRANSPOSE[angle])
