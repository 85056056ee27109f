"""
Scaler
Bilinear resample to computed target dimensions, only when a resize is due
"""
from PIL import Image

from core.models import Dimensions

# Modes Pillow resamples with NEAREST regardless of the filter requested
_NEAREST_ONLY_MODES = ('1', 'P')


def _prepare_for_bilinear(image: Image.Image) -> Image.Image:
    if image.mode not in _NEAREST_ONLY_MODES:
        return image
    if image.mode == 'P' and 'transparency' in image.info:
        return image.convert('RGBA')
    return image.convert('RGB')


def scale(image: Image.Image, target: Dimensions, resized: bool) -> Image.Image:
    """
    Resample image to target when resized is set.

    A skipped resize returns the same image object so a plain conversion
    stays pixel-exact.
    """
    if not resized:
        return image

    source = _prepare_for_bilinear(image)
    return source.resize((target.width, target.height), Image.Resampling.BILINEAR)
