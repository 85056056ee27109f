"""
Image Codec
Decodes input files into Pillow images, writes encoded output safely and
probes basic file/image properties

HEIF/HEIC inputs are routed to pillow-heif by extension; everything else goes
through Pillow's own plugins (JPEG, PNG, GIF, TIFF, BMP, WebP)
"""
import os
import tempfile
from pathlib import Path
from typing import Tuple

import pillow_heif
from PIL import Image

from core.errors import DecodeFailure, EncodeFailure, InvalidDimensions
from core.format_resolver import EncoderSelection, OutputFormat
from core.models import MAX_DIMENSION, Dimensions, ImageInfo
from utils.logger import logDebug

# Pillow's decompression-bomb guard stops far below the per-axis limit;
# raise it so validate_source_dimensions decides what is too large
Image.MAX_IMAGE_PIXELS = MAX_DIMENSION * MAX_DIMENSION

HEIF_EXTENSIONS = ('.heic', '.heif')

# Pillow format names that share a tag with a more common one
FORMAT_ALIASES = {
    'mpo': 'jpeg',
    'jpg': 'jpeg',
    'tif': 'tiff',
}

ALPHA_MODES = ('RGBA', 'LA', 'PA', 'RGBa', 'La')

# Modes each encoder accepts without conversion
ENCODER_MODES = {
    OutputFormat.JPEG: ('L', 'RGB', 'CMYK'),
    OutputFormat.PNG: ('1', 'L', 'LA', 'I;16', 'P', 'RGB', 'RGBA'),
    OutputFormat.GIF: ('1', 'L', 'LA', 'P', 'RGB', 'RGBA'),
    OutputFormat.BMP: ('1', 'L', 'P', 'RGB', 'RGBA'),
}


def detect_format_tag(image: Image.Image, path) -> str:
    tag = (image.format or Path(path).suffix.lstrip('.')).lower()
    return FORMAT_ALIASES.get(tag, tag)


def has_alpha(image: Image.Image) -> bool:
    if image.mode in ALPHA_MODES:
        return True
    return image.mode == 'P' and 'transparency' in image.info


def image_dimensions(image: Image.Image) -> Dimensions:
    width, height = image.size
    return Dimensions(width, height)


def _decode_heif(path: Path) -> Tuple[Image.Image, str]:
    heif_file = pillow_heif.open_heif(str(path), convert_hdr_to_8bit=True)
    return heif_file.to_pillow(), 'heif'


def _decode_general(path: Path) -> Tuple[Image.Image, str]:
    with Image.open(path) as opened:
        format_tag = detect_format_tag(opened, path)
        opened.load()
        # Detach from the file handle; multi-frame plugins keep it open
        image = opened.copy()
    return image, format_tag


def load_image(path) -> Tuple[Image.Image, str]:
    """
    Decode an image file.

    Returns:
        (image, format tag), the tag being lower-case ('jpeg', 'png', 'heif', ...)

    Raises:
        DecodeFailure: file missing, unreadable, corrupt or unsupported
    """
    path = Path(path)
    try:
        if path.suffix.lower() in HEIF_EXTENSIONS:
            image, format_tag = _decode_heif(path)
        else:
            image, format_tag = _decode_general(path)
    except Exception as e:
        raise DecodeFailure(
            f"The image file {path} could not be decoded (possibly corrupt or unsupported format): {e}"
        ) from e

    if image is None:
        raise DecodeFailure(f"The decoded image from {path} is invalid.")

    logDebug(f"Decoded {path.name} [{format_tag}] {image.size[0]}x{image.size[1]} mode={image.mode}")
    return image, format_tag


def _prepare_for_encoder(image: Image.Image, output_format: OutputFormat) -> Image.Image:
    allowed = ENCODER_MODES.get(output_format)
    if allowed is None or image.mode in allowed:
        return image

    if output_format is OutputFormat.JPEG and has_alpha(image):
        # JPEG has no alpha channel: flatten onto white
        rgba = image.convert('RGBA')
        background = Image.new('RGB', image.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background

    if output_format is OutputFormat.PNG and image.mode == 'I':
        # PNG stores 32-bit integer images as 16-bit greyscale
        return image.convert('I;16')

    return image.convert('RGBA' if has_alpha(image) else 'RGB')


def _new_file_mode() -> int:
    # mkstemp creates files as 0600; outputs get the usual umask-derived mode
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save_image(image: Image.Image, output_path, selection: EncoderSelection) -> None:
    """
    Encode image to output_path with the resolved encoder.

    Bytes go to a uniquely named hidden temporary file beside the target which
    replaces the target only after a complete write; on failure the temporary
    file is removed so no truncated output is left behind.
    """
    output_path = Path(output_path)
    tmp_path = None
    try:
        prepared = _prepare_for_encoder(image, selection.format)
        fd, tmp_name = tempfile.mkstemp(
            dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, 'wb') as f:
            prepared.save(f, format=selection.format.pil_format, **selection.options)
        os.chmod(tmp_path, _new_file_mode())
        tmp_path.replace(output_path)
    except Exception as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise EncodeFailure(
            f"The output file {output_path} could not be written: "
            f"Failed to encode image as {selection.format.value}: {e}"
        ) from e

    logDebug(f"Encoded {output_path} as {selection.format.value} {selection.options}")


def probe_image(path) -> ImageInfo:
    """Collect file and image properties for the info command"""
    path = Path(path)
    try:
        size_bytes = path.stat().st_size
    except OSError as e:
        raise DecodeFailure(f"The file {path} could not be accessed: {e}") from e

    if size_bytes == 0:
        raise DecodeFailure(f"The file {path} is empty.")

    image, format_tag = load_image(path)
    dims = image_dimensions(image)
    if dims.width <= 0 or dims.height <= 0:
        raise InvalidDimensions(f"The image {path} has invalid dimensions: {dims}.")

    return ImageInfo(
        file=path.name,
        path=str(path),
        format=format_tag,
        width=dims.width,
        height=dims.height,
        aspect_ratio=dims.aspect_ratio,
        has_alpha=has_alpha(image),
        color_model=image.mode,
        file_size_bytes=size_bytes,
        file_size_kb=size_bytes / 1024.0,
    )
