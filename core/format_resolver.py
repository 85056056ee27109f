"""
Format Resolver
Maps an output extension (or, failing that, the input format) to an encoder
and its save options
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from utils.logger import logWarn


class OutputFormat(Enum):
    PNG = 'png'
    GIF = 'gif'
    JPEG = 'jpeg'
    TIFF = 'tiff'
    BMP = 'bmp'

    @property
    def pil_format(self) -> str:
        return self.value.upper()


EXTENSION_FORMATS: Dict[str, OutputFormat] = {
    '.png': OutputFormat.PNG,
    '.gif': OutputFormat.GIF,
    '.jpg': OutputFormat.JPEG,
    '.jpeg': OutputFormat.JPEG,
    '.tif': OutputFormat.TIFF,
    '.tiff': OutputFormat.TIFF,
    '.bmp': OutputFormat.BMP,
}

# Input format tag -> encoder used when the output extension is not recognised
FALLBACK_FORMATS: Dict[str, OutputFormat] = {
    'png': OutputFormat.PNG,
    'gif': OutputFormat.GIF,
    'tiff': OutputFormat.TIFF,
    'bmp': OutputFormat.BMP,
}

LAST_RESORT_FORMAT = OutputFormat.JPEG

TIFF_COMPRESSION = 'tiff_adobe_deflate'


@dataclass(frozen=True)
class EncoderSelection:
    format: OutputFormat
    options: Dict = field(default_factory=dict)
    fallback: bool = False


def normalize_extension(extension: str) -> str:
    ext = extension.strip().lower()
    if ext and not ext.startswith('.'):
        ext = f'.{ext}'
    return ext


def encoder_options(output_format: OutputFormat, quality: int) -> Dict:
    if output_format is OutputFormat.JPEG:
        return {'quality': quality}
    if output_format is OutputFormat.TIFF:
        return {'compression': TIFF_COMPRESSION}
    return {}


def resolve_encoder(extension: str, input_format: str, quality: int) -> EncoderSelection:
    """
    Pick the encoder for an output file.

    Args:
        extension: Output file extension, with or without the leading dot
        input_format: Detected format tag of the decoded source (e.g. 'png')
        quality: JPEG quality 0-100, ignored by every other encoder

    Returns:
        EncoderSelection with Pillow save options; fallback is True when the
        extension was not recognised
    """
    ext = normalize_extension(extension)
    output_format = EXTENSION_FORMATS.get(ext)
    fallback = False

    if output_format is None:
        output_format = FALLBACK_FORMATS.get((input_format or '').lower(), LAST_RESORT_FORMAT)
        fallback = True
        logWarn(f"Unsupported output extension '{ext or '(none)'}'; "
                f"writing {output_format.value} (input format: {input_format})")

    return EncoderSelection(
        format=output_format,
        options=encoder_options(output_format, quality),
        fallback=fallback,
    )
