"""
Image Pipeline
Sequences decode -> rotate -> resize -> encode (or decode -> clip -> encode)
for a single image and reports what was done
"""
from pathlib import Path
from typing import Dict, Optional

from core.format_resolver import resolve_encoder
from core.geometry import calculate_target_dimensions, describe_resize_mode, validate_source_dimensions
from core.image_codec import image_dimensions, load_image, probe_image, save_image
from core.models import Bounds, ClipRegion, ImageInfo, TransformOutcome
from core.region_clipper import clip, validate_clip_coordinates, validate_clip_region
from core.rotator import rotate, rotated_dimensions
from core.scaler import scale
from utils.config_utils import DEFAULT_CONFIG
from utils.logger import logDebug, logInfo
from utils.validator import validate_quality, validate_transform_params


class ImagePipeline:
    def __init__(self, config: Optional[Dict] = None):
        self.config = config or DEFAULT_CONFIG
        transform_config = self.config.get('transform', {})
        self.default_quality = transform_config.get('quality', 90)
        self.default_no_enlarge = transform_config.get('no_enlarge', False)

    def transform(
        self,
        input_path: str,
        output_path: str,
        width: int = 0,
        height: int = 0,
        quality: Optional[int] = None,
        no_enlarge: Optional[bool] = None,
        rotate_angle: int = 0,
    ) -> TransformOutcome:
        """
        Rotate and/or fit an image within bounds, then re-encode it.

        Args:
            input_path: Source image
            output_path: Destination; its extension picks the encoder
            width: Maximum width, 0 for unconstrained
            height: Maximum height, 0 for unconstrained
            quality: JPEG quality 0-100 (config default when None)
            no_enlarge: Keep source size if the fit would enlarge (config default when None)
            rotate_angle: Clockwise rotation, one of 0/90/180/270

        Returns:
            TransformOutcome describing the run

        Raises:
            ImgrError subclasses, tagged by the stage that failed
        """
        quality = self.default_quality if quality is None else quality
        no_enlarge = self.default_no_enlarge if no_enlarge is None else no_enlarge

        validate_transform_params(width, height, quality, rotate_angle)

        source_image, input_format = load_image(input_path)
        original_size = image_dimensions(source_image)
        validate_source_dimensions(original_size, input_path)
        name = Path(input_path).name

        # Rotate first so dimension fitting sees the rotated shape
        image = rotate(source_image, rotate_angle)
        working_size = rotated_dimensions(original_size, rotate_angle)
        if rotate_angle:
            logInfo(f"🔄 Rotated {name} {rotate_angle}° clockwise: {original_size} → {working_size}")

        bounds = Bounds(width, height)
        target_size, resized = calculate_target_dimensions(working_size, bounds, no_enlarge)

        if bounds.is_unconstrained:
            message = f"Converting {name} [{input_format}] {working_size} (no resize)"
        elif not resized:
            message = f"Converting {name} [{input_format}] {working_size} (no resize needed)"
        else:
            message = (
                f"Resizing {name} [{input_format}] from {working_size} to {target_size} "
                f"({describe_resize_mode(bounds, no_enlarge)})"
            )
        if rotate_angle:
            message += f", rotated {rotate_angle}° clockwise"

        image = scale(image, target_size, resized)
        if resized:
            logInfo(f"🔧 Scaled image: {working_size} → {target_size}")

        selection = resolve_encoder(Path(output_path).suffix, input_format, quality)
        save_image(image, output_path, selection)
        logInfo(f"💾 Saved {output_path} as {selection.format.value}")

        return TransformOutcome(
            input_file=str(input_path),
            output_file=str(output_path),
            format=input_format,
            original_size=original_size,
            final_size=target_size,
            resized=resized,
            message=message,
        )

    def clip(
        self,
        input_path: str,
        output_path: str,
        region: ClipRegion,
        quality: Optional[int] = None,
    ) -> TransformOutcome:
        """Extract region from the input and encode it to output_path"""
        quality = self.default_quality if quality is None else quality

        validate_quality(quality)
        validate_clip_coordinates(region)

        source_image, input_format = load_image(input_path)
        original_size = image_dimensions(source_image)
        validate_source_dimensions(original_size, input_path)
        validate_clip_region(region, original_size)

        image = clip(source_image, region)
        final_size = region.size
        name = Path(input_path).name
        logInfo(f"✂️  Clipped {name} {original_size} to {region}")

        selection = resolve_encoder(Path(output_path).suffix, input_format, quality)
        save_image(image, output_path, selection)
        logInfo(f"💾 Saved {output_path} as {selection.format.value}")

        return TransformOutcome(
            input_file=str(input_path),
            output_file=str(output_path),
            format=input_format,
            original_size=original_size,
            final_size=final_size,
            resized=False,
            message=f"Clipping {name} [{input_format}] {original_size} to region {region}, {final_size}",
        )

    def info(self, input_path: str) -> ImageInfo:
        info = probe_image(input_path)
        logDebug(f"Probed {info.path}: {info.format} {info.width}x{info.height}")
        return info
