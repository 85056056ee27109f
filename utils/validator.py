from typing import Any, Dict

from core.errors import InvalidParameter
from core.rotator import validate_angle


def validate_quality(quality):
    if quality < 0 or quality > 100:
        raise InvalidParameter(f"Quality must be between 0 and 100, but got {quality}.")


def validate_bounds(width, height):
    if width < 0:
        raise InvalidParameter(f"Width cannot be negative, but got {width}.")
    if height < 0:
        raise InvalidParameter(f"Height cannot be negative, but got {height}.")


def validate_transform_params(width, height, quality, rotate):
    """Eager checks run before the input is decoded.

    Order matches the order a user reads the flags: bounds, quality, rotation.
    """
    validate_bounds(width, height)
    validate_quality(quality)
    validate_angle(rotate)


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate types and ranges of the transform defaults in a loaded config.

    Returns True if validation passes.
    """
    transform = config.get("transform", {})
    if not isinstance(transform, dict):
        raise InvalidParameter(f"Config section 'transform' must be an object, but got {type(transform).__name__}.")

    quality = transform.get("quality", 90)
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidParameter(f"Config value transform.quality must be an integer, but got {quality!r}.")
    validate_quality(quality)

    no_enlarge = transform.get("no_enlarge", False)
    if not isinstance(no_enlarge, bool):
        raise InvalidParameter(f"Config value transform.no_enlarge must be true or false, but got {no_enlarge!r}.")

    logging_cfg = config.get("logging", {})
    if not isinstance(logging_cfg, dict):
        raise InvalidParameter(f"Config section 'logging' must be an object, but got {type(logging_cfg).__name__}.")

    log_file = logging_cfg.get("log_file")
    if log_file is not None and not isinstance(log_file, str):
        raise InvalidParameter(f"Config value logging.log_file must be a path string, but got {log_file!r}.")

    return True
