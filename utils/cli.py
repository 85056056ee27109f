import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from core.errors import InvalidParameter
from utils.config_utils import DEFAULT_CONFIG, merge_config, resolve_config_placeholders
from utils.logger import logDebug, logError
from utils.validator import validate_config

CONFIG_ENV = "IMGR_CONFIG"
USER_CONFIG = Path("~/.config/imgr/config.json")


def resolve_config_path(explicit: Optional[str] = None) -> Optional[str]:
    """Config lookup order: --config flag, $IMGR_CONFIG, ~/.config/imgr/config.json if present."""
    if explicit:
        return explicit
    env_path = os.getenv(CONFIG_ENV)
    if env_path:
        return env_path
    user_path = USER_CONFIG.expanduser()
    if user_path.exists():
        return str(user_path)
    return None


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Load a JSON config over the defaults; exits with status 1 on a bad file."""
    if not path:
        return merge_config(DEFAULT_CONFIG, {})

    if not os.path.exists(path):
        logError(f"Config file not found: {path}")
        sys.exit(1)

    try:
        with open(path, "r") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise InvalidParameter(f"Config file {path} must contain a JSON object.")
        resolved = resolve_config_placeholders(raw, config_dir=str(Path(path).resolve().parent))
        config = merge_config(DEFAULT_CONFIG, resolved)
        validate_config(config)
    except (json.JSONDecodeError, InvalidParameter) as e:
        logError(f"Failed to parse config: {e}")
        sys.exit(1)

    logDebug(f"Loaded config: {path}")
    return config
