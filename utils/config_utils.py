import copy
import os
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "transform": {
        "quality": 90,
        "no_enlarge": False,
    },
    "logging": {
        "verbose": False,
        "log_file": None,
    },
}


def _expand_string(value: str, variables: Dict[str, str]) -> str:
    # 1) Expand environment variables like ${VAR}
    expanded = os.path.expandvars(value)
    # 2) Expand {var} placeholders using provided variables
    try:
        expanded = expanded.format(**variables)
    except (KeyError, IndexError, ValueError):
        # Unknown placeholder or literal brace in text: keep as-is
        pass
    return expanded


def _expand_obj(obj: Any, variables: Dict[str, str]) -> Any:
    if isinstance(obj, str):
        return _expand_string(obj, variables)
    if isinstance(obj, list):
        return [_expand_obj(i, variables) for i in obj]
    if isinstance(obj, dict):
        return {k: _expand_obj(v, variables) for k, v in obj.items()}
    return obj


def resolve_config_placeholders(config: Dict[str, Any], config_dir: str | None = None) -> Dict[str, Any]:
    """Resolve placeholders in config using environment variables and known paths.

    Supported placeholders:
    - ${VAR} / $VAR: environment variables
    - {home}: user home directory
    - {config_dir}: directory holding the config file (defaults to CWD)
    """
    variables = {
        "home": os.path.expanduser("~"),
        "config_dir": config_dir or os.getcwd(),
    }

    current = _expand_obj(config, variables)

    # Keep resolving until we reach a fixed point (no more changes)
    for _ in range(5):
        next_resolved = _expand_obj(current, variables)
        if next_resolved == current:
            break
        current = next_resolved

    return current


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge override into a copy of base; nested dicts merge, other values replace."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged
