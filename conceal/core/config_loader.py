"""
conceal.core.config_loader
==========================
Reads configuration from presets, YAML files or plain dicts.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Union

import yaml

from conceal.core.exceptions import ConfigError


_PRESET_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "config",
    "presets",
)


def load_config(source: Union[str, Dict[str, Any], None]) -> Dict[str, Any]:
    """
    Load and return a config dict from various sources.

    Parameters
    ----------
    source : str, dict, or None
        - None       → returns empty dict (defaults apply)
        - dict       → returned as-is
        - preset name (no slashes, no .yaml/.yml) → conceal/config/presets/<name>.yaml
        - str path   → loaded from the YAML file at that path

    Raises
    ------
    ConfigError
        If the source is invalid, missing, or the YAML cannot be parsed.
    """
    if source is None:
        return {}

    if isinstance(source, dict):
        return source

    if isinstance(source, str):
        if _looks_like_preset(source):
            preset_path = os.path.join(_PRESET_DIR, f"{source}.yaml")
            if os.path.isfile(preset_path):
                return _read_yaml(preset_path)

        if not os.path.isfile(source):
            raise ConfigError(
                f"Config file or preset not found: {source!r}",
                details={"path": source, "presets": available_presets()},
            )
        return _read_yaml(source)

    raise ConfigError(
        f"Unsupported config source type: {type(source).__name__}",
        details={"source": repr(source)},
    )


def available_presets() -> list[str]:
    """Return the names of the bundled presets."""
    if not os.path.isdir(_PRESET_DIR):
        return []
    return sorted(
        name[:-len(".yaml")]
        for name in os.listdir(_PRESET_DIR)
        if name.endswith(".yaml")
    )


def _looks_like_preset(source: str) -> bool:
    return (
        os.sep not in source
        and "/" not in source
        and not source.endswith((".yaml", ".yml"))
    )


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(
            f"Failed to parse YAML config: {path!r}",
            details={"error": str(exc)},
        ) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"YAML config must contain a mapping, got {type(data).__name__}",
            details={"path": path},
        )
    return data
