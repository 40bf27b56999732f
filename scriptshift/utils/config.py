"""Settings loading from YAML."""

import copy
import os
from importlib import resources
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from scriptshift.errors import ConfigurationError


SETTINGS_ENV_VAR = "SCRIPTSHIFT_SETTINGS"


def default_settings() -> dict[str, Any]:
    """Load the settings.yaml shipped with the package."""
    text = resources.files("scriptshift.etc").joinpath("settings.yaml").read_text(encoding="utf-8")
    result: dict[str, Any] = yaml.safe_load(text)
    return result


def merge_settings(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Recursively merge ``override`` into a copy of ``base``.

    Args:
        base: Default settings
        override: User settings; nested dicts are merged, other values replace

    Returns:
        Merged settings
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load settings, layering a user file over the packaged defaults.

    Args:
        path: Settings file; defaults to $SCRIPTSHIFT_SETTINGS when set

    Returns:
        Settings dictionary

    Raises:
        ConfigurationError: If the file is missing or is not a YAML mapping
    """
    settings = default_settings()

    if path is None:
        path = os.environ.get(SETTINGS_ENV_VAR) or None
    if path is None:
        return settings

    settings_path = Path(path)
    if not settings_path.exists():
        raise ConfigurationError(f"Settings file not found: {settings_path}")

    try:
        with settings_path.open(encoding="utf-8") as f:
            user_settings = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed settings file {settings_path}: {e}") from e

    if user_settings is None:
        return settings
    if not isinstance(user_settings, dict):
        raise ConfigurationError(f"Settings file {settings_path} must contain a mapping")

    return merge_settings(settings, user_settings)
