"""
Configuration loading utilities for the teleport demo.

Non-secret defaults live in teleport.yaml next to this module. Endpoints,
addresses and the signing key come from the environment (see config.teleport).
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from core.exceptions import ConfigError


CONFIG_DIR = Path(__file__).parent


def load_yaml(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of file in config directory, or an absolute path

    Returns:
        Parsed YAML as dict
    """
    filepath = CONFIG_DIR / filename
    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_teleport_settings(path: Path | None = None) -> Dict[str, Any]:
    """
    Load run defaults (amount, wait time, tolerance, timeouts).

    Raises:
        ConfigError: File unreadable, not valid YAML, or not a mapping
    """
    try:
        settings = load_yaml(str(Path(path).resolve()) if path is not None else "teleport.yaml")
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(
            f"Cannot load settings file: {e}",
            details={"path": str(path) if path is not None else "teleport.yaml"},
        ) from e

    if not isinstance(settings, dict):
        raise ConfigError(
            f"Settings file must contain a mapping, got {type(settings).__name__}",
            details={"path": str(path) if path is not None else "teleport.yaml"},
        )
    return settings
