"""Configuration manager for ImportGraph CLI using TOML files."""

from __future__ import annotations

import logging
from typing import Any, Dict

import toml

from .config import CONFIG_FILE

logger = logging.getLogger(__name__)


# Keys accepted per section, with the type each value is coerced to
KNOWN_KEYS = {
    "scan": {"max_workers": int},
    "pypi": {"api_base": str, "timeout": float, "batch_size": int},
}


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections)."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_FILE, exc)
        return {}


def _save_full_config(config: Dict[str, Any]) -> bool:
    """Write entire config dict to TOML file, preserving all sections."""
    try:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            toml.dump(config, f)
        return True
    except OSError as exc:
        logger.warning("Could not write config %s: %s", CONFIG_FILE, exc)
        return False


def load_scan_config() -> Dict[str, Any]:
    """Load the ``[scan]`` section, or an empty dict."""
    return load_full_config().get("scan", {})


def load_pypi_config() -> Dict[str, Any]:
    """Load the ``[pypi]`` section, or an empty dict."""
    return load_full_config().get("pypi", {})


def save_setting(section: str, key: str, value: str) -> bool:
    """Store one setting, coercing *value* to the type the key expects.

    Preserves other sections in the file.

    Args:
        section: ``scan`` or ``pypi``
        key: Setting name within the section
        value: Raw string value from the command line

    Returns:
        True if saved successfully, False otherwise

    Raises:
        KeyError: If the section/key pair is unknown.
        ValueError: If the value cannot be coerced.
    """
    caster = KNOWN_KEYS[section][key]
    config = load_full_config()
    config.setdefault(section, {})[key] = caster(value)
    return _save_full_config(config)
