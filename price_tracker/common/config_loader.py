"""
Configuration Loader

Loads YAML configuration files. The per-platform CSS selector chains used
by the site extractors live in config/selectors.yaml so that markup changes
on a storefront only require a config edit.
"""

from pathlib import Path
from typing import Any, Dict

import yaml


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'selectors.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_selectors(platform: str) -> Dict[str, Any]:
    """
    Load the selector rules for one platform.

    Returns:
        Dictionary with 'name', 'category' and 'price' rule groups
        (plus 'free' for Steam)

    Example:
        {
            'name': {'selectors': ['.apphub_AppName', ...], 'default': 'Unknown Steam Game'},
            'category': {'selectors': [...], 'default': 'Game'},
            'price': {'sale_markers': ['discount_percent'], ...},
        }

    Raises:
        KeyError: If the platform has no selector section
    """
    config = load_config('selectors.yaml')
    platforms = config.get('platforms', {})
    if platform not in platforms:
        raise KeyError(f"No selectors configured for platform: {platform}")
    return platforms[platform]
