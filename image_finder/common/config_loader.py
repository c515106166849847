"""
Configuration Loader

Loads YAML configuration files for runtime settings and page layouts
(table selectors, column hiding, watched DOM regions).
"""

import os
from pathlib import Path
from typing import Any, Dict, List

import yaml
from dotenv import load_dotenv

from ..models.layout import AlternateTableRule, TableLayout, WatchConfig

CATALOG_URL_ENV = "IMAGE_FINDER_CATALOG_URL"


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
        filename: Name of the config file (e.g., 'settings.yaml')

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


def load_settings() -> Dict[str, Any]:
    """
    Load runtime settings.

    The catalog URL from settings.yaml is replaced by the
    IMAGE_FINDER_CATALOG_URL environment variable when set
    (a .env file in the working directory is honored).

    Returns:
        Dictionary with 'catalog', 'watcher' and 'links' sections

    Example:
        {
            'catalog': {'url': 'https://...csv', 'timeout': 30},
            'watcher': {'debounce_delay': 0.45, ...},
            'links': {'primary_host': 'anipet.co.il', ...},
        }
    """
    load_dotenv()
    settings = load_config('settings.yaml')
    settings.setdefault('catalog', {})
    settings.setdefault('watcher', {})
    settings.setdefault('links', {})

    env_url = os.environ.get(CATALOG_URL_ENV)
    if env_url:
        settings['catalog']['url'] = env_url

    return settings


def load_page_layouts() -> List[TableLayout]:
    """Load the table layouts to augment, in configured order."""
    config = load_config('page_layouts.yaml')
    return [TableLayout.from_dict(item) for item in config.get('layouts', [])]


def load_alternate_tables() -> List[AlternateTableRule]:
    """Load column-hiding rules for tables outside the known layouts."""
    config = load_config('page_layouts.yaml')
    return [AlternateTableRule.from_dict(item) for item in config.get('alternate_tables', [])]


def load_watch_config() -> WatchConfig:
    """Load the DOM regions watched for changes."""
    config = load_config('page_layouts.yaml')
    return WatchConfig.from_dict(config.get('watch', {}))
