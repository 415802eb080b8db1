"""
Configuration management for the mind map editor.

Settings are resolved in this order:
1. Environment variable (MINDMAP_*), also picked up from .env by app.py
2. config.json next to the project root / executable
3. Built-in default

Keys:
- canvas_width / canvas_height: area used to place new root-level nodes
- title: initial map title
- log_level: logging level name for app.py
- port: NiceGUI server port
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional, Tuple

from mindmap.constants import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, DEFAULT_TITLE

logger = logging.getLogger(__name__)

DEFAULTS = {
    'canvas_width': DEFAULT_CANVAS_WIDTH,
    'canvas_height': DEFAULT_CANVAS_HEIGHT,
    'title': DEFAULT_TITLE,
    'log_level': 'INFO',
    'port': 8080,
}


def _env_name(key: str) -> str:
    return f"MINDMAP_{key.upper()}"


def get_config_path() -> Path:
    """config.json beside the executable when frozen, else in the project root."""
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent / "config.json"
    return Path(__file__).parent.parent / "config.json"


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from config.json."""
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                return data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")
            return {}
    return {}


def get_setting(key: str, config_path: Optional[Path] = None) -> Any:
    """Resolve one setting: environment, then config file, then default."""
    env_value = os.environ.get(_env_name(key))
    if env_value:
        return env_value
    config = load_config(config_path)
    if key in config:
        return config[key]
    return DEFAULTS.get(key)


def _get_int(key: str, config_path: Optional[Path] = None) -> int:
    value = get_setting(key, config_path)
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {key}={value!r}, using {DEFAULTS[key]}")
        return DEFAULTS[key]


def get_canvas_size(config_path: Optional[Path] = None) -> Tuple[int, int]:
    return _get_int('canvas_width', config_path), _get_int('canvas_height', config_path)


def get_title(config_path: Optional[Path] = None) -> str:
    return str(get_setting('title', config_path))


def get_port(config_path: Optional[Path] = None) -> int:
    return _get_int('port', config_path)


def get_log_level(config_path: Optional[Path] = None) -> int:
    """Logging level number; unknown names fall back to INFO."""
    name = str(get_setting('log_level', config_path)).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
