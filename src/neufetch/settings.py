# src/neufetch/settings.py

import os
from typing import Any, Dict, Optional

import platformdirs
import yaml

from neufetch.constants import APP_NAME, SETTINGS_FILE_NAME

CONFIG_DIR = platformdirs.user_config_dir(APP_NAME)
SETTINGS_FILE = os.path.join(CONFIG_DIR, SETTINGS_FILE_NAME)

# Keys understood in neufetch.yaml
SETTINGS_KEYS = ("PROXY", "LOG_LEVEL", "LOG_TO_FILE")


def get_log_dir() -> str:
    """Return the platform-specific directory for neufetch log files."""
    return platformdirs.user_log_dir(APP_NAME)


def settings_exist(path: Optional[str] = None) -> bool:
    return os.path.exists(path or SETTINGS_FILE)


def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the user-level neufetch settings.

    Parameters:
        path (str | None): Settings file to read; defaults to SETTINGS_FILE under the platformdirs config directory.

    Returns:
        dict: The known settings found in the file. An absent or empty file yields an empty dict.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        OSError: If the file exists but cannot be read.
    """
    settings_path = path or SETTINGS_FILE
    if not os.path.exists(settings_path):
        return {}

    with open(settings_path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f)

    if not isinstance(loaded, dict):
        return {}
    return {key: loaded[key] for key in SETTINGS_KEYS if key in loaded}


def save_settings(settings: Dict[str, Any], path: Optional[str] = None) -> str:
    """
    Write settings to the YAML settings file, creating its directory.

    Returns:
        str: The path written.
    """
    settings_path = path or SETTINGS_FILE
    os.makedirs(os.path.dirname(settings_path) or ".", exist_ok=True)
    with open(settings_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(settings, f, default_flow_style=False, sort_keys=False)
    return settings_path
