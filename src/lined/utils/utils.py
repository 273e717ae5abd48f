# lined/utils/utils.py
"""
lined.utils.utils.py
====================

Configuration helpers for the lined editor.

- Automatic User Configuration: creates `config.toml` and `.env` templates in
  `~/.config/lined` on first run.
- Robust Configuration Loading: an embedded default configuration is deep-merged
  with the user's `~/.config/lined/config.toml`. A missing or broken user file
  never stops the editor from starting.
"""

import logging
import shutil
import sys
from pathlib import Path
from typing import Any, Dict

import toml

logger = logging.getLogger("lined")

CONFIG_DIR_NAME = "lined"

ENV_TEMPLATE = """# Environment switches for lined
# Set to 1 to trace every decoded key to keytrace.log
LINED_KEYTRACE=0
"""

# Mirrors the packaged `config.toml`; used when no user file can be read.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "default_encoding": "utf-8",
        "escape_timeout_ms": 50,
        "title_placeholder": "Text Editor",
    },
    "keybindings": {
        "quit": "ctrl+q",
        "save_file": "ctrl+s",
    },
    "colors": {
        "ui_fg": "black",
        "ui_bg": "white",
    },
    "logging": {
        "log_file": "editor.log",
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
}


# --- Helper Functions ---

def get_project_root() -> Path:
    """Determines the project's root directory for finding template files."""
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS)
    return Path(__file__).resolve().parents[3]


def get_user_config_dir() -> Path:
    return Path.home() / ".config" / CONFIG_DIR_NAME


def ensure_user_config_exists() -> None:
    """Checks for user config files in `~/.config/lined` and creates them if missing."""
    try:
        config_dir = get_user_config_dir()
        user_config_path = config_dir / "config.toml"
        user_env_path = config_dir / ".env"

        config_dir.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            source_config_path = get_project_root() / "config.toml"
            if source_config_path.exists():
                shutil.copy(source_config_path, user_config_path)
                logger.info("Created user config template at: %s", user_config_path)

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info("Created user .env template at: %s", user_env_path)

    except OSError as e:
        logger.critical("Could not create user configuration files: %s", e, exc_info=True)


def load_config() -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    ensure_user_config_exists()

    user_config_path = get_user_config_dir() / "config.toml"
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info("Successfully loaded and merged user config from %s", user_config_path)
        except (toml.TomlDecodeError, OSError) as e:
            logger.error("Could not parse user config '%s': %s. Using defaults.", user_config_path, e)

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
