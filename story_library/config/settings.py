"""Configuration loading.

Settings live in a JSON file (``config/config.json`` by default). Every key
is optional; whatever the file provides is merged over ``DEFAULT_CONFIG``.
"""

import copy
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_CONFIG_PATH = str(PROJECT_ROOT / "config" / "config.json")

DEFAULT_CONFIG = {
    "paths": {
        "documents_dir": None,
        "app_data_dir": None,
    },
    "locale": {
        "language": None,
    },
    "backup": {
        "max_backups": 10,
        "interval_minutes": 20,
        "only_when_changed": True,
        "on_start": True,
    },
    "logging": {
        "level": "INFO",
    },
}


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = None) -> dict:
    """Load the config file and merge it over the defaults.

    An explicitly requested file that does not exist is an error; a missing
    default file just means "use the defaults".
    """
    defaults = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not os.path.isfile(config_path):
            logger.debug("No config at %s, using defaults", config_path)
            return defaults

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(path, encoding="utf-8") as f:
        user_config = json.load(f)

    return _merge(defaults, user_config)


def apply_environment(config: dict):
    """Export path and language overrides so resolvers pick them up.

    The resolvers read the environment on every call instead of holding
    on to the config, so overrides are handed over through it.
    """
    paths = config.get("paths", {})
    if paths.get("documents_dir"):
        os.environ["TWINE_DOCUMENTS_DIR"] = os.path.expanduser(paths["documents_dir"])
    if paths.get("app_data_dir"):
        os.environ["TWINE_APP_DATA_DIR"] = os.path.expanduser(paths["app_data_dir"])

    language = config.get("locale", {}).get("language")
    if language:
        os.environ["TWINE_LANGUAGE"] = language
