"""Reading and writing JSON files in the application data folder.

Also answers the ``save-json`` message once registered on a channel.
"""

import json
import logging
from pathlib import Path

from story_library.paths import user_dirs

logger = logging.getLogger(__name__)

SAVE_JSON_MESSAGE = "save-json"


def json_path(filename: str) -> Path:
    return user_dirs.app_data_dir() / filename


def load(filename: str):
    """Return the parsed contents of a JSON file in the app data folder.

    Raises FileNotFoundError if the file does not exist and
    json.JSONDecodeError if it is not valid JSON.
    """
    with open(json_path(filename), encoding="utf-8") as f:
        return json.load(f)


def save(filename: str, data):
    """Replace a file in the app data folder with ``data`` as JSON."""
    path = json_path(filename)
    # Serialize first so a bad payload never truncates the existing file.
    text = json.dumps(data)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.debug("Saved %s", path)


def register_ipc_handlers(channel):
    """Subscribe ``save`` to the ``save-json`` message on ``channel``."""

    def on_save_json(filename, data):
        save(filename, data)

    channel.on(SAVE_JSON_MESSAGE, on_save_json)
    return on_save_json
