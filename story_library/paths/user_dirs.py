"""Per-user directory resolution.

Both lookups are evaluated on every call so that profile changes and
environment overrides made while the process runs are honoured.
"""

import os
from pathlib import Path

from platformdirs import user_data_path, user_documents_path

APP_NAME = "Twine"


def documents_dir() -> Path:
    """Return the user's documents directory."""
    override = os.environ.get("TWINE_DOCUMENTS_DIR")
    if override:
        return Path(override)
    return Path(user_documents_path())


def app_data_dir() -> Path:
    """Return the per-user application data directory."""
    override = os.environ.get("TWINE_APP_DATA_DIR")
    if override:
        return Path(override)
    return Path(user_data_path(APP_NAME, appauthor=False))
