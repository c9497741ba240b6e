"""Open a folder in the desktop file browser.

Best effort only: launch problems are logged and reported as False, never
raised.
"""

import logging
import os
import platform
import subprocess

logger = logging.getLogger(__name__)


def open_in_file_browser(path) -> bool:
    """Ask the desktop shell to show ``path``. Returns whether it launched."""
    path = str(path)
    system = platform.system()
    try:
        if system == "Windows":
            os.startfile(path)  # type: ignore[attr-defined]
            return True
        command = "open" if system == "Darwin" else "xdg-open"
        subprocess.Popen(
            [command, path],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        return True
    except OSError as exc:
        logger.warning("Could not open %s in the file browser: %s", path, exc)
        return False
