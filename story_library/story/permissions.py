"""Write-protection for the story directory.

On POSIX systems clearing the owner write bit on the directory is enough to
stop files being added, removed or renamed. Windows ignores that bit on
directories, so every file inside is given an absolute read-only (or
read-write) mode instead.

The platform is checked once, when a PermissionToggle is created.
"""

import logging
import os
import platform
import stat
from concurrent.futures import ThreadPoolExecutor

from story_library.story.backup_config import (
    OWNER_WRITE_BIT,
    WINDOWS_READ_ONLY_MODE,
    WINDOWS_WRITABLE_MODE,
)

logger = logging.getLogger(__name__)


class OwnerBitStrategy:
    """Flip the owner write bit on the directory itself."""

    name = "owner-bit"

    def set_writable(self, target_path: str, writable: bool):
        mode = stat.S_IMODE(os.stat(target_path).st_mode)
        if writable:
            new_mode = mode | OWNER_WRITE_BIT
        else:
            new_mode = mode & ~OWNER_WRITE_BIT
        os.chmod(target_path, new_mode)
        logger.debug("chmod %o -> %o on %s", mode, new_mode, target_path)

    def is_writable(self, target_path: str) -> bool:
        return bool(os.stat(target_path).st_mode & OWNER_WRITE_BIT)


class PerFileStrategy:
    """Set an absolute mode on every immediate entry of the directory."""

    name = "per-file"

    def __init__(self, max_workers: int = 8):
        self.max_workers = max_workers

    def set_writable(self, target_path: str, writable: bool):
        mode = WINDOWS_WRITABLE_MODE if writable else WINDOWS_READ_ONLY_MODE
        entries = [os.path.join(target_path, name) for name in os.listdir(target_path)]
        if not entries:
            return

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(os.chmod, entry, mode) for entry in entries]
            # Leaving the block waits for every chmod, failed or not.

        errors = [f.exception() for f in futures if f.exception() is not None]
        if errors:
            logger.error(
                "Could not change mode of %d of %d entries in %s",
                len(errors), len(entries), target_path,
            )
            raise errors[0]
        logger.debug("chmod %o on %d entries in %s", mode, len(entries), target_path)

    def is_writable(self, target_path: str) -> bool:
        for name in os.listdir(target_path):
            if not os.stat(os.path.join(target_path, name)).st_mode & OWNER_WRITE_BIT:
                return False
        return True


def strategy_for_platform(system: str = None):
    """Pick the strategy for ``system`` (defaults to the running OS)."""
    system = system or platform.system()
    if system == "Windows":
        return PerFileStrategy()
    return OwnerBitStrategy()


class PermissionToggle:
    """Make a directory writable or read-only for its owner."""

    def __init__(self, strategy=None):
        self.strategy = strategy or strategy_for_platform()

    def set_writable(self, target_path, writable: bool):
        """Apply the writable state to ``target_path``.

        Raises FileNotFoundError if the path does not exist and
        PermissionError if the OS refuses the change. Entries already
        changed before a failure are left as they are.
        """
        self.strategy.set_writable(str(target_path), writable)

    def is_writable(self, target_path) -> bool:
        return self.strategy.is_writable(str(target_path))
