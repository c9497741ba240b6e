"""Story library backups.

Each backup is a full copy of the story directory in its own timestamped
folder under the backups root. After every successful copy the oldest
backups beyond the retention count are removed.

Backup structure:
    Backups/
    +-- 2025-2-1 14-30-0-512/
    |   +-- My Story.html
    |   +-- Other Story.html
    +-- 2025-2-1 14-50-0-87/
    |   +-- ...
"""

import logging
import os
import shutil
from datetime import datetime
from pathlib import Path

from story_library.story.backup_config import (
    DEFAULT_MAX_BACKUPS,
    HIDDEN_PREFIX,
    backup_name,
)

logger = logging.getLogger(__name__)


def copy_tree(src: str, dest: str):
    """Recursively copy file contents from ``src`` into ``dest``.

    Permission bits are not carried over, so a copy of a locked directory
    can still be deleted. Symlinks are recreated as links, not followed.
    ``src`` is listed before ``dest`` is created: a missing source raises
    without leaving an empty destination behind.
    """
    with os.scandir(src) as it:
        entries = list(it)

    os.makedirs(dest, exist_ok=True)
    for entry in entries:
        target = os.path.join(dest, entry.name)
        if entry.is_symlink():
            os.symlink(os.readlink(entry.path), target)
        elif entry.is_dir():
            copy_tree(entry.path, target)
        else:
            shutil.copyfile(entry.path, target)


class BackupManager:
    """Creates story library backups and enforces retention.

    Usage::

        mgr = BackupManager(source_fn=story_dir.path,
                            backups_root_fn=story_dir.backups_path)
        mgr.backup(max_backups=10)
    """

    def __init__(self, source_fn, backups_root_fn, clock=datetime.now):
        self.source_fn = source_fn
        self.backups_root_fn = backups_root_fn
        self.clock = clock

    def backup(self, max_backups: int = DEFAULT_MAX_BACKUPS) -> Path:
        """Copy the story directory into a new timestamped backup.

        Returns the path of the new backup. If the copy fails nothing is
        pruned, the partial backup folder is removed and the error
        propagates. ``max_backups`` must be at least 1, since the new backup
        itself always counts; smaller values raise ValueError.
        """
        if max_backups < 1:
            raise ValueError(f"max_backups must be at least 1, got {max_backups}")

        logger.info("Backing up story library")

        source = Path(self.source_fn())
        dest = Path(self.backups_root_fn()) / backup_name(self.clock())
        existed = dest.exists()
        try:
            copy_tree(str(source), str(dest))
        except OSError:
            if not existed and dest.exists():
                shutil.rmtree(dest, ignore_errors=True)
            raise
        logger.info("Backed up %s -> %s", source, dest)

        self.prune(max_backups)
        return dest

    def list_backups(self) -> list[Path]:
        """Backups under the backups root, oldest first by modification time."""
        root = Path(self.backups_root_fn())
        if not root.is_dir():
            return []

        backups = []
        with os.scandir(root) as it:
            for entry in it:
                if entry.name.startswith(HIDDEN_PREFIX):
                    continue
                if not entry.is_dir(follow_symlinks=False):
                    continue
                backups.append((entry.stat(follow_symlinks=False).st_mtime_ns, entry.path))

        backups.sort(key=lambda b: b[0])
        return [Path(p) for _, p in backups]

    def prune(self, max_backups: int = DEFAULT_MAX_BACKUPS) -> list[Path]:
        """Delete the oldest backups so at most ``max_backups`` remain.

        Returns the deleted paths. A failed delete propagates; backups
        deleted before it stay deleted.
        """
        backups = self.list_backups()
        if len(backups) <= max_backups:
            return []

        logger.info("There are %d story library backups, pruning", len(backups))

        to_delete = backups[:len(backups) - max_backups]
        for path in to_delete:
            shutil.rmtree(path)
            logger.debug("Removed old backup %s", path)
        return to_delete
