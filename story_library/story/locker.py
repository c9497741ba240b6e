"""Lock and unlock the story directory against accidental edits."""

import logging

from story_library.story.permissions import PermissionToggle

logger = logging.getLogger(__name__)


class DirectoryLocker:
    """Wraps a PermissionToggle around a directory resolved on each call."""

    def __init__(self, path_fn, toggle: PermissionToggle = None):
        self.path_fn = path_fn
        self.toggle = toggle or PermissionToggle()

    def lock(self):
        path = self.path_fn()
        self.toggle.set_writable(path, False)
        logger.info("Locked story directory %s", path)

    def unlock(self):
        path = self.path_fn()
        self.toggle.set_writable(path, True)
        logger.info("Unlocked story directory %s", path)

    def is_locked(self) -> bool:
        return not self.toggle.is_writable(self.path_fn())
