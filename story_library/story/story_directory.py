"""The user's story directory.

Stories live in ``<Documents>/Twine/Stories`` and backups in
``<Documents>/Twine/Backups``, with both folder names localized. The paths
are recomputed on every call so they follow profile and language changes.
"""

import logging
from datetime import datetime
from pathlib import Path

from story_library.i18n.say import say as default_say
from story_library.paths.user_dirs import documents_dir as default_documents_dir
from story_library.story.backup_config import DEFAULT_MAX_BACKUPS
from story_library.story.backup_manager import BackupManager
from story_library.story.locker import DirectoryLocker
from story_library.story.permissions import PermissionToggle
from story_library.story.reveal import open_in_file_browser

logger = logging.getLogger(__name__)


class StoryDirectory:
    """Create, lock, unlock, reveal and back up the story directory.

    Collaborators can be replaced for testing::

        sd = StoryDirectory(documents_dir=lambda: tmp_path,
                            opener=lambda path: None)
        sd.create()
        sd.backup(max_backups=3)
    """

    def __init__(
        self,
        documents_dir=None,
        say=None,
        opener=None,
        toggle: PermissionToggle = None,
        clock=None,
    ):
        self.documents_dir = documents_dir or default_documents_dir
        self.say = say or default_say
        self.opener = opener or open_in_file_browser
        self.locker = DirectoryLocker(self.path, toggle or PermissionToggle())
        self.backups = BackupManager(
            self.path, self.backups_path, clock=clock or datetime.now
        )

    def _twine_root(self) -> Path:
        return Path(self.documents_dir()) / self.say("Twine")

    def path(self) -> Path:
        """Full path of the story directory."""
        return self._twine_root() / self.say("Stories")

    def backups_path(self) -> Path:
        """Full path of the folder holding story library backups."""
        return self._twine_root() / self.say("Backups")

    def create(self):
        """Create the story directory and any missing parents."""
        path = self.path()
        path.mkdir(parents=True, exist_ok=True)
        logger.debug("Story directory ready at %s", path)

    def lock(self):
        self.locker.lock()

    def unlock(self):
        self.locker.unlock()

    def is_locked(self) -> bool:
        return self.locker.is_locked()

    def reveal(self):
        """Show the story directory in the file browser. Never raises."""
        path = self.path()
        try:
            self.opener(path)
        except Exception:
            logger.exception("Could not reveal story directory %s", path)

    def backup(self, max_backups: int = DEFAULT_MAX_BACKUPS) -> Path:
        return self.backups.backup(max_backups)
