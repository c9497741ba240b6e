"""Periodic story library backups.

A background thread backs up the story directory every interval. When
``only_when_changed`` is set, a watchdog observer on the story directory
records whether anything happened since the last backup, and quiet
intervals are skipped.
"""

import logging
import threading
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from story_library.story.backup_config import (
    DEFAULT_INTERVAL_MINUTES,
    DEFAULT_MAX_BACKUPS,
)

logger = logging.getLogger(__name__)


class StoryChangeHandler(FileSystemEventHandler):
    """Watchdog handler that flags the library as changed on any event."""

    def __init__(self):
        super().__init__()
        self._dirty = threading.Event()

    def on_any_event(self, event):
        if event.event_type in ("opened", "closed_no_write"):
            return
        if not self._dirty.is_set():
            logger.debug("Story library changed: %s %s", event.event_type, event.src_path)
        self._dirty.set()

    @property
    def dirty(self) -> bool:
        return self._dirty.is_set()

    def mark_dirty(self):
        self._dirty.set()

    def clear(self):
        self._dirty.clear()


class BackupScheduler:
    """Runs StoryDirectory.backup() on a fixed interval in a daemon thread."""

    def __init__(
        self,
        story_directory,
        interval_seconds: float = DEFAULT_INTERVAL_MINUTES * 60,
        max_backups: int = DEFAULT_MAX_BACKUPS,
        only_when_changed: bool = True,
        backup_on_start: bool = True,
    ):
        self.story_directory = story_directory
        self.interval_seconds = interval_seconds
        self.max_backups = max_backups
        self.only_when_changed = only_when_changed
        self.backup_on_start = backup_on_start

        self.handler = StoryChangeHandler()
        self.observer = None
        self._stop_event = threading.Event()
        self._thread = None
        self._running = False

    def start(self):
        """Start the observer (if needed) and the backup thread."""
        if self._running:
            return

        self._stop_event.clear()
        if self.only_when_changed:
            story_path = Path(self.story_directory.path())
            if story_path.is_dir():
                self.observer = Observer()
                self.observer.schedule(self.handler, str(story_path), recursive=True)
                self.observer.start()
                logger.info("Watching %s for changes", story_path)
            else:
                logger.warning("Story directory does not exist, not watching: %s", story_path)

        if self.backup_on_start:
            self.run_once(force=True)

        self._thread = threading.Thread(
            target=self._loop,
            daemon=True,
            name="story-backup",
        )
        self._thread.start()
        self._running = True
        logger.info("Backup scheduler started (every %.0f seconds, keeping %d)",
                    self.interval_seconds, self.max_backups)

    def _loop(self):
        while not self._stop_event.wait(timeout=self.interval_seconds):
            self.run_once()

    def run_once(self, force: bool = False) -> Path | None:
        """Back up now unless nothing changed since the last backup.

        Returns the new backup's path, or None if skipped or failed.
        """
        if self.only_when_changed and not force and not self.handler.dirty:
            logger.debug("Story library unchanged, skipping backup")
            return None

        self.handler.clear()
        try:
            return self.story_directory.backup(self.max_backups)
        except Exception:
            logger.exception("Scheduled story library backup failed")
            self.handler.mark_dirty()
            return None

    def stop(self):
        """Stop the backup thread and the observer."""
        if not self._running:
            return

        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None
        if self.observer is not None:
            self.observer.stop()
            self.observer.join()
            self.observer = None
        self._running = False
        logger.info("Backup scheduler stopped.")

    @property
    def running(self) -> bool:
        return self._running
