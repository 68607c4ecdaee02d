"""Workspace file watcher feeding the activity buffer.

Monitors the workspace for file changes and turns each create, modify and
delete notification into an ActivityRecord.
"""

import fnmatch
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from codetribute.activity.buffer import ActivityBuffer
from codetribute.activity.models import ActivityAction, ActivityRecord
from codetribute.activity.sampler import sample_content
from codetribute.constants import (
    CONTENT_SAMPLE_LIMIT,
    DEFAULT_EXCLUDE_PATTERNS,
    WATCHER_STOP_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


class _WorkspaceEventHandler(FileSystemEventHandler):
    """Forward watchdog file events to an ActivityWatcher."""

    def __init__(self, watcher: "ActivityWatcher") -> None:
        self.watcher = watcher

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.watcher.ingest(ActivityAction.CREATED, Path(os.fsdecode(event.src_path)))

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.watcher.ingest(ActivityAction.MODIFIED, Path(os.fsdecode(event.src_path)))

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.watcher.ingest(ActivityAction.DELETED, Path(os.fsdecode(event.src_path)))

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            # Treat as delete + create
            self.watcher.ingest(ActivityAction.DELETED, Path(os.fsdecode(event.src_path)))
            self.watcher.ingest(ActivityAction.CREATED, Path(os.fsdecode(event.dest_path)))


class ActivityWatcher:
    """Watch a workspace and record file activity.

    Uses the watchdog library for file system monitoring. Every accepted
    notification appends exactly one record to the buffer; content for
    created and modified files is sampled before the record is built.
    """

    def __init__(
        self,
        workspace_root: Path,
        buffer: ActivityBuffer,
        exclude_patterns: Iterable[str] = DEFAULT_EXCLUDE_PATTERNS,
        ignored_paths: Iterable[Path] = (),
        content_limit: int = CONTENT_SAMPLE_LIMIT,
    ):
        """Initialize the watcher.

        Args:
            workspace_root: Root directory to watch.
            buffer: Buffer receiving activity records.
            exclude_patterns: fnmatch patterns relative to the workspace root.
            ignored_paths: Absolute paths never recorded (e.g. the work log itself).
            content_limit: Maximum characters sampled per file.
        """
        self.workspace_root = workspace_root
        self.buffer = buffer
        self.exclude_patterns = list(exclude_patterns)
        self.ignored_paths = {p.resolve() for p in ignored_paths}
        self.content_limit = content_limit

        self._observer: Any = None
        self._running = False

    def _should_record(self, filepath: Path) -> bool:
        """Check whether an event for this path belongs in the work log."""
        if filepath.resolve() in self.ignored_paths:
            return False

        try:
            relative = filepath.resolve().relative_to(self.workspace_root.resolve())
        except ValueError:
            # Path is not under the workspace root
            return False

        relative_str = relative.as_posix()
        return not any(fnmatch.fnmatch(relative_str, pattern) for pattern in self.exclude_patterns)

    def ingest(self, action: ActivityAction, filepath: Path) -> ActivityRecord | None:
        """Record one file notification.

        Args:
            action: The observed action.
            filepath: Absolute path of the affected file.

        Returns:
            The appended record, or None if the path is excluded.
        """
        if not self._should_record(filepath):
            return None

        content = None
        if action is not ActivityAction.DELETED:
            content = sample_content(filepath, self.content_limit)

        record = ActivityRecord.from_path(action, filepath, content)
        self.buffer.append(record)
        logger.debug(f"File {action.value}: {record.folder}/{record.file_name}")
        return record

    def start(self) -> bool:
        """Start watching for file changes.

        Returns:
            True if watcher started successfully.
        """
        if self._running:
            logger.info("File watcher already running")
            return True

        self._observer = Observer()
        self._observer.schedule(
            _WorkspaceEventHandler(self),
            str(self.workspace_root),
            recursive=True,
        )
        self._observer.start()
        self._running = True

        logger.info(f"File watcher started for {self.workspace_root}")
        return True

    def stop(self) -> None:
        """Stop watching for file changes."""
        if not self._running:
            return

        if self._observer:
            self._observer.stop()
            self._observer.join(timeout=WATCHER_STOP_TIMEOUT_SECONDS)
            self._observer = None

        self._running = False
        logger.info("File watcher stopped")

    @property
    def is_running(self) -> bool:
        """Check if watcher is running."""
        return self._running
