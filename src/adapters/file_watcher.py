"""
Polling File Watcher Adapter.

Watches a single file by polling its stat signature and posts change
events onto a queue. The consumer decides what to do with them; the
watcher never parses anything, so slow reloads cannot stall it.

Key behaviors:
- Signature is (mtime_ns, size, inode); any difference is a change
- Missing -> present is CREATED, present -> missing is DELETED
- Transient stat errors are logged and the loop keeps going
- Daemon thread; stop() is optional at process exit
"""

from __future__ import annotations

import logging
import os
import queue
import threading
from pathlib import Path

from src.components.config_store.models import FileEvent, FileEventKind

logger = logging.getLogger(__name__)

Signature = tuple[int, int, int]


def file_signature(path: Path) -> Signature | None:
    """Return the stat signature of `path`, or None if it does not exist."""
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return None
    return (st.st_mtime_ns, st.st_size, st.st_ino)


class PollingFileWatcher:
    """Background thread that polls one file for changes."""

    def __init__(
        self,
        path: Path,
        events: queue.Queue[FileEvent | None],
        poll_interval_seconds: float = 1.0,
    ) -> None:
        """
        Initialize watcher.

        Args:
            path: File to watch.
            events: Queue that receives FileEvents.
            poll_interval_seconds: Interval between stat calls.
        """
        self._path = path
        self._events = events
        self._poll_interval = poll_interval_seconds
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._running = False
        self._last: Signature | None = None

    def start(self) -> None:
        """Start the background watcher."""
        if self._running:
            return

        self._last = file_signature(self._path)
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_loop, name="lynx-file-watcher", daemon=True
        )
        self._thread.start()
        self._running = True
        logger.info(
            "Watching %s for changes (poll interval: %.2fs)", self._path, self._poll_interval
        )

    def stop(self) -> None:
        """Stop the watcher."""
        if not self._running:
            return

        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5.0)
        self._running = False
        logger.info("Stopped watching %s", self._path)

    @property
    def is_running(self) -> bool:
        """Check if watcher is active."""
        return self._running

    def poll_once(self) -> FileEvent | None:
        """Compare the current signature with the last one and emit any change."""
        current = file_signature(self._path)
        previous, self._last = self._last, current

        if current == previous:
            return None

        if previous is None:
            kind = FileEventKind.CREATED
        elif current is None:
            kind = FileEventKind.DELETED
        else:
            kind = FileEventKind.MODIFIED

        event = FileEvent(kind=kind, path=self._path)
        logger.debug("Filesystem event: %s %s", kind.value, self._path)
        self._events.put(event)
        return event

    def _poll_loop(self) -> None:
        """Background polling loop."""
        while not self._stop_event.wait(timeout=self._poll_interval):
            try:
                self.poll_once()
            except OSError:
                logger.exception("Error while watching configuration file %s", self._path)


def create_polling_watcher(
    path: Path,
    events: queue.Queue[FileEvent | None],
    poll_interval_seconds: float = 1.0,
) -> PollingFileWatcher:
    """Create a PollingFileWatcher."""
    return PollingFileWatcher(path, events, poll_interval_seconds)
