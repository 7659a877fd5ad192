"""
Config store component port definitions.
"""

from __future__ import annotations

import queue
from datetime import datetime
from pathlib import Path
from typing import Protocol

from src.components.configuration import ConfigurationSnapshot

from .models import FileEvent


class SnapshotLoaderPort(Protocol):
    """Reads and parses the links file."""

    def __call__(self, path: Path) -> ConfigurationSnapshot:
        """Load a snapshot, raising ConfigLoadError on failure."""
        ...


class FileWatcherPort(Protocol):
    """Background observer that posts FileEvents onto a queue."""

    def start(self) -> None:
        """Start watching."""
        ...

    def stop(self) -> None:
        """Stop watching."""
        ...

    @property
    def is_running(self) -> bool:
        """Check if the watcher is active."""
        ...


class FileWatcherFactoryPort(Protocol):
    """Creates a watcher for a path."""

    def __call__(
        self,
        path: Path,
        events: queue.Queue[FileEvent | None],
        poll_interval_seconds: float,
    ) -> FileWatcherPort:
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
