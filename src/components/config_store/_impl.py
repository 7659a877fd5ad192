"""
ConfigurationStore - Current snapshot with hot reload.

One mutable slot holds the current ConfigurationSnapshot. Snapshots are
immutable, so replacing one is a single reference assignment: readers
never lock and a reader that already holds a snapshot keeps using it
after a swap. The write lock only serializes writers.

Hot reload is split in two threads connected by a queue:
- the file watcher posts FileEvents
- the reload worker drains every pending event, then reparses once

Key behaviors:
- load() failure is fatal and raises ConfigLoadError
- a failed reload is logged and the previous snapshot stays current
- reload failures never reach readers
"""

from __future__ import annotations

import logging
import queue
import threading
from datetime import datetime
from pathlib import Path

from src.components.configuration import ConfigLoadError, ConfigurationSnapshot

from .models import FileEvent, ReloadResult, StoreStats
from .ports import FileWatcherFactoryPort, FileWatcherPort, SnapshotLoaderPort, TimePort

logger = logging.getLogger(__name__)


class ConfigurationNotLoadedError(RuntimeError):
    """Raised when the snapshot is read before load() succeeded."""


class ConfigurationStore:
    """
    Process-wide holder of the current configuration snapshot.

    Safe for any number of concurrent readers and one reload worker.
    """

    def __init__(
        self,
        loader: SnapshotLoaderPort,
        time_port: TimePort | None = None,
    ) -> None:
        """Initialize store."""
        self._loader = loader
        self._time_port = time_port
        self._snapshot: ConfigurationSnapshot | None = None
        self._path: Path | None = None
        self._write_lock = threading.Lock()

        self._reloads = 0
        self._failed_reloads = 0
        self._last_error: str | None = None
        self._last_reload_at: datetime | None = None

        self._watcher: FileWatcherPort | None = None
        self._worker: ReloadWorker | None = None

    def _now(self) -> datetime | None:
        if self._time_port:
            return self._time_port.now_utc()
        return None

    # --- Readers ---

    def current_snapshot(self) -> ConfigurationSnapshot:
        """
        Return the snapshot valid at call time.

        Raises:
            ConfigurationNotLoadedError: If load() has not succeeded yet.
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise ConfigurationNotLoadedError("Configuration has not been loaded")
        return snapshot

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def path(self) -> Path | None:
        return self._path

    def stats(self) -> StoreStats:
        """Reload counters."""
        return StoreStats(
            reloads=self._reloads,
            failed_reloads=self._failed_reloads,
            last_error=self._last_error,
            last_reload_at=self._last_reload_at,
        )

    # --- Writers ---

    def load(self, path: Path) -> ConfigurationSnapshot:
        """
        Load the initial snapshot.

        Raises:
            ConfigLoadError: If the file is missing, unreadable, or invalid.
        """
        snapshot = self._loader(path)
        with self._write_lock:
            self._path = path
            self._snapshot = snapshot
        logger.info("Loaded %d links from %s", len(snapshot), path)
        return snapshot

    def reload(self) -> ReloadResult:
        """
        Reparse the backing file and swap it in on success.

        Never raises for load failures; the previous snapshot stays current.
        """
        if self._path is None:
            raise ConfigurationNotLoadedError("Cannot reload before load()")

        path = self._path
        logger.info("Change to the configuration detected - attempting reload")
        try:
            snapshot = self._loader(path)
        except ConfigLoadError as e:
            with self._write_lock:
                self._failed_reloads += 1
                self._last_error = str(e)
            logger.error(
                "Failed to reload configuration file, configuration has been left unchanged: %s",
                e,
            )
            return ReloadResult(success=False, error=str(e))

        with self._write_lock:
            self._snapshot = snapshot
            self._reloads += 1
            self._last_error = None
            self._last_reload_at = self._now()
        logger.info("Successfully reloaded configuration file (%d links)", len(snapshot))
        return ReloadResult(success=True, snapshot=snapshot)

    # --- Watching ---

    def watch(
        self,
        path: Path | None = None,
        poll_interval_seconds: float = 1.0,
        watcher_factory: FileWatcherFactoryPort | None = None,
    ) -> None:
        """
        Start watching the backing file and reloading on change.

        Args:
            path: File to watch. Defaults to the path given to load().
            poll_interval_seconds: Watcher poll interval.
            watcher_factory: Creates the watcher. Defaults to the polling watcher.
        """
        if path is not None and path != self._path:
            raise ValueError(f"Store was loaded from {self._path}, cannot watch {path}")
        if self._path is None:
            raise ConfigurationNotLoadedError("Cannot watch before load()")
        if self._watcher is not None:
            return

        if watcher_factory is None:
            from src.adapters.file_watcher import create_polling_watcher

            watcher_factory = create_polling_watcher

        events: queue.Queue[FileEvent | None] = queue.Queue()
        self._worker = ReloadWorker(events, self)
        self._watcher = watcher_factory(self._path, events, poll_interval_seconds)
        self._worker.start()
        self._watcher.start()

    def stop(self) -> None:
        """Stop watching. In-flight reloads may be abandoned."""
        if self._watcher is not None:
            self._watcher.stop()
            self._watcher = None
        if self._worker is not None:
            self._worker.stop()
            self._worker = None

    @property
    def is_watching(self) -> bool:
        return self._watcher is not None and self._watcher.is_running


class ReloadWorker:
    """
    Consumes FileEvents and reloads the store.

    All events already queued when one arrives are folded into a single
    reload; only the latest file content matters.
    """

    def __init__(
        self,
        events: queue.Queue[FileEvent | None],
        store: ConfigurationStore,
    ) -> None:
        self._events = events
        self._store = store
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Start the worker thread."""
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="lynx-reload-worker", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the worker thread."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._events.put(None)  # wake the blocking get
        self._thread.join(timeout=5.0)
        self._thread = None

    def drain(self, first: FileEvent) -> list[FileEvent]:
        """Collect `first` plus every event already waiting on the queue."""
        batch = [first]
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                break
            if event is None:
                self._stop_event.set()
                break
            batch.append(event)
        return batch

    def process(self, batch: list[FileEvent]) -> ReloadResult | None:
        """Reload once if any event in the batch warrants it."""
        for event in batch:
            if not event.kind.triggers_reload:
                logger.warning(
                    "Configuration file %s was removed; keeping current configuration",
                    event.path,
                )
        if not any(event.kind.triggers_reload for event in batch):
            return None
        return self._store.reload()

    def _run(self) -> None:
        while not self._stop_event.is_set():
            event = self._events.get()
            if event is None:
                break
            try:
                self.process(self.drain(event))
            except Exception:
                logger.exception("Error in configuration reload loop")
