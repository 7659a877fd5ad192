"""
Config store component - Current configuration snapshot with hot reload.
"""

from ._impl import ConfigurationNotLoadedError, ConfigurationStore, ReloadWorker
from .component import create_configuration_store, make_loader
from .models import FileEvent, FileEventKind, ReloadResult, StoreStats
from .ports import FileWatcherFactoryPort, FileWatcherPort, SnapshotLoaderPort, TimePort

__all__ = [
    # Entry points
    "create_configuration_store",
    "make_loader",
    # Store
    "ConfigurationNotLoadedError",
    "ConfigurationStore",
    "ReloadWorker",
    # Models
    "FileEvent",
    "FileEventKind",
    "ReloadResult",
    "StoreStats",
    # Ports
    "FileWatcherFactoryPort",
    "FileWatcherPort",
    "SnapshotLoaderPort",
    "TimePort",
]
