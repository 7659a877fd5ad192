"""
Config store component - Factory wiring the store to the links file.

Shell Layer - binds the configuration loader to real file system and
clock adapters.
"""

from __future__ import annotations

from pathlib import Path

from src.components.configuration import ConfigurationSnapshot, FileSystemPort, run_load

from ._impl import ConfigurationStore
from .ports import SnapshotLoaderPort, TimePort


def make_loader(
    fs: FileSystemPort,
    time_port: TimePort | None = None,
) -> SnapshotLoaderPort:
    """Build a loader that reads `path` through `fs`."""

    def load(path: Path) -> ConfigurationSnapshot:
        return run_load(path, fs=fs, time_port=time_port)

    return load


def create_configuration_store(
    fs: FileSystemPort | None = None,
    time_port: TimePort | None = None,
) -> ConfigurationStore:
    """
    Create a ConfigurationStore backed by the local file system.

    Args:
        fs: File system port. Defaults to the local adapter.
        time_port: Clock for snapshot timestamps. Defaults to the system clock.
    """
    if fs is None:
        from src.components.configuration.adapters import default_filesystem

        fs = default_filesystem
    if time_port is None:
        from src.adapters.clock import SystemClock

        time_port = SystemClock()

    return ConfigurationStore(loader=make_loader(fs, time_port), time_port=time_port)
