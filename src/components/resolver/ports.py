"""
Resolver component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.components.configuration import ConfigurationSnapshot


class SnapshotSourcePort(Protocol):
    """Provides the snapshot that is current at call time."""

    def current_snapshot(self) -> ConfigurationSnapshot:
        """Get the current configuration snapshot."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
