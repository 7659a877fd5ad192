"""
Configuration component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Protocol


class FileSystemPort(Protocol):
    """Port for file system operations."""

    def read_text(self, path: Path) -> str:
        """Read a file as UTF-8 text."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if a file exists."""
        ...


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
