"""
Config store component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from src.components.configuration import ConfigurationSnapshot


class FileEventKind(str, Enum):
    """Change observed on the watched file."""

    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"

    @property
    def triggers_reload(self) -> bool:
        return self is not FileEventKind.DELETED


@dataclass(frozen=True)
class FileEvent:
    """File system change notification."""

    kind: FileEventKind
    path: Path


@dataclass(frozen=True)
class ReloadResult:
    """Outcome of one reload attempt."""

    success: bool
    snapshot: ConfigurationSnapshot | None = None
    error: str | None = None


@dataclass(frozen=True)
class StoreStats:
    """Reload counters for health reporting."""

    reloads: int
    failed_reloads: int
    last_error: str | None
    last_reload_at: datetime | None
