"""
File system adapter for the configuration component.
"""

from __future__ import annotations

from pathlib import Path


class LocalFileSystemAdapter:
    """Adapter for local file system operations."""

    def read_text(self, path: Path) -> str:
        """Read a file as UTF-8 text."""
        return path.read_text(encoding="utf-8")

    def exists(self, path: Path) -> bool:
        """Check if a file exists."""
        return path.is_file()


# Default adapter instance
default_filesystem = LocalFileSystemAdapter()
