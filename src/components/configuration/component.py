"""
Configuration component - Parse and load the links file.

Shell Layer - handles file I/O and error conversion; parsing itself is
pure and lives in _impl.
"""

from __future__ import annotations

from pathlib import Path

from ._impl import format_for_path, parse_configuration
from .models import (
    ConfigLoadError,
    ConfigParseError,
    ConfigurationSnapshot,
    ParseConfigInput,
    ParseConfigOutput,
)
from .ports import FileSystemPort, TimePort


def run_parse(inp: ParseConfigInput) -> ParseConfigOutput:
    """
    Parse links file text without touching the file system.

    Args:
        inp: Input containing the text and its format.

    Returns:
        ParseConfigOutput with the snapshot or every problem found.
    """
    try:
        snapshot = parse_configuration(inp.text, inp.fmt, source=inp.source)
    except ConfigParseError as e:
        return ParseConfigOutput(snapshot=None, errors=list(e.errors), success=False)
    return ParseConfigOutput(snapshot=snapshot)


def run_load(
    path: Path,
    *,
    fs: FileSystemPort,
    time_port: TimePort | None = None,
) -> ConfigurationSnapshot:
    """
    Read and parse the links file at `path`.

    Args:
        path: Links file location. The suffix selects TOML or YAML.
        fs: File system port for reading.
        time_port: Optional clock used to stamp the snapshot.

    Returns:
        The parsed snapshot.

    Raises:
        ConfigLoadError: If the file is missing, unreadable, or invalid.
    """
    if not fs.exists(path):
        raise ConfigLoadError(str(path), "no configuration file exists at this path")

    try:
        text = fs.read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(str(path), f"failed to read file: {e}") from e

    loaded_at = time_port.now_utc() if time_port is not None else None
    try:
        return parse_configuration(
            text,
            format_for_path(path),
            source=str(path),
            loaded_at=loaded_at,
        )
    except ConfigParseError as e:
        raise ConfigLoadError(str(path), str(e), errors=list(e.errors)) from e
