"""
Configuration component - Links file parsing into immutable snapshots.
"""

from ._impl import (
    LINKS_KEY,
    build_links,
    format_for_path,
    load_document,
    parse_configuration,
)
from .component import run_load, run_parse
from .models import (
    ConfigEntryError,
    ConfigErrorCode,
    ConfigFormat,
    ConfigLoadError,
    ConfigParseError,
    ConfigurationSnapshot,
    LinkRecord,
    ParseConfigInput,
    ParseConfigOutput,
)
from .ports import FileSystemPort, TimePort

__all__ = [
    # Entry points
    "run_load",
    "run_parse",
    # Models
    "ConfigEntryError",
    "ConfigErrorCode",
    "ConfigFormat",
    "ConfigLoadError",
    "ConfigParseError",
    "ConfigurationSnapshot",
    "LinkRecord",
    "ParseConfigInput",
    "ParseConfigOutput",
    # Ports
    "FileSystemPort",
    "TimePort",
    # Functional core
    "LINKS_KEY",
    "build_links",
    "format_for_path",
    "load_document",
    "parse_configuration",
]
