"""
Links file parsing - Functional Core.

A document is accepted or rejected as a unit. Every entry is checked
and all problems are reported together:

- document must be a table with a `links` table
- every key must be a valid link ID
- no two keys may validate to the same link ID (e.g. "a" and " a ")
- every record must match the LinkRecord schema
- every redirect must be an absolute URL
"""

from __future__ import annotations

import tomllib
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from src.components.link_ids import LinkId, validate_link_id
from src.components.links import Link, is_absolute_url

from .models import (
    ConfigEntryError,
    ConfigErrorCode,
    ConfigFormat,
    ConfigParseError,
    ConfigurationSnapshot,
    LinkRecord,
)

LINKS_KEY = "links"


def format_for_path(path: Path) -> ConfigFormat:
    """TOML for .toml files, YAML for everything else."""
    if path.suffix.lower() == ".toml":
        return ConfigFormat.TOML
    return ConfigFormat.YAML


def load_document(text: str, fmt: ConfigFormat) -> Any:
    """
    Parse raw text into Python data.

    Raises:
        ConfigParseError: With a single SYNTAX error.
    """
    try:
        if fmt is ConfigFormat.TOML:
            return tomllib.loads(text)
        return yaml.safe_load(text)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigParseError(
            [
                ConfigEntryError(
                    code=ConfigErrorCode.SYNTAX,
                    message=f"Invalid {fmt.value.upper()} syntax: {e}",
                )
            ]
        ) from e


def _schema_errors(key: str, exc: ValidationError) -> list[ConfigEntryError]:
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        field = f"{LINKS_KEY}.{key}.{loc}" if loc else f"{LINKS_KEY}.{key}"
        errors.append(
            ConfigEntryError(
                code=ConfigErrorCode.SCHEMA,
                message=err["msg"],
                field=field,
            )
        )
    return errors


def build_links(data: Any) -> dict[LinkId, Link]:
    """
    Validate parsed data and build the link mapping.

    Raises:
        ConfigParseError: If any entry is invalid.
    """
    if not isinstance(data, dict):
        raise ConfigParseError(
            [
                ConfigEntryError(
                    code=ConfigErrorCode.SCHEMA,
                    message="Configuration must be a table with a 'links' key",
                )
            ]
        )

    raw_links = data.get(LINKS_KEY)
    if not isinstance(raw_links, dict):
        raise ConfigParseError(
            [
                ConfigEntryError(
                    code=ConfigErrorCode.SCHEMA,
                    message="'links' is required and must be a table",
                    field=LINKS_KEY,
                )
            ]
        )

    errors: list[ConfigEntryError] = []
    links: dict[LinkId, Link] = {}
    seen: dict[LinkId, str] = {}

    for raw_key, raw_record in raw_links.items():
        if not isinstance(raw_key, str):
            errors.append(
                ConfigEntryError(
                    code=ConfigErrorCode.INVALID_LINK_ID,
                    message=f"Link ID {raw_key!r} must be a string (quote it)",
                    field=f"{LINKS_KEY}.{raw_key}",
                )
            )
            continue

        field = f"{LINKS_KEY}.{raw_key}"

        link_id, id_error = validate_link_id(raw_key)
        if id_error is not None:
            errors.append(
                ConfigEntryError(
                    code=ConfigErrorCode.INVALID_LINK_ID,
                    message=id_error.message,
                    field=field,
                )
            )
            continue
        assert link_id is not None

        if link_id in seen:
            errors.append(
                ConfigEntryError(
                    code=ConfigErrorCode.DUPLICATE_LINK_ID,
                    message=f"Link ID {link_id.value!r} is defined more than once "
                    f"(as {seen[link_id]!r} and {raw_key!r})",
                    field=field,
                )
            )
            continue
        seen[link_id] = raw_key

        try:
            record = LinkRecord.model_validate(raw_record)
        except ValidationError as e:
            errors.extend(_schema_errors(raw_key, e))
            continue

        if not is_absolute_url(record.redirect):
            errors.append(
                ConfigEntryError(
                    code=ConfigErrorCode.INVALID_REDIRECT,
                    message=f"Redirect {record.redirect!r} must be an absolute URL "
                    "with scheme and host",
                    field=f"{field}.redirect",
                )
            )
            continue

        links[link_id] = record.to_link()

    if errors:
        raise ConfigParseError(errors)

    return links


def parse_configuration(
    text: str,
    fmt: ConfigFormat = ConfigFormat.TOML,
    source: str | None = None,
    loaded_at: datetime | None = None,
) -> ConfigurationSnapshot:
    """
    Parse links file text into a snapshot.

    Raises:
        ConfigParseError: If the document is malformed or any entry invalid.
    """
    data = load_document(text, fmt)
    links = build_links(data)
    return ConfigurationSnapshot(links=links, source=source, loaded_at=loaded_at)
