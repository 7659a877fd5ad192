"""
Configuration component - Data models.

The links file schema, the immutable snapshot built from it, and the
parse/load errors.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from src.components.link_ids import LinkId
from src.components.links import AppendMode, Link


class ConfigFormat(str, Enum):
    """Links file syntax."""

    TOML = "toml"
    YAML = "yaml"


class ConfigErrorCode(str, Enum):
    """Why a links file was rejected."""

    IO = "io"
    SYNTAX = "syntax"
    SCHEMA = "schema"
    INVALID_LINK_ID = "invalid_link_id"
    DUPLICATE_LINK_ID = "duplicate_link_id"
    INVALID_REDIRECT = "invalid_redirect"


# --- Validation Errors ---


@dataclass(frozen=True)
class ConfigEntryError:
    """Single problem found in a links file."""

    code: ConfigErrorCode
    message: str
    field: str | None = None  # e.g. "links.docs.redirect"


class ConfigParseError(ValueError):
    """
    Raised when a links file cannot be turned into a snapshot.

    Carries every problem found so one edit can fix them all.
    """

    def __init__(self, errors: list[ConfigEntryError]) -> None:
        self.errors = errors
        details = "; ".join(
            f"{e.field}: {e.message}" if e.field else e.message for e in errors
        )
        super().__init__(f"Configuration could not be parsed: {details}")

    @property
    def codes(self) -> list[ConfigErrorCode]:
        return [e.code for e in self.errors]


class ConfigLoadError(Exception):
    """
    Raised when the links file cannot be read or parsed.

    Read failures carry a single IO entry; parse failures carry every
    problem the parser found.
    """

    def __init__(
        self,
        path: str,
        reason: str,
        errors: list[ConfigEntryError] | None = None,
    ) -> None:
        self.path = path
        self.reason = reason
        if errors is None:
            errors = [ConfigEntryError(code=ConfigErrorCode.IO, message=reason)]
        self.errors = errors
        super().__init__(f"Failed to load configuration from {path}: {reason}")

    @property
    def codes(self) -> list[ConfigErrorCode]:
        return [e.code for e in self.errors]


# --- File Schema ---


class LinkRecord(BaseModel):
    """One entry under the top-level `links` table."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    redirect: StrictStr
    disabled: StrictBool = False
    invalid_after: StrictInt | None = Field(default=None, ge=0)
    append_mode: AppendMode = AppendMode.NONE

    def to_link(self) -> Link:
        return Link(
            redirect=self.redirect,
            disabled=self.disabled,
            invalid_after=self.invalid_after,
            append_mode=self.append_mode,
        )


# --- Snapshot ---


@dataclass(frozen=True)
class ConfigurationSnapshot:
    """Immutable mapping of link IDs to links from one successful parse."""

    links: Mapping[LinkId, Link]
    source: str | None = None
    loaded_at: datetime | None = None

    def __post_init__(self) -> None:
        # Freeze a private copy so callers cannot mutate the snapshot
        object.__setattr__(self, "links", MappingProxyType(dict(self.links)))

    def get(self, link_id: LinkId) -> Link | None:
        return self.links.get(link_id)

    def __contains__(self, link_id: object) -> bool:
        return link_id in self.links

    def __iter__(self) -> Iterator[LinkId]:
        return iter(self.links)

    def __len__(self) -> int:
        return len(self.links)


# --- Input/Output Models ---


@dataclass(frozen=True)
class ParseConfigInput:
    """Input for parsing links file text."""

    text: str
    fmt: ConfigFormat = ConfigFormat.TOML
    source: str | None = None


@dataclass(frozen=True)
class ParseConfigOutput:
    """Output from parsing links file text."""

    snapshot: ConfigurationSnapshot | None
    errors: list[ConfigEntryError] = field(default_factory=list)
    success: bool = True
