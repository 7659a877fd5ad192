"""
Resolver component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.components.link_ids import LinkId


class ResolveErrorCode(str, Enum):
    """Why a link could not be resolved."""

    # Absent, disabled and expired links all map here
    NOT_FOUND = "not_found"
    MALFORMED_APPEND = "malformed_append"


# --- Errors ---


@dataclass(frozen=True)
class ResolveError:
    """Resolution failure."""

    code: ResolveErrorCode
    message: str


# --- Input Models ---


@dataclass(frozen=True)
class ResolveLinkInput:
    """Input for resolving a link ID against a request path."""

    link_id: LinkId
    request_path: str


# --- Output Models ---


@dataclass(frozen=True)
class ResolveOutput:
    """Output for resolve operation."""

    url: str | None
    error: ResolveError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def not_found(self) -> bool:
        return self.error is not None and self.error.code is ResolveErrorCode.NOT_FOUND
