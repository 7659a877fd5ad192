"""
Links component - Data models.

A Link is one redirect rule from the links file. Links are immutable;
a config reload replaces them wholesale.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AppendMode(str, Enum):
    """How the request path after the link ID is merged into the redirect."""

    NONE = "none"
    PATH = "path"
    PATH_PRESERVE_QUERY = "path_preserve_query"


class LinkState(str, Enum):
    """Validity of a link at a given moment."""

    VALID = "valid"
    DISABLED = "disabled"
    EXPIRED = "expired"


# --- Errors ---


class MalformedAppendError(ValueError):
    """Raised when trailing path content cannot be joined onto a redirect."""

    def __init__(self, link_id: str, trailing: str, reason: str) -> None:
        self.link_id = link_id
        self.trailing = trailing
        self.reason = reason
        super().__init__(
            f"Failed to build redirect for link {link_id!r} "
            f"with trailing content {trailing!r}: {reason}"
        )


# --- Link Model ---


@dataclass(frozen=True)
class Link:
    """Redirect rule for a single link ID."""

    redirect: str  # absolute URL, e.g. "https://example.com/base"
    disabled: bool = False
    invalid_after: int | None = None  # Unix seconds; None never expires
    append_mode: AppendMode = AppendMode.NONE

    def __post_init__(self) -> None:
        from ._impl import is_absolute_url

        if not is_absolute_url(self.redirect):
            raise ValueError(f"Redirect {self.redirect!r} must be an absolute URL")
