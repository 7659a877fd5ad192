"""
Link ID component - Data models.

A LinkId is the first path segment of a short-link request. Instances
are only produced by validation, so holding one means every rule passed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LinkIdErrorCode(str, Enum):
    """Which identifier rule failed."""

    EMPTY = "empty"
    CONTAINS_WHITESPACE = "contains_whitespace"
    FORBIDDEN_CHARACTER = "forbidden_character"
    RESERVED = "reserved"
    LEADING_OR_TRAILING_SEPARATOR = "leading_or_trailing_separator"


# --- Validation Errors ---


@dataclass(frozen=True)
class LinkIdValidationError:
    """Link ID validation error."""

    code: LinkIdErrorCode
    message: str
    raw: str = ""

    def __str__(self) -> str:
        return self.message


# --- Identifier ---


@dataclass(frozen=True, order=True)
class LinkId:
    """Validated short-link identifier.

    Constructing one directly runs the same rules as validate_link_id,
    but without trimming: the value must already be in canonical form.
    """

    value: str

    def __post_init__(self) -> None:
        from ._impl import check_link_id

        error = check_link_id(self.value)
        if error is not None:
            raise ValueError(error.message)

    def __str__(self) -> str:
        return self.value


# --- Output Models ---


@dataclass(frozen=True)
class ValidateLinkIdOutput:
    """Output from identifier validation."""

    link_id: LinkId | None
    error: LinkIdValidationError | None = None

    @property
    def success(self) -> bool:
        return self.error is None
