"""
Link ID validation - Functional Core.

Rules are applied in a fixed order and the first failure wins, so the
reported reason for a given input never changes:

1. Trim surrounding whitespace
2. Reject empty
3. Reject inner whitespace
4. Reject forbidden characters
5. Reject reserved IDs
6. Reject leading/trailing path separator

Forward slashes are forbidden outright; IDs are always a single path
segment. Rule 6 is still checked so relaxing FORBIDDEN_CHARACTERS later
keeps "/a" and "a/" invalid.
"""

from __future__ import annotations

from .models import LinkId, LinkIdErrorCode, LinkIdValidationError

PATH_SEPARATOR = "/"

FORBIDDEN_CHARACTERS = frozenset({"/", "\\"})

# Reserved for server routes (health and future admin endpoints).
RESERVED_IDS = frozenset({"api"})


def check_link_id(candidate: str) -> LinkIdValidationError | None:
    """Run rules 2-6 against an already-trimmed candidate."""
    if not candidate:
        return LinkIdValidationError(
            code=LinkIdErrorCode.EMPTY,
            message="Link IDs cannot be empty",
            raw=candidate,
        )

    if any(ch.isspace() for ch in candidate):
        return LinkIdValidationError(
            code=LinkIdErrorCode.CONTAINS_WHITESPACE,
            message=f"Link ID {candidate!r} cannot contain whitespace",
            raw=candidate,
        )

    for ch in candidate:
        if ch in FORBIDDEN_CHARACTERS:
            return LinkIdValidationError(
                code=LinkIdErrorCode.FORBIDDEN_CHARACTER,
                message=f"Link ID {candidate!r} cannot contain {ch!r} characters",
                raw=candidate,
            )

    if candidate in RESERVED_IDS:
        return LinkIdValidationError(
            code=LinkIdErrorCode.RESERVED,
            message=f"{candidate!r} is a reserved link ID",
            raw=candidate,
        )

    if candidate.startswith(PATH_SEPARATOR) or candidate.endswith(PATH_SEPARATOR):
        return LinkIdValidationError(
            code=LinkIdErrorCode.LEADING_OR_TRAILING_SEPARATOR,
            message=f"Link ID {candidate!r} cannot start or end with {PATH_SEPARATOR!r}",
            raw=candidate,
        )

    return None


def validate_link_id(raw: str) -> tuple[LinkId | None, LinkIdValidationError | None]:
    """
    Validate a raw identifier string.

    Returns:
        Tuple of (link_id, error). Exactly one of them is None.
    """
    candidate = raw.strip()
    error = check_link_id(candidate)
    if error is not None:
        # Report the untrimmed input so log lines show what was received
        return None, LinkIdValidationError(code=error.code, message=error.message, raw=raw)
    return LinkId(candidate), None


def parse_link_id(raw: str) -> LinkId:
    """Validate and return a LinkId, raising ValueError on failure."""
    link_id, error = validate_link_id(raw)
    if error is not None:
        raise ValueError(error.message)
    assert link_id is not None
    return link_id
