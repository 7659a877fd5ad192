"""
Link ID component - Short-link identifier validation.
"""

from ._impl import (
    FORBIDDEN_CHARACTERS,
    PATH_SEPARATOR,
    RESERVED_IDS,
    check_link_id,
    parse_link_id,
    validate_link_id,
)
from .component import run
from .models import (
    LinkId,
    LinkIdErrorCode,
    LinkIdValidationError,
    ValidateLinkIdOutput,
)

__all__ = [
    # Entry points
    "run",
    # Models
    "LinkId",
    "LinkIdErrorCode",
    "LinkIdValidationError",
    "ValidateLinkIdOutput",
    # Functional core
    "FORBIDDEN_CHARACTERS",
    "PATH_SEPARATOR",
    "RESERVED_IDS",
    "check_link_id",
    "parse_link_id",
    "validate_link_id",
]
