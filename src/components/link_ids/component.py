"""
Link ID component - Identifier validation entry point.

Shell Layer - wraps the functional core in the component output model.
"""

from __future__ import annotations

from ._impl import validate_link_id
from .models import ValidateLinkIdOutput


def run(raw: str) -> ValidateLinkIdOutput:
    """
    Validate a raw short-link identifier.

    Args:
        raw: Identifier as received (config key or request path segment).

    Returns:
        ValidateLinkIdOutput with the LinkId or the first failing rule.
    """
    link_id, error = validate_link_id(raw)
    return ValidateLinkIdOutput(link_id=link_id, error=error)
