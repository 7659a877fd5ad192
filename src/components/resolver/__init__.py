"""
Resolver component - Link ID to redirect URL resolution.
"""

from ._impl import (
    NOT_FOUND_MESSAGE,
    RedirectResolver,
    create_redirect_resolver,
    resolve_in_snapshot,
)
from .component import run
from .models import ResolveError, ResolveErrorCode, ResolveLinkInput, ResolveOutput
from .ports import SnapshotSourcePort, TimePort

__all__ = [
    # Entry points
    "run",
    # Input/output models
    "ResolveLinkInput",
    "ResolveOutput",
    "ResolveError",
    "ResolveErrorCode",
    # Ports
    "SnapshotSourcePort",
    "TimePort",
    # Service
    "NOT_FOUND_MESSAGE",
    "RedirectResolver",
    "create_redirect_resolver",
    "resolve_in_snapshot",
]
