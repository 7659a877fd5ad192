"""
Resolver component - Redirect resolution entry point.

Invariants:
- One snapshot is used for the whole resolution
- Disabled, expired and absent links are indistinguishable (NOT_FOUND)
- The resolver never produces HTTP status codes or bodies
"""

from __future__ import annotations

from ._impl import RedirectResolver
from .models import ResolveLinkInput, ResolveOutput
from .ports import SnapshotSourcePort, TimePort


def run(
    inp: ResolveLinkInput,
    *,
    source: SnapshotSourcePort,
    time_port: TimePort,
) -> ResolveOutput:
    """
    Resolve a link ID and request path to a redirect URL.

    Args:
        inp: Input containing the validated link ID and the request path.
        source: Provider of the current configuration snapshot.
        time_port: Clock used for expiry checks.

    Returns:
        ResolveOutput with the URL or a NOT_FOUND / MALFORMED_APPEND error.
    """
    resolver = RedirectResolver(source=source, time_port=time_port)
    return resolver.resolve(inp.link_id, inp.request_path)
