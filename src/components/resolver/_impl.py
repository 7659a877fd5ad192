"""
RedirectResolver - Link ID + request path to redirect URL.

Algorithm:
1. Read the current snapshot once (a concurrent reload cannot mix versions)
2. Look up the link ID
3. Evaluate validity (disabled, then expiry)
4. Build the URL according to the link's append mode

Disabled and expired links are reported as NOT_FOUND, the same as absent
ones. Only MALFORMED_APPEND is distinct and is an internal error.
"""

from __future__ import annotations

import logging

from src.components.configuration import ConfigurationSnapshot
from src.components.link_ids import LinkId
from src.components.links import (
    LinkState,
    MalformedAppendError,
    build_redirect_url,
    current_unix_time,
    evaluate_state,
)

from .models import ResolveError, ResolveErrorCode, ResolveOutput
from .ports import SnapshotSourcePort, TimePort

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "This link does not exist or is no longer available."


def _not_found() -> ResolveOutput:
    return ResolveOutput(
        url=None,
        error=ResolveError(code=ResolveErrorCode.NOT_FOUND, message=NOT_FOUND_MESSAGE),
    )


def resolve_in_snapshot(
    snapshot: ConfigurationSnapshot,
    link_id: LinkId,
    request_path: str,
    now: int,
) -> ResolveOutput:
    """
    Resolve against a fixed snapshot at a fixed time.

    Pure apart from logging: same inputs always give the same output.
    """
    link = snapshot.get(link_id)
    if link is None:
        return _not_found()

    state = evaluate_state(link, now)
    if state is LinkState.DISABLED:
        logger.debug("Link ID '%s' is disabled", link_id)
        return _not_found()
    if state is LinkState.EXPIRED:
        logger.debug(
            "Link ID '%s' has expired - invalid after %s", link_id, link.invalid_after
        )
        return _not_found()

    try:
        url = build_redirect_url(link, link_id.value, request_path)
    except MalformedAppendError as e:
        logger.error(
            "Malformed append for link ID '%s' (trailing %r): %s",
            link_id,
            e.trailing,
            e.reason,
        )
        return ResolveOutput(
            url=None,
            error=ResolveError(code=ResolveErrorCode.MALFORMED_APPEND, message=str(e)),
        )

    logger.debug("Redirecting Link ID '%s' -> '%s'", link_id, url)
    return ResolveOutput(url=url)


class RedirectResolver:
    """
    Redirect resolver.

    Reads the current snapshot from the store on every call.
    """

    def __init__(self, source: SnapshotSourcePort, time_port: TimePort) -> None:
        """Initialize resolver."""
        self._source = source
        self._time_port = time_port

    def resolve(self, link_id: LinkId, request_path: str) -> ResolveOutput:
        """Resolve a link ID for a request path."""
        snapshot = self._source.current_snapshot()
        return resolve_in_snapshot(
            snapshot,
            link_id,
            request_path,
            current_unix_time(self._time_port),
        )


# --- Factory ---


def create_redirect_resolver(
    source: SnapshotSourcePort,
    time_port: TimePort | None = None,
) -> RedirectResolver:
    """Create a RedirectResolver."""
    if time_port is None:
        from src.adapters.clock import SystemClock

        time_port = SystemClock()
    return RedirectResolver(source=source, time_port=time_port)
