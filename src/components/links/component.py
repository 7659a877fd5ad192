"""
Links component - Link validity and redirect building.

Shell Layer - reads the clock through the time port and delegates to
the functional core.
"""

from __future__ import annotations

from ._impl import build_redirect_url, evaluate_state
from .models import Link, LinkState
from .ports import TimePort


def current_unix_time(time_port: TimePort) -> int:
    """Whole seconds since the epoch according to the time port."""
    return int(time_port.now_utc().timestamp())


def run_evaluate(link: Link, *, time_port: TimePort) -> LinkState:
    """
    Evaluate whether a link can be followed right now.

    Args:
        link: Link to evaluate.
        time_port: Clock used for the expiry check.

    Returns:
        LinkState for the current moment.
    """
    return evaluate_state(link, current_unix_time(time_port))


def run_build(link: Link, *, link_id: str, request_path: str) -> str:
    """
    Build the redirect URL for a request path.

    Raises:
        MalformedAppendError: If the trailing content cannot be appended.
    """
    return build_redirect_url(link, link_id, request_path)
