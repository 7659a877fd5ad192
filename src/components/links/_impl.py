"""
Link evaluation - Functional Core.

Validity is a pure function of (link, now): disabled is checked first,
then expiry. Nothing is stored between evaluations.

Redirect construction by append mode:
- none: always the configured redirect
- path: trailing content after "/<id>/" joined onto the redirect path,
  query taken from the trailing content only
- path_preserve_query: same join, query forced to the redirect's own

Without trailing content every mode returns the redirect unchanged.
"""

from __future__ import annotations

from urllib.parse import urljoin, urlsplit, urlunsplit

from .models import AppendMode, Link, LinkState, MalformedAppendError


def is_absolute_url(url: str) -> bool:
    """Check if URL is absolute (has scheme and a usable host and port)."""
    if any(ch.isspace() for ch in url):
        return False
    try:
        parsed = urlsplit(url)
        _ = parsed.port  # ValueError when out of range or not numeric
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.hostname)


# --- Validity ---


def evaluate_state(link: Link, now: int) -> LinkState:
    """
    Evaluate link validity at `now` (Unix seconds).

    A link is expired only when now is strictly past invalid_after.
    """
    if link.disabled:
        return LinkState.DISABLED
    if link.invalid_after is not None and now > link.invalid_after:
        return LinkState.EXPIRED
    return LinkState.VALID


def is_valid(link: Link, now: int) -> bool:
    """Check if a link can be followed at `now`."""
    return evaluate_state(link, now) is LinkState.VALID


# --- Redirect Construction ---


def extract_trailing(link_id: str, request_path: str) -> str:
    """
    Return the request path content after the "/<id>/" prefix.

    Trailing slashes are dropped, so "/short" and "/short/" both yield ""
    and "/short/repo/" yields "repo".
    """
    prefix = f"/{link_id}/"
    if not request_path.startswith(prefix):
        return ""
    return request_path[len(prefix) :].rstrip("/")


def build_redirect_url(link: Link, link_id: str, request_path: str) -> str:
    """
    Compute the final redirect URL for a request.

    Raises:
        MalformedAppendError: If the trailing content cannot be joined onto
            the redirect, or the join leaves the redirect's origin.
    """
    if link.append_mode is AppendMode.NONE:
        return link.redirect

    trailing = extract_trailing(link_id, request_path)
    if not trailing:
        return link.redirect

    try:
        base = urlsplit(link.redirect)
        if not base.path.endswith("/"):
            base = base._replace(path=f"{base.path}/")
        joined = urlsplit(urljoin(urlunsplit(base), trailing))
    except ValueError as e:
        raise MalformedAppendError(link_id, trailing, str(e)) from e

    # Trailing content like "https://elsewhere/" would replace the target
    if (joined.scheme, joined.netloc) != (base.scheme, base.netloc):
        raise MalformedAppendError(link_id, trailing, "join changed the redirect origin")

    if link.append_mode is AppendMode.PATH_PRESERVE_QUERY:
        joined = joined._replace(query=base.query)

    return urlunsplit(joined)
