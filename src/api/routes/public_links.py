"""
Public Link Routes.

Routing integration for short-link redirects.

Key behaviors:
- First path segment is the link ID; invalid IDs get 400
- Only the request path (not its query string) is passed to the resolver,
  still percent-encoded so trailing content is appended verbatim
- Found links return 307 Temporary Redirect
- Absent, disabled and expired links return the same 404
- Malformed appends return 500
"""

from __future__ import annotations

import logging
from urllib.parse import unquote

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from src.api.deps import get_resolver
from src.components.link_ids import validate_link_id
from src.components.resolver import (
    NOT_FOUND_MESSAGE,
    RedirectResolver,
    ResolveErrorCode,
)

logger = logging.getLogger(__name__)

router = APIRouter()

INDEX_TEXT = "lynx - short link redirect service\n"


def first_segment(path: str) -> str:
    """Return the first segment of a request path ("a" for "/a/b/c")."""
    return path.lstrip("/").split("/", 1)[0]


def raw_request_path(request: Request) -> str:
    """Undecoded request path without the query string."""
    raw = request.scope.get("raw_path")
    if not raw:
        return request.url.path
    return raw.decode("latin-1").split("?", 1)[0]


# --- Routes ---


@router.get("/", response_class=PlainTextResponse)
def index() -> str:
    """Service banner."""
    return INDEX_TEXT


@router.get("/{link_path:path}")
def follow_link(
    link_path: str,
    request: Request,
    resolver: RedirectResolver = Depends(get_resolver),
) -> RedirectResponse:
    """
    Redirect a short link.

    The link ID is validated decoded. The rest of the path is handed on
    still encoded, so "%3F" or "%25" in it survive the append.
    """
    raw_path = raw_request_path(request)
    raw_id = first_segment(raw_path)
    link_id, error = validate_link_id(unquote(raw_id))
    if error is not None:
        logger.debug("Rejected link ID %r: %s", error.raw, error.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid link ID")
    assert link_id is not None

    remainder = raw_path.lstrip("/")[len(raw_id) :]
    result = resolver.resolve(link_id, f"/{link_id.value}{remainder}")

    if result.error is not None:
        if result.error.code is ResolveErrorCode.NOT_FOUND:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal server error occurred.",
        )

    assert result.url is not None
    return RedirectResponse(url=result.url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
