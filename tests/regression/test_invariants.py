"""
Regression tests for behaviour that must never change.

Generated inputs use a fixed seed so failures are reproducible.
"""

from __future__ import annotations

import random
import string

import pytest

from src.components.configuration import parse_configuration
from src.components.link_ids import LinkId, LinkIdErrorCode, validate_link_id
from src.components.links import AppendMode, Link, build_redirect_url
from src.components.resolver import ResolveErrorCode, resolve_in_snapshot

rng = random.Random(5621)

ID_ALPHABET = string.ascii_letters + string.digits + "-_.~"


def random_id() -> str:
    while True:
        value = "".join(rng.choice(ID_ALPHABET) for _ in range(rng.randint(1, 12)))
        if value != "api":
            return value


VALID_IDS = [random_id() for _ in range(40)]


def insert(value: str, token: str) -> str:
    """Put `token` strictly inside `value` so trimming cannot remove it."""
    pos = rng.randint(1, len(value))
    return value[:pos] + token + value[pos:] + "x"


# --- Identifier Validation ---


@pytest.mark.parametrize("value", [insert(v, rng.choice(" \t\n\u00a0")) for v in VALID_IDS[:20]])
def test_inner_whitespace_always_rejected(value: str) -> None:
    _, error = validate_link_id(value)
    assert error is not None
    assert error.code is LinkIdErrorCode.CONTAINS_WHITESPACE


@pytest.mark.parametrize(
    "value",
    [insert(v, rng.choice("/\\")) for v in VALID_IDS[:10]]
    + [f"/{v}" for v in VALID_IDS[10:15]]
    + [f"{v}/" for v in VALID_IDS[15:20]],
)
def test_separators_always_rejected(value: str) -> None:
    link_id, error = validate_link_id(value)
    assert link_id is None
    assert error is not None


def test_reserved_always_rejected() -> None:
    _, error = validate_link_id("api")
    assert error is not None
    assert error.code is LinkIdErrorCode.RESERVED


# --- Resolution ---


def document_for(ids: list[str]) -> str:
    lines = []
    for i, raw in enumerate(ids):
        lines.append(f'[links."{raw}"]')
        lines.append(f'redirect = "https://example.com/{i}?n={i}"')
        if i % 3 == 0:
            lines.append(f"invalid_after = {1_000_000 + i}")
        if i % 4 == 0:
            lines.append('append_mode = "path"')
    return "\n".join(lines) + "\n"


def test_document_round_trip() -> None:
    ids = list(dict.fromkeys(VALID_IDS))
    snapshot = parse_configuration(document_for(ids))

    assert len(snapshot) == len(ids)
    for i, raw in enumerate(ids):
        link_id, _ = validate_link_id(raw)
        assert link_id is not None
        assert snapshot.get(link_id) == Link(
            redirect=f"https://example.com/{i}?n={i}",
            invalid_after=1_000_000 + i if i % 3 == 0 else None,
            append_mode=AppendMode.PATH if i % 4 == 0 else AppendMode.NONE,
        )


def test_valid_link_resolves_to_its_redirect() -> None:
    ids = list(dict.fromkeys(VALID_IDS))
    snapshot = parse_configuration(document_for(ids))

    for link_id in snapshot:
        link = snapshot.get(link_id)
        assert link is not None
        result = resolve_in_snapshot(snapshot, link_id, f"/{link_id}", 0)
        assert result.url == link.redirect
        # Same inputs, same output
        assert resolve_in_snapshot(snapshot, link_id, f"/{link_id}", 0) == result


def test_invalid_links_indistinguishable_from_absent() -> None:
    text = (
        '[links.off]\nredirect = "https://example.com"\ndisabled = true\n'
        '[links.gone]\nredirect = "https://example.com"\ninvalid_after = 10\n'
    )
    snapshot = parse_configuration(text)
    outputs = {
        raw: resolve_in_snapshot(snapshot, LinkId(raw), f"/{raw}", 11)
        for raw in ("off", "gone", "absent")
    }
    assert len(set(outputs.values())) == 1
    error = outputs["absent"].error
    assert error is not None
    assert error.code is ResolveErrorCode.NOT_FOUND


# --- Append Modes ---


@pytest.mark.parametrize(
    ("redirect", "mode", "path", "expected"),
    [
        (
            "https://example.com/base",
            AppendMode.NONE,
            "/short/extra/path",
            "https://example.com/base",
        ),
        (
            "https://example.com/base",
            AppendMode.PATH,
            "/short/extra/path",
            "https://example.com/base/extra/path",
        ),
        (
            "https://example.com/base?existing=param&foo=bar",
            AppendMode.PATH_PRESERVE_QUERY,
            "/short/extra/path",
            "https://example.com/base/extra/path?existing=param&foo=bar",
        ),
        (
            "https://example.com/base?keep=this",
            AppendMode.PATH_PRESERVE_QUERY,
            "/short",
            "https://example.com/base?keep=this",
        ),
    ],
)
def test_append_mode_scenarios(redirect: str, mode: AppendMode, path: str, expected: str) -> None:
    link = Link(redirect=redirect, append_mode=mode)
    assert build_redirect_url(link, "short", path) == expected
