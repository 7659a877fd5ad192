"""
Tests for link ID validation.

Rules are checked in order and the first failure wins:
trim, empty, whitespace, forbidden character, reserved, separator.
"""

from __future__ import annotations

import pytest

from src.components.link_ids import (
    LinkId,
    LinkIdErrorCode,
    check_link_id,
    parse_link_id,
    run,
    validate_link_id,
)

# --- Valid IDs ---


class TestValidLinkIds:
    """IDs that pass every rule."""

    @pytest.mark.parametrize("raw", ["short", "a", "docs-v2", "x_y.z", "API", "apis", "ünï"])
    def test_valid(self, raw: str) -> None:
        link_id, error = validate_link_id(raw)
        assert error is None
        assert link_id == LinkId(raw)

    def test_surrounding_whitespace_is_trimmed(self) -> None:
        link_id, error = validate_link_id("  short\t\n")
        assert error is None
        assert link_id is not None
        assert link_id.value == "short"

    def test_str_is_value(self) -> None:
        assert str(parse_link_id("short")) == "short"


# --- Rejections ---


class TestRejections:
    """Each rule rejects with its own code."""

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_empty(self, raw: str) -> None:
        _, error = validate_link_id(raw)
        assert error is not None
        assert error.code is LinkIdErrorCode.EMPTY

    @pytest.mark.parametrize("raw", ["a b", "a\tb", "a\nb", "a\u00a0b"])
    def test_inner_whitespace(self, raw: str) -> None:
        _, error = validate_link_id(raw)
        assert error is not None
        assert error.code is LinkIdErrorCode.CONTAINS_WHITESPACE

    @pytest.mark.parametrize("raw", ["a/b", "a\\b", "/a", "a/", "\\"])
    def test_forbidden_characters(self, raw: str) -> None:
        _, error = validate_link_id(raw)
        assert error is not None
        assert error.code is LinkIdErrorCode.FORBIDDEN_CHARACTER

    @pytest.mark.parametrize("raw", ["api", "  api  "])
    def test_reserved(self, raw: str) -> None:
        _, error = validate_link_id(raw)
        assert error is not None
        assert error.code is LinkIdErrorCode.RESERVED
        assert "reserved" in error.message

    def test_error_keeps_raw_input(self) -> None:
        _, error = validate_link_id(" a b ")
        assert error is not None
        assert error.raw == " a b "

    def test_error_str_is_message(self) -> None:
        _, error = validate_link_id("a/b")
        assert error is not None
        assert str(error) == error.message


class TestRuleOrder:
    """First failing rule wins, so messages are stable."""

    def test_whitespace_before_forbidden(self) -> None:
        _, error = validate_link_id("a /b")
        assert error is not None
        assert error.code is LinkIdErrorCode.CONTAINS_WHITESPACE

    def test_forbidden_before_separator(self) -> None:
        _, error = validate_link_id("/a")
        assert error is not None
        assert error.code is LinkIdErrorCode.FORBIDDEN_CHARACTER

    def test_separator_rule_applies_when_slash_allowed(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            "src.components.link_ids._impl.FORBIDDEN_CHARACTERS", frozenset({"\\"})
        )
        assert check_link_id("a/b") is None
        for raw in ("/a", "a/", "/"):
            error = check_link_id(raw)
            assert error is not None
            assert error.code is LinkIdErrorCode.LEADING_OR_TRAILING_SEPARATOR

    def test_deterministic(self) -> None:
        assert validate_link_id("a b") == validate_link_id("a b")


# --- LinkId Construction ---


class TestLinkIdConstruction:
    """Direct construction enforces the same rules."""

    @pytest.mark.parametrize("raw", ["", "a b", " a", "a/b", "api"])
    def test_invalid_direct_construction_raises(self, raw: str) -> None:
        with pytest.raises(ValueError):
            LinkId(raw)

    def test_parse_link_id_raises(self) -> None:
        with pytest.raises(ValueError, match="reserved"):
            parse_link_id("api")

    def test_equality_and_hash_by_value(self) -> None:
        a = parse_link_id("short")
        b = parse_link_id("  short ")
        assert a == b
        assert hash(a) == hash(b)
        assert {a: 1}[b] == 1

    def test_immutable(self) -> None:
        link_id = parse_link_id("short")
        with pytest.raises(AttributeError):
            link_id.value = "other"  # type: ignore[misc]


# --- Component Entry Point ---


class TestRun:
    def test_success(self) -> None:
        result = run("short")
        assert result.success
        assert result.link_id == LinkId("short")

    def test_failure(self) -> None:
        result = run("api")
        assert not result.success
        assert result.link_id is None
        assert result.error is not None
        assert result.error.code is LinkIdErrorCode.RESERVED
