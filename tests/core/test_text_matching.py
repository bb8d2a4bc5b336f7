"""Tests for structural statement text comparison."""

from __future__ import annotations

import pytest

from offline_db.core.text_matching import (
    CommandText,
    normalize_text,
    text_contains,
    text_hash,
    text_starts_with,
    texts_equal,
)


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        ("SELECT * FROM t", "select*from t", True),
        ("SELECT\n\t*\r\nFROM\f\vt", "SELECT * FROM t", True),
        ("", "", True),
        ("", " \n\t ", True),
        ("  ", "", True),
        ("SELECT a", "SELECT b", False),
        ("SELECT a", "SELECT ab", False),
        ("SELECT ab", "SELECT a", False),
        ("a b", "ab", True),
        ('"Id"', '"id"', True),
        ("x", "", False),
    ],
)
def test_texts_equal(left: str, right: str, expected: bool) -> None:
    assert texts_equal(left, right) is expected
    assert texts_equal(right, left) is expected
    assert (normalize_text(left) == normalize_text(right)) is expected


def test_texts_equal_handles_none() -> None:
    assert texts_equal(None, None)
    assert not texts_equal(None, "")
    assert not texts_equal("", None)


def test_whitespace_is_elided_not_collapsed() -> None:
    assert texts_equal("SELECT Id", "SELECTId")
    assert texts_equal("S E L E C T", "select")


def test_contains_matches_reformatted_text() -> None:
    shape = "SELECT  *FROM t"

    assert text_contains("select * from t", shape)
    assert text_contains("SELECT\n*\nFROM\tt", shape)
    assert not text_contains("SELECT * FRM t", shape)


def test_contains_restarts_after_partial_match() -> None:
    assert text_contains("SELSELECT x", "SELECT x")
    assert text_contains("aab", "ab")
    assert text_contains("WITH q AS (SELECT 1) SELECT * FROM q", "select * from q")
    assert not text_contains("SELECT", "SELECT x")


def test_contains_ignores_trailing_shape_whitespace() -> None:
    assert text_contains("prefix FROM t", "FROM t \n\t")
    assert text_contains("anything", "   ")
    assert not text_contains(None, "x")
    assert not text_contains("x", None)


def test_starts_with_allows_trailing_content() -> None:
    assert text_starts_with("SELECT  a,\n b FROM t WHERE x = 1", "select a,b")
    assert text_starts_with("   select a", "SELECT a  ")


def test_starts_with_fails_on_first_mismatch() -> None:
    assert not text_starts_with("SELECT b, a", "SELECT a")
    assert not text_starts_with("x SELECT a", "SELECT a")
    assert not text_starts_with("SELECT", "SELECT a")


def test_text_hash_is_consistent_with_equality() -> None:
    assert text_hash("SELECT * FROM t") == text_hash("select\n*\nfrom t")
    assert text_hash(None) == 0


def test_command_text_can_key_dicts() -> None:
    answers = {CommandText('SELECT "Id" FROM "T"'): 1}

    assert answers[CommandText('select\n  "Id"\nfrom "T"')] == 1
    assert CommandText("a b") == "AB"
    assert CommandText("a") != "b"
