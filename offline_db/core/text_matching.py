"""Structural comparison of statement texts.

Statements issued by the rules engine are compared to reference shapes while
ignoring every whitespace character and letter case. Whitespace is elided, not
collapsed, so ``SELECT*FROM t`` and ``select * from t`` are the same text.
"""

from __future__ import annotations

from typing import Any

WHITESPACE = frozenset(" \t\n\r\f\v")


def _is_whitespace(char: str) -> bool:
    return char in WHITESPACE


def normalize_text(text: str) -> str:
    """Return *text* lower-cased with every whitespace character removed."""

    return "".join(char.lower() for char in text if char not in WHITESPACE)


def texts_equal(left: str | None, right: str | None) -> bool:
    """Return True when both texts match structurally."""

    if left is right:
        return True
    if left is None or right is None:
        return False

    index_left = 0
    index_right = 0
    len_left = len(left)
    len_right = len(right)

    while index_left < len_left and index_right < len_right:
        char_left = left[index_left]
        char_right = right[index_right]
        if _is_whitespace(char_left):
            index_left += 1
            continue
        if _is_whitespace(char_right):
            index_right += 1
            continue
        if char_left.lower() != char_right.lower():
            return False
        index_left += 1
        index_right += 1

    while index_left < len_left and _is_whitespace(left[index_left]):
        index_left += 1
    while index_right < len_right and _is_whitespace(right[index_right]):
        index_right += 1

    return index_left == len_left and index_right == len_right


def _consumed(shape: str, index: int) -> bool:
    while index < len(shape) and _is_whitespace(shape[index]):
        index += 1
    return index == len(shape)


def _walk_from(text: str, shape: str, start: int) -> bool:
    index_text = start
    index_shape = 0
    while index_text < len(text) and index_shape < len(shape):
        char_text = text[index_text]
        char_shape = shape[index_shape]
        if _is_whitespace(char_text):
            index_text += 1
            continue
        if _is_whitespace(char_shape):
            index_shape += 1
            continue
        if char_text.lower() != char_shape.lower():
            return False
        index_text += 1
        index_shape += 1
    return _consumed(shape, index_shape)


def text_starts_with(text: str | None, shape: str | None) -> bool:
    """Return True when *text* begins with *shape*, ignoring whitespace and case."""

    if text is None or shape is None:
        return False
    return _walk_from(text, shape, 0)


def text_contains(text: str | None, shape: str | None) -> bool:
    """Return True when *shape* occurs anywhere in *text*.

    Each offset of *text* is tried in turn; a mismatch restarts the walk at the
    next offset.
    """

    if text is None or shape is None:
        return False
    if _consumed(shape, 0):
        return True

    for start in range(len(text)):
        # A match cannot begin on whitespace; the same walk starts at the next
        # non-whitespace offset anyway.
        if _is_whitespace(text[start]):
            continue
        if _walk_from(text, shape, start):
            return True
    return False


def text_hash(text: str | None) -> int:
    """Hash consistent with :func:`texts_equal`."""

    if text is None:
        return 0
    return hash(normalize_text(text))


class CommandText(str):
    """String whose equality and hash follow structural comparison."""

    __slots__ = ()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, str):
            return NotImplemented
        return texts_equal(self, other)

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return text_hash(self)


__all__ = [
    "CommandText",
    "WHITESPACE",
    "normalize_text",
    "text_contains",
    "text_hash",
    "text_starts_with",
    "texts_equal",
]
