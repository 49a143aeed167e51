"""Tests for soft wrapping and word boundaries."""

import pytest

from wordsmith.errors import UnwrappableLineError
from wordsmith.wrap import WrappedText, WrapPolicy


def test_short_line_is_not_wrapped():
    wrapped = WrappedText("hello", 10)
    assert wrapped.lines() == ["hello"]
    assert wrapped.line_length() == 1
    assert not wrapped.is_soft_wrapped_line(0)


def test_breaks_at_last_whitespace():
    wrapped = WrappedText("hello world foo", 11)
    assert wrapped.lines() == ["hello world", "foo"]
    assert wrapped.to_string() == "hello world\nfoo"
    assert str(wrapped) == "hello world\nfoo"
    assert wrapped.is_soft_wrapped_line(0)
    assert not wrapped.is_soft_wrapped_line(1)
    assert not wrapped.is_soft_wrapped_line(5)
    assert wrapped.line_start(1) == 12


def test_length_excludes_inserted_breaks():
    wrapped = WrappedText("hello world foo", 11)
    assert wrapped.length() == 15


def test_authored_newlines_are_hard_breaks():
    wrapped = WrappedText("ab\ncd", 10)
    assert wrapped.lines() == ["ab", "cd"]
    assert not wrapped.is_soft_wrapped_line(0)
    assert wrapped.line_start(1) == 3


def test_breaks_at_nearest_whitespace_within_width():
    text = "a" * 45 + " " + "a" * 50
    wrapped = WrappedText(text, 50, WrapPolicy.STRICT)
    assert wrapped.lines() == ["a" * 45, "a" * 50]
    assert wrapped.line_length() == 2


def test_strict_rejects_word_wider_than_width():
    text = "a" * 60 + " " + "a" * 59
    with pytest.raises(UnwrappableLineError) as excinfo:
        WrappedText(text, 50, WrapPolicy.STRICT).wrapped_lines()
    assert excinfo.value.word == "a" * 60
    assert excinfo.value.width == 50


def test_hard_break_cuts_long_word():
    text = "a" * 60 + " " + "a" * 59
    wrapped = WrappedText(text, 50)
    lines = wrapped.lines()
    assert lines[0] == "a" * 50
    assert lines[1] == "a" * 10
    assert all(len(line) <= 50 for line in lines)
    assert "".join(lines) == text.replace(" ", "")


def test_invalid_width():
    with pytest.raises(ValueError):
        WrappedText("abc", 0)


def test_locate():
    wrapped = WrappedText("hello world foo", 11)
    assert wrapped.locate(0) == (0, 0)
    assert wrapped.locate(11) == (0, 11)
    assert wrapped.locate(13) == (1, 1)
    assert wrapped.locate(15) == (1, 3)
    assert wrapped.locate(99) == (1, 3)


def test_word_boundary_symmetry():
    wrapped = WrappedText("alpha beta gamma")
    assert wrapped.next_word_boundary(0) == 6
    assert wrapped.previous_word_boundary(11) == 6


def test_next_word_boundary():
    wrapped = WrappedText("one two  three")
    assert wrapped.next_word_boundary(0) == 4
    assert wrapped.next_word_boundary(4) == 9
    # After the last word start, stop at its end
    assert wrapped.next_word_boundary(9) == 14
    assert wrapped.next_word_boundary(14) is None
    assert wrapped.next_word_boundary(-1) == 0


def test_previous_word_boundary():
    wrapped = WrappedText("one two  three")
    assert wrapped.previous_word_boundary(14) == 9
    assert wrapped.previous_word_boundary(9) == 4
    assert wrapped.previous_word_boundary(5) == 4
    assert wrapped.previous_word_boundary(0) is None


def test_no_words():
    wrapped = WrappedText("   ")
    assert wrapped.next_word_boundary(0) is None
    assert wrapped.previous_word_boundary(3) is None
