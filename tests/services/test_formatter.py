"""Tests for the payload formatter."""

import pytest

from trailview.formatter import (
    KEY_COLOR,
    NUMBER_COLOR,
    PLACEHOLDER,
    STRING_COLOR,
    FormatError,
    FormattedText,
    PayloadFormatter,
    Segment,
    placeholder_lines,
    wrap_line,
)
from trailview.helpers.curses_utils import Color


@pytest.fixture(name="formatter")
def formatter_fixture() -> PayloadFormatter:
    """Create a colorizing formatter"""
    return PayloadFormatter()


def test_format_object_is_indented(formatter: PayloadFormatter) -> None:
    """Test that nested objects are expanded with two-space indentation."""
    # Act
    result = formatter.format('{"a": 1, "b": {"c": [true, null]}}', 80)

    # Assert
    assert isinstance(result, FormattedText)
    assert result.plain_lines == [
        "{",
        '  "a": 1,',
        '  "b": {',
        '    "c": [',
        "      true,",
        "      null",
        "    ]",
        "  }",
        "}",
    ]


def test_format_empty_containers_stay_inline(formatter: PayloadFormatter) -> None:
    """Test that empty objects and arrays are written on one line."""
    # Act
    result = formatter.format('{"a": {}, "b": []}', 80)

    # Assert
    assert isinstance(result, FormattedText)
    assert result.plain_lines == ["{", '  "a": {},', '  "b": []', "}"]


def test_format_scalar_payload(formatter: PayloadFormatter) -> None:
    """Test that a bare JSON scalar is a single line."""
    # Act
    result = formatter.format('"hello"', 80)

    # Assert
    assert isinstance(result, FormattedText)
    assert result.plain_lines == ['"hello"']


def test_format_colors_tokens(formatter: PayloadFormatter) -> None:
    """Test that keys, strings and numbers get their own colors."""
    # Act
    result = formatter.format('{"name": "x", "n": 2}', 80)

    # Assert
    assert isinstance(result, FormattedText)
    assert Segment('"name"', KEY_COLOR) in result.lines[1]
    assert Segment('"x"', STRING_COLOR) in result.lines[1]
    assert Segment("2", NUMBER_COLOR) in result.lines[2]


def test_format_without_color() -> None:
    """Test that a non-colorizing formatter emits uncolored segments."""
    # Arrange
    formatter = PayloadFormatter(colorize=False)

    # Act
    result = formatter.format('{"name": "x"}', 80)

    # Assert
    assert isinstance(result, FormattedText)
    assert all(segment.color is None for line in result.lines for segment in line)


def test_format_wraps_to_width(formatter: PayloadFormatter) -> None:
    """Test that lines longer than the pane width are hard-wrapped."""
    # Act
    result = formatter.format('{"key": "abcdefghij"}', 10)

    # Assert
    assert isinstance(result, FormattedText)
    assert all(len(line) <= 10 for line in result.plain_lines)
    assert "".join(result.plain_lines) == '{  "key": "abcdefghij"}'


@pytest.mark.parametrize("raw", ["not-json", "{'single': 'quotes'}", "{"])
def test_format_invalid_json(formatter: PayloadFormatter, raw: str) -> None:
    """Test that text which is not JSON gives a format error."""
    # Assert
    assert isinstance(formatter.format(raw, 80), FormatError)


@pytest.mark.parametrize("raw", ["", "   "])
def test_format_empty_payload(formatter: PayloadFormatter, raw: str) -> None:
    """Test that an empty payload gives a format error."""
    # Act
    result = formatter.format(raw, 80)

    # Assert
    assert result == FormatError("empty payload")


def test_placeholder_lines() -> None:
    """Test the content shown for unrenderable payloads."""
    # Assert
    assert placeholder_lines() == [[Segment(PLACEHOLDER, Color.ERROR)]]


def test_wrap_line_splits_segments_and_keeps_colors() -> None:
    """Test that wrapping splits a segment across lines keeping its color."""
    # Act
    lines = wrap_line([Segment("ab"), Segment("cdef", Color.INFO)], 3)

    # Assert
    assert lines == [
        [Segment("ab"), Segment("c", Color.INFO)],
        [Segment("def", Color.INFO)],
    ]


def test_wrap_line_empty() -> None:
    """Test that an empty line stays a single empty line."""
    # Assert
    assert wrap_line([], 5) == [[]]
