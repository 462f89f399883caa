"""Pretty-printing of entry payloads for the detail pane"""

import dataclasses
import json
from typing import Any, NamedTuple

from trailview.helpers.curses_utils import Color

PLACEHOLDER = "Unable to render payload"

KEY_COLOR = Color.DEBUG
STRING_COLOR = Color.INFO
NUMBER_COLOR = Color.WARNING
LITERAL_COLOR = Color.HEADER


class Segment(NamedTuple):
    """A run of text drawn with a single color"""

    text: str
    color: Color | None = None


Line = list[Segment]


@dataclasses.dataclass(frozen=True)
class FormattedText:
    """Wrapped, optionally colored payload lines"""

    lines: list[Line]

    @property
    def plain_lines(self) -> list[str]:
        """The lines without color information"""
        return ["".join(segment.text for segment in line) for line in self.lines]


@dataclasses.dataclass(frozen=True)
class FormatError:
    """Returned when a payload is empty or not valid JSON"""

    reason: str


def placeholder_lines() -> list[Line]:
    """Content shown in place of a payload that cannot be rendered"""
    return [[Segment(PLACEHOLDER, Color.ERROR)]]


class PayloadFormatter:
    """Formats raw JSON payloads into indented, colored, wrapped lines"""

    def __init__(self, colorize: bool = True, indent: int = 2) -> None:
        self._colorize = colorize
        self._indent = indent

    def format(self, raw: str, width: int) -> FormattedText | FormatError:
        """Format `raw` for a pane `width` columns wide"""
        if not raw or not raw.strip():
            return FormatError("empty payload")
        try:
            value = json.loads(raw)
        except ValueError as e:
            return FormatError(str(e))

        lines: list[Line] = []
        self._render(value, 0, [], lines, last=True)
        wrapped: list[Line] = []
        for line in lines:
            wrapped.extend(wrap_line(line, width))
        return FormattedText(wrapped)

    def _segment(self, text: str, color: Color) -> Segment:
        return Segment(text, color if self._colorize else None)

    def _render(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        value: Any,
        depth: int,
        prefix: Line,
        lines: list[Line],
        last: bool,
    ) -> None:
        """Append the lines of `value`, the first one starting with `prefix`"""
        pad = " " * (self._indent * depth)
        comma = [] if last else [Segment(",")]

        if isinstance(value, dict) and value:
            lines.append([Segment(pad)] + prefix + [Segment("{")])
            items = list(value.items())
            for i, (key, item) in enumerate(items):
                key_prefix = [
                    self._segment(json.dumps(key, ensure_ascii=False), KEY_COLOR),
                    Segment(": "),
                ]
                self._render(item, depth + 1, key_prefix, lines, i == len(items) - 1)
            lines.append([Segment(pad + "}")] + comma)
        elif isinstance(value, list) and value:
            lines.append([Segment(pad)] + prefix + [Segment("[")])
            for i, item in enumerate(value):
                self._render(item, depth + 1, [], lines, i == len(value) - 1)
            lines.append([Segment(pad + "]")] + comma)
        else:
            lines.append([Segment(pad)] + prefix + [self._scalar(value)] + comma)

    def _scalar(self, value: Any) -> Segment:
        text = json.dumps(value, ensure_ascii=False)
        if isinstance(value, str):
            return self._segment(text, STRING_COLOR)
        if isinstance(value, bool) or value is None:
            return self._segment(text, LITERAL_COLOR)
        if isinstance(value, (int, float)):
            return self._segment(text, NUMBER_COLOR)
        # empty object or array
        return Segment(text)


def wrap_line(line: Line, width: int) -> list[Line]:
    """Hard-wrap a line of segments into lines of at most `width` characters"""
    width = max(1, width)
    result: list[Line] = [[]]
    used = 0
    for segment in line:
        text = segment.text
        while text:
            if used == width:
                result.append([])
                used = 0
            chunk = text[: width - used]
            result[-1].append(Segment(chunk, segment.color))
            used += len(chunk)
            text = text[len(chunk) :]
    return result
