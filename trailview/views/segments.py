"""Drawing of colored text segments"""

from typing import Iterable

from trailview.formatter import Segment
from trailview.helpers.curses_utils import Position, TextAttribute
from trailview.output_controller import Window


def draw_segments(
    window: Window,
    position: Position,
    segments: Iterable[Segment],
    attributes: list[TextAttribute] | None = None,
) -> int:
    """Draw segments left to right, clipped to the window, return the end column"""
    _, width = window.getmaxyx()
    x_pos = position.x
    for segment in segments:
        if x_pos >= width:
            break
        text = segment.text[: width - x_pos]
        if text:
            window.addstr(
                Position(position.y, x_pos),
                text,
                color=segment.color,
                attributes=attributes,
            )
        x_pos += len(text)
    return x_pos
