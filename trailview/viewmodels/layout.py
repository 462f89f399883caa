"""Layout manager - splits the screen between the list and detail panes"""

import logging
import math
from typing import Callable

from trailview.helpers.curses_utils import Size
from trailview.models.viewport_state import (
    DETAIL_HEADER_HEIGHT,
    TITLE_HEIGHT,
    ViewportState,
)

LIST_SHARE = 0.6
RESIZE_STEP = 5
MIN_DETAIL_ROWS = 15
MAX_DETAIL_ROWS = 50
MIN_LIST_ROWS = 1

logger = logging.getLogger(__name__)


class LayoutManager:
    """Owns the pane split and anchors the detail viewport below the list

    The first size notification with room for a list row sets the default
    60/40 split. Later notifications keep the user's split and only clamp
    it to the screen, so a terminal that shrinks and grows back gets the
    same split again.

    Grow and shrink only step within the band where the opposite command
    can undo them, so an equal number of each restores the split.
    """

    def __init__(
        self,
        viewport_state: ViewportState,
        on_list_resized: Callable[[], None],
    ) -> None:
        self._state = viewport_state
        self._on_list_resized = on_list_resized
        self._chosen_list_rows = 0

    def on_resize(self, size: Size) -> None:
        """Handle a terminal size notification"""
        self._state.width = size.width
        self._state.height = size.height
        if not self._state.ready:
            self._set_default_split()
        else:
            self._state.list_rows = min(
                self._chosen_list_rows, self._state.available_rows
            )
        self._anchor()

    def _set_default_split(self) -> None:
        list_rows = math.floor(self._state.available_rows * LIST_SHARE)
        if list_rows < MIN_LIST_ROWS:
            logger.debug("No room for the list pane at height %d", self._state.height)
            self._state.list_rows = 0
            return
        self._state.list_rows = list_rows
        self._chosen_list_rows = list_rows
        self._state.ready = True
        logger.info(
            "Initial layout %dx%d: %d list rows, %d detail rows",
            self._state.height,
            self._state.width,
            self._state.list_rows,
            self._state.detail_height,
        )

    def _can_grow(self) -> bool:
        """Whether growing is allowed and a shrink could undo it"""
        detail_height = self._state.detail_height
        return (
            self._state.ready
            and MIN_DETAIL_ROWS <= detail_height <= MAX_DETAIL_ROWS - RESIZE_STEP
            and self._state.list_rows - RESIZE_STEP >= MIN_LIST_ROWS
        )

    def _can_shrink(self) -> bool:
        """Whether shrinking is allowed"""
        return (
            self._state.ready
            and self._state.detail_height - RESIZE_STEP >= MIN_DETAIL_ROWS
        )

    def grow_detail_pane(self) -> bool:
        """Move rows from the list pane to the detail pane, return True if changed"""
        if not self._can_grow():
            return False
        self._move_list_rows(-RESIZE_STEP)
        return True

    def shrink_detail_pane(self) -> bool:
        """Move rows from the detail pane to the list pane, return True if changed"""
        if not self._can_shrink():
            return False
        self._move_list_rows(RESIZE_STEP)
        return True

    def _move_list_rows(self, delta: int) -> None:
        self._state.list_rows += delta
        self._chosen_list_rows = self._state.list_rows
        self._anchor()

    def _anchor(self) -> None:
        self._state.detail_y = (
            TITLE_HEIGHT + self._state.list_rows + DETAIL_HEADER_HEIGHT
        )
        self._on_list_resized()
