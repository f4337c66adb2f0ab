"""Scrollable multi-line content inside a frame, with a scrollbar thumb."""

from typing import List, Optional, Sequence

from terminal.keys import Key
from terminal.surface import Surface, TerminalGeometry
from widgets.frame import Frame, draw_frame, draw_too_small, fit


THUMB = "█"
HELP_TEXT = "Use ↑/↓ to scroll, q to return"

# Smallest terminal a viewer frame is drawn in
MIN_ROWS = 7
MIN_COLS = 12


class ScrollState:
    """
    Content lines and the offset of the first visible line.

    Attributes:
        lines: Content, one entry per line
        offset: Index of the first visible line, never negative
        viewport_height: Number of visible lines
        clamp: Keep the last page in view when scrolling down. When False,
            scrolling down is unbounded and can leave an empty viewport.
    """

    def __init__(
        self,
        lines: Sequence[str],
        viewport_height: int,
        offset: int = 0,
        clamp: bool = True,
    ):
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        self.lines: List[str] = list(lines)
        self.viewport_height = max(0, viewport_height)
        self.offset = offset
        self.clamp = clamp

    @property
    def max_offset(self) -> int:
        """Largest offset that still fills the viewport."""
        return max(0, len(self.lines) - self.viewport_height)

    def scroll_up(self) -> None:
        self.offset = max(0, self.offset - 1)

    def scroll_down(self) -> None:
        self.offset += 1
        if self.clamp:
            self.offset = min(self.offset, self.max_offset)

    def resize(self, viewport_height: int) -> None:
        """Follow a new viewport height, re-clamping the offset."""
        self.viewport_height = max(0, viewport_height)
        if self.clamp:
            self.offset = min(self.offset, self.max_offset)

    def visible_lines(self) -> List[str]:
        return self.lines[self.offset:self.offset + self.viewport_height]

    def thumb_row(self) -> Optional[int]:
        """
        Viewport row of the scrollbar thumb.

        Returns:
            ``offset * H // total`` when the content is taller than the
            viewport, else None
        """
        total = len(self.lines)
        height = self.viewport_height
        if height <= 0 or total <= height:
            return None
        return min(self.offset * height // total, height - 1)


def viewer_frame(geometry: TerminalGeometry, title: Optional[str] = None) -> Optional[Frame]:
    """Frame a viewer occupies for a terminal size, or None if it cannot fit."""
    if geometry.rows < MIN_ROWS or geometry.cols < MIN_COLS:
        return None
    return Frame(top=1, left=1, width=geometry.cols - 4, height=geometry.rows - 4, title=title)


def render_content(surface: Surface, frame: Frame, state: ScrollState) -> None:
    """
    Draw the visible lines and the thumb inside ``frame``.

    Every interior row is rewritten; rows past the end of the content are
    blanked.
    """
    text_width = frame.width - 4
    for row in range(frame.interior_height):
        index = state.offset + row
        line = state.lines[index] if index < len(state.lines) else ""
        surface.write_at(frame.top + 1 + row, frame.left + 2, fit(line, text_width))

    thumb = state.thumb_row()
    if thumb is not None:
        surface.write_at(frame.top + 1 + thumb, frame.left + frame.width - 2, THUMB)


class ScrollableViewer:
    """Full-screen viewer for a titled block of text."""

    def __init__(self, content: str, title: str, clamp: bool = True):
        """
        Initialize the viewer.

        Args:
            content: Text with embedded newlines
            title: Title shown in the frame border
            clamp: Bound scrolling to the last page
        """
        self.title = title
        self.state = ScrollState(content.splitlines(), viewport_height=0, clamp=clamp)

    def render(self, surface: Surface, geometry: TerminalGeometry) -> None:
        """Clear and redraw the frame, the content and the help line."""
        frame = viewer_frame(geometry, self.title)
        if frame is None:
            draw_too_small(surface, geometry.rows, geometry.cols)
            return

        surface.clear()
        self.state.resize(frame.interior_height)
        draw_frame(surface, frame)
        render_content(surface, frame, self.state)
        surface.write_at(geometry.rows - 2, 2, fit(HELP_TEXT, geometry.cols - 3, pad=False))

    def handle_key(self, key: Key) -> bool:
        """
        Scroll on Up/Down.

        Returns:
            True when the viewer should be closed
        """
        if key == Key.UP:
            self.state.scroll_up()
        elif key == Key.DOWN:
            self.state.scroll_down()
        elif key == Key.QUIT:
            return True
        return False
