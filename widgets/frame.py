"""Bordered frames, decorative headers and footers.

Frame layout (each row exactly ``width`` cells):
================================================
    ╔═ Title ══════════════╗     top border, title embedded
    ║                      ║     sides, drawn row by row
    ║                      ║
    ╚══════════════════════╝     bottom border

Header (``width`` cells between the corners), footer (``width`` cells in all):
==========================================================================
    ╭──────────┤ Title ├───────────╮
    ╰──────────────────────────────╯
    help text
"""

from dataclasses import dataclass
from typing import Optional

from rich.cells import cell_len, set_cell_size

from terminal.errors import RenderOverflow
from terminal.styles import NORMAL, TextStyle
from terminal.surface import Surface


# Double-line frame glyphs
FRAME_TL = "╔"
FRAME_TR = "╗"
FRAME_BL = "╚"
FRAME_BR = "╝"
FRAME_HOR = "═"
FRAME_VERT = "║"

# Rounded header/footer glyphs
RULE_TL = "╭"
RULE_TR = "╮"
RULE_BL = "╰"
RULE_BR = "╯"
RULE_HOR = "─"
TICK_LEFT = "┤ "
TICK_RIGHT = " ├"

# Cells a titled top border needs besides the title itself: "╔═ " + " " + "╗"
TITLE_DECORATION = 5


def fit(text: str, width: int, pad: bool = True) -> str:
    """
    Bound text to a number of terminal cells.

    Args:
        text: Text to fit
        width: Cells available
        pad: Right-pad with spaces to exactly ``width`` cells

    Returns:
        Truncated (and optionally padded) text
    """
    if width <= 0:
        return ""
    if pad or cell_len(text) > width:
        return set_cell_size(text, width)
    return text


@dataclass(frozen=True)
class Frame:
    """
    A bordered rectangular region of the terminal grid.

    Attributes:
        top: Row of the top border
        left: Column of the left border
        width: Total width in cells, borders included
        height: Total height in rows, borders included
        title: Optional title embedded in the top border
    """

    top: int
    left: int
    width: int
    height: int
    title: Optional[str] = None

    def __post_init__(self):
        """Validate frame geometry."""
        if self.top < 0 or self.left < 0:
            raise ValueError(f"Frame origin must be non-negative, got ({self.top}, {self.left})")
        if self.width < 2 or self.height < 2:
            raise ValueError(f"Frame must be at least 2x2, got {self.width}x{self.height}")

    @property
    def interior_height(self) -> int:
        """Rows between the top and bottom borders."""
        return self.height - 2

    @property
    def interior_width(self) -> int:
        """Columns between the side borders."""
        return self.width - 2

    def display_title(self) -> Optional[str]:
        """Title as drawn, truncated to the room the border leaves."""
        if not self.title:
            return None
        room = self.width - TITLE_DECORATION
        if room <= 0:
            return None
        return fit(self.title, room, pad=False)


def draw_frame(surface: Surface, frame: Frame, style: TextStyle = NORMAL) -> None:
    """
    Draw a double-line frame, clearing its interior.

    Every cell of the frame is written on each call, so drawing the same
    frame twice gives the same picture.

    Args:
        surface: Surface to draw on
        frame: Frame to draw
        style: Style for the border glyphs
    """
    title = frame.display_title()
    if title:
        filler = frame.width - cell_len(title) - TITLE_DECORATION
        top_line = f"{FRAME_TL}{FRAME_HOR} {title} " + FRAME_HOR * filler + FRAME_TR
    else:
        top_line = FRAME_TL + FRAME_HOR * frame.interior_width + FRAME_TR
    surface.write_at(frame.top, frame.left, top_line, style)

    side_line = FRAME_VERT + " " * frame.interior_width + FRAME_VERT
    for row in range(frame.top + 1, frame.top + frame.height - 1):
        surface.write_at(row, frame.left, side_line, style)

    bottom_line = FRAME_BL + FRAME_HOR * frame.interior_width + FRAME_BR
    surface.write_at(frame.top + frame.height - 1, frame.left, bottom_line, style)


def header_padding(title: str, width: int) -> tuple:
    """
    Split the rule around a header title.

    Returns:
        (title as drawn, left rule length, right rule length). The right
        side takes the extra cell when the remainder is odd.

    Raises:
        RenderOverflow: If ``width`` cannot hold the tick marks
    """
    room = width - cell_len(TICK_LEFT) - cell_len(TICK_RIGHT)
    if room < 0:
        raise RenderOverflow(f"Header width {width} is too narrow for its tick marks")
    title = fit(title, room, pad=False)
    remaining = room - cell_len(title)
    left = remaining // 2
    return title, left, remaining - left


def draw_header(
    surface: Surface,
    title: str,
    width: int,
    top: int,
    left: int,
    style: TextStyle = NORMAL,
) -> int:
    """
    Draw a decorative header line with a centered title.

    Args:
        surface: Surface to draw on
        title: Title text
        width: Cells between the two corner glyphs
        top: Row to draw on
        left: Column of the left corner glyph
        style: Style for the rule

    Returns:
        The row immediately below the header
    """
    title, left_pad, right_pad = header_padding(title, width)
    line = (
        RULE_TL + RULE_HOR * left_pad + TICK_LEFT + title
        + TICK_RIGHT + RULE_HOR * right_pad + RULE_TR
    )
    surface.write_at(top, left, line, style)
    return top + 1


def draw_footer(
    surface: Surface,
    help_text: str,
    width: int,
    top: int,
    left: int,
    style: TextStyle = NORMAL,
) -> None:
    """Draw a closing rule on ``top`` and the help text beneath it."""
    surface.write_at(top, left, RULE_BL + RULE_HOR * max(0, width - 2) + RULE_BR, style)
    surface.write_at(top + 1, left, fit(help_text, width, pad=False))


def draw_too_small(surface: Surface, rows: int, cols: int) -> None:
    """Replace the screen with a resize request when nothing else fits."""
    surface.clear()
    message = "Terminal too small!"
    hint = "Please resize to continue"
    surface.write_at(rows // 2, max(0, (cols - len(message)) // 2), fit(message, cols, pad=False))
    if rows // 2 + 1 < rows:
        surface.write_at(rows // 2 + 1, max(0, (cols - len(hint)) // 2), fit(hint, cols, pad=False))
