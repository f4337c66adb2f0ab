"""Selectable menu with wrap-around navigation."""

from typing import List, Optional, Sequence

from terminal.keys import Key
from terminal.styles import Color, colored
from terminal.surface import Surface
from widgets.frame import fit


SELECTED_MARKER = "▶ "
UNSELECTED_MARKER = "  "

MARKER_STYLE = colored(Color.BLUE, bold=True)
SELECTED_STYLE = colored(Color.WHITE, bold=True)


class MenuState:
    """
    Ordered menu items with one selected entry.

    The selection wraps at both ends, so ``selected_index`` always stays
    inside ``[0, len(items))``.
    """

    def __init__(self, items: Sequence[str], selected_index: int = 0):
        """
        Initialize menu state.

        Args:
            items: Menu labels, at least one
            selected_index: Initially selected item
        """
        if not items:
            raise ValueError("A menu needs at least one item")
        if not 0 <= selected_index < len(items):
            raise ValueError(
                f"selected_index {selected_index} out of range for {len(items)} items"
            )
        self.items: List[str] = list(items)
        self.selected_index = selected_index

    def move_up(self) -> None:
        """Select the previous item, wrapping to the last."""
        count = len(self.items)
        self.selected_index = (self.selected_index - 1 + count) % count

    def move_down(self) -> None:
        """Select the next item, wrapping to the first."""
        self.selected_index = (self.selected_index + 1) % len(self.items)

    def commit(self) -> str:
        """Return the selected item."""
        return self.items[self.selected_index]

    def handle_key(self, key: Key) -> Optional[str]:
        """
        Apply a navigation key.

        Returns:
            The committed item on Enter, otherwise None
        """
        if key == Key.UP:
            self.move_up()
        elif key == Key.DOWN:
            self.move_down()
        elif key == Key.ENTER:
            return self.commit()
        return None

    def render(self, surface: Surface, top: int, left: int, width: Optional[int] = None) -> None:
        """
        Draw the items one per row starting at ``(top, left + 2)``.

        Args:
            surface: Surface to draw on
            top: Row of the first item
            left: Column the menu is aligned to
            width: Cells available for each row, markers included
        """
        for index, item in enumerate(self.items):
            label = item
            if width is not None:
                label = fit(item, width - len(SELECTED_MARKER), pad=False)
            surface.move_cursor(top + index, left + 2)
            if index == self.selected_index:
                surface.write(SELECTED_MARKER, MARKER_STYLE)
                surface.write(label, SELECTED_STYLE)
            else:
                surface.write(UNSELECTED_MARKER + label)
