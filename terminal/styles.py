"""Text style attributes, resolved to rich styles at write time."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rich.style import Style


class Color(Enum):
    """The eight standard terminal colors."""
    
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"


@dataclass(frozen=True)
class TextStyle:
    """Style attribute for a run of text: Normal, Bold, or Colored."""
    
    bold: bool = False
    color: Optional[Color] = None
    
    def to_rich(self) -> Style:
        """Resolve to the rich style used for terminal output."""
        if self.color is None:
            return Style(bold=self.bold or None)
        return Style(color=self.color.value, bold=self.bold or None)


NORMAL = TextStyle()
BOLD = TextStyle(bold=True)


def colored(color: Color, bold: bool = False) -> TextStyle:
    """Create a colored style."""
    return TextStyle(bold=bold, color=color)
