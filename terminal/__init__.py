"""Terminal surface, key decoding and text styles."""

from terminal.errors import InputDecodeAmbiguous, NoTerminal, RenderOverflow, TerminalError
from terminal.keys import Key, decode_key
from terminal.styles import BOLD, NORMAL, Color, TextStyle, colored
from terminal.surface import ConsoleSurface, MemorySurface, Surface, TerminalGeometry

__all__ = [
    "TerminalError",
    "NoTerminal",
    "RenderOverflow",
    "InputDecodeAmbiguous",
    "Key",
    "decode_key",
    "TextStyle",
    "Color",
    "NORMAL",
    "BOLD",
    "colored",
    "Surface",
    "ConsoleSurface",
    "MemorySurface",
    "TerminalGeometry",
]
