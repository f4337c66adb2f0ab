"""Frames, menus and scrollable viewers drawn on a terminal surface."""

from widgets.frame import Frame, draw_footer, draw_frame, draw_header, fit
from widgets.menu import MenuState
from widgets.viewer import ScrollableViewer, ScrollState

__all__ = [
    "Frame",
    "draw_frame",
    "draw_header",
    "draw_footer",
    "fit",
    "MenuState",
    "ScrollState",
    "ScrollableViewer",
]
