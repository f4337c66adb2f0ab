"""Base class for full-screen views driven by the dispatcher."""

from abc import ABC, abstractmethod
from typing import Optional

from navigation.actions import NavAction
from terminal.keys import Key
from terminal.surface import Surface, TerminalGeometry


class Screen(ABC):
    """A view that owns its widget state while it is on the stack."""

    def __init__(self, name: Optional[str] = None):
        self.name = name
        if self.name is None:
            self.name = self.__class__.__name__

    def on_enter(self, surface: Surface, geometry: TerminalGeometry) -> Optional[NavAction]:
        """Called once after the screen is pushed. May return a follow-up action."""
        return None

    @abstractmethod
    def render(self, surface: Surface, geometry: TerminalGeometry) -> None:
        """Redraw the whole screen for the given terminal size."""
        pass

    @abstractmethod
    def handle_key(self, key: Key) -> Optional[NavAction]:
        """Handle one keystroke and return an action if navigation is needed."""
        pass
