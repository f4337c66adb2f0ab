"""Single-threaded input loop over the navigation stack."""

from typing import Optional

from common.logging_setup import get_logger
from navigation.actions import (
    BackAction,
    NavAction,
    NavigateAction,
    QuitAction,
    ReplaceAction,
)
from navigation.stack import NavigationStack
from terminal.surface import Surface

logger = get_logger(__name__)


class Dispatcher:
    """
    Blocking render/read loop.

    Each iteration redraws the top screen, blocks on one keystroke and hands
    it to that screen. Rendering and input handling strictly alternate.
    Back unwinds one level; popping the last screen or a Quit ends the loop.
    """

    def __init__(self, surface: Surface, stack: NavigationStack):
        """
        Initialize the dispatcher.

        Args:
            surface: Surface screens render on and keys are read from
            stack: Navigation stack with the screens registered
        """
        self.surface = surface
        self.stack = stack
        self.quit_requested = False

    def run(self, entry: str) -> int:
        """
        Open the entry screen and loop until the program should end.

        Args:
            entry: Name of the first screen

        Returns:
            Process exit status
        """
        self.quit_requested = False
        self.apply(NavigateAction(target=entry))

        while not self.quit_requested and not self.stack.is_empty():
            self.redraw()
            key = self.surface.read_key()
            action = self.stack.top.handle_key(key)
            if action is not None:
                self.apply(action)

        self.stack.clear()
        logger.info("Input loop finished")
        return 0

    def redraw(self) -> None:
        """Render the top screen against a freshly queried geometry."""
        geometry = self.surface.query_geometry()
        self.stack.top.render(self.surface, geometry)
        self.surface.flush()

    def apply(self, action: Optional[NavAction]) -> None:
        """Apply an action and any follow-up actions from entered screens."""
        while action is not None:
            if isinstance(action, NavigateAction):
                action = self._open(action.target)
            elif isinstance(action, ReplaceAction):
                self.stack.pop()
                action = self._open(action.target)
            elif isinstance(action, BackAction):
                self.stack.pop()
                action = None
            elif isinstance(action, QuitAction):
                self.quit_requested = True
                action = None
            else:
                raise TypeError(f"Unsupported navigation action: {action!r}")

    def _open(self, name: str) -> Optional[NavAction]:
        screen = self.stack.build(name)
        self.stack.push(screen)
        return screen.on_enter(self.surface, self.surface.query_geometry())
