"""Explicit navigation stack of screens."""

from typing import Callable, Dict, List, Optional

from common.logging_setup import get_logger
from navigation.screen import Screen

logger = get_logger(__name__)

ScreenFactory = Callable[[], Screen]


class NavigationStack:
    """
    Stack of active screens plus a registry of screen factories.

    The screen on top receives keys. A screen is built fresh each time it is
    opened, so its state lives exactly as long as it stays on the stack.
    """

    def __init__(self):
        """Initialize an empty stack."""
        self._screens: List[Screen] = []
        self._registry: Dict[str, ScreenFactory] = {}

    def register(self, name: str, factory: ScreenFactory) -> None:
        """Register a factory for a named screen."""
        self._registry[name] = factory

    def build(self, name: str) -> Screen:
        """Build a new instance of a registered screen."""
        factory = self._registry.get(name)
        if factory is None:
            raise ValueError(f"Unknown screen: {name}")
        return factory()

    def push(self, screen: Screen) -> None:
        self._screens.append(screen)
        logger.debug(f"Opened screen {screen.name} (depth {len(self._screens)})")

    def pop(self) -> Optional[Screen]:
        """Remove the top screen. Returns None if the stack was already empty."""
        if not self._screens:
            return None
        screen = self._screens.pop()
        logger.debug(f"Closed screen {screen.name} (depth {len(self._screens)})")
        return screen

    def clear(self) -> None:
        self._screens.clear()

    @property
    def top(self) -> Optional[Screen]:
        return self._screens[-1] if self._screens else None

    @property
    def depth(self) -> int:
        return len(self._screens)

    def is_empty(self) -> bool:
        return not self._screens

    def names(self) -> List[str]:
        """Screen names from bottom to top."""
        return [screen.name for screen in self._screens]
