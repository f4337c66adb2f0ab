"""
Navigation actions returned by screens.

Screens never manipulate the navigation stack directly; they return one of
these and the dispatcher applies it.
"""

from dataclasses import dataclass


@dataclass
class NavAction:
    """Base class for all navigation actions."""
    pass


@dataclass
class NavigateAction(NavAction):
    """Open another screen on top of the current one."""
    target: str  # Registered screen name


@dataclass
class ReplaceAction(NavAction):
    """Close the current screen and open another in its place."""
    target: str


@dataclass
class BackAction(NavAction):
    """Close the current screen and return to its parent."""
    pass


@dataclass
class QuitAction(NavAction):
    """Leave the application from any depth."""
    pass
