"""Screen navigation: actions, the screen stack and the input loop."""

from navigation.actions import BackAction, NavAction, NavigateAction, QuitAction, ReplaceAction
from navigation.dispatcher import Dispatcher
from navigation.screen import Screen
from navigation.stack import NavigationStack

__all__ = [
    "NavAction",
    "NavigateAction",
    "ReplaceAction",
    "BackAction",
    "QuitAction",
    "Screen",
    "NavigationStack",
    "Dispatcher",
]
