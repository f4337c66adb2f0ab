"""Detail screens: scrollable content and SSH setup."""

from __future__ import annotations

import time
from typing import Callable, Optional

from common.logging_setup import get_logger
from navigation.actions import BackAction, NavAction, ReplaceAction
from navigation.screen import Screen
from screens.ssh import ProvisioningError, SshProvisioner
from terminal.keys import Key
from terminal.styles import Color, colored
from terminal.surface import Surface, TerminalGeometry
from widgets.frame import fit
from widgets.viewer import ScrollableViewer

logger = get_logger(__name__)

__all__ = ["ContentScreen", "SshSetupScreen"]


class ContentScreen(Screen):
    """Titled text in a scrollable viewer; ``q`` returns to the parent."""

    def __init__(self, name: str, title: str, content: str, clamp: bool = True):
        super().__init__(name)
        self.viewer = ScrollableViewer(content, title, clamp=clamp)

    def render(self, surface: Surface, geometry: TerminalGeometry) -> None:
        self.viewer.render(surface, geometry)

    def handle_key(self, key: Key) -> Optional[NavAction]:
        if self.viewer.handle_key(key):
            return BackAction()
        return None


class SshSetupScreen(Screen):
    """
    Provisions SSH access when entered, then hands over to the
    connection details screen. On failure it shows the error instead.
    """

    def __init__(
        self,
        provisioner: SshProvisioner,
        next_screen: str = "connection",
        pause: float = 1.0,
        clamp: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__("ssh_setup")
        self.provisioner = provisioner
        self.next_screen = next_screen
        self.pause = pause
        self.clamp = clamp
        self._sleep = sleep
        self.viewer: Optional[ScrollableViewer] = None

    def on_enter(self, surface: Surface, geometry: TerminalGeometry) -> Optional[NavAction]:
        surface.clear()
        surface.write_at(0, 0, fit("Setting up SSH access...", geometry.cols, pad=False), colored(Color.BLUE))
        surface.flush()

        try:
            self.provisioner.provision()
        except ProvisioningError as exc:
            logger.error(f"SSH setup failed: {exc}")
            self.viewer = ScrollableViewer(
                f"SSH setup failed.\n\n{exc}", "SSH Setup Failed", clamp=self.clamp
            )
            return None

        surface.write_at(1, 0, fit("SSH setup completed successfully!", geometry.cols, pad=False), colored(Color.GREEN))
        surface.flush()
        self._sleep(self.pause)
        return ReplaceAction(target=self.next_screen)

    def render(self, surface: Surface, geometry: TerminalGeometry) -> None:
        if self.viewer is not None:
            self.viewer.render(surface, geometry)

    def handle_key(self, key: Key) -> Optional[NavAction]:
        if self.viewer is None or self.viewer.handle_key(key):
            return BackAction()
        return None
