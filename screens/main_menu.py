"""Main menu screen."""

from __future__ import annotations

from typing import Optional

from common.config import DashboardConfig
from navigation.actions import BackAction, NavAction, NavigateAction, QuitAction
from navigation.screen import Screen
from terminal.keys import Key
from terminal.styles import Color, colored
from terminal.surface import Surface, TerminalGeometry
from widgets.frame import draw_footer, draw_header, draw_too_small, fit
from widgets.menu import MenuState

__all__ = ["MENU_OPTIONS", "MainMenuScreen"]

APP_TITLE = "OhMyRunPod"
WELCOME = "Welcome to your RunPod interface!"
SEPARATOR = "──────────────────────"
HELP_TEXT = "↑↓ to navigate • Enter to select • q to quit"

# (label, screen to open); None exits
MENU_OPTIONS = [
    ("📊 Show Pod Information", "pod_info"),
    ("🔒 Setup SSH Access", "ssh_setup"),
    ("🔑 Show SSH Connection Details", "connection"),
    ("❌ Exit", None),
]

WARNING_STYLE = colored(Color.YELLOW)


class MainMenuScreen(Screen):
    """Centered menu box: title, welcome, zero-GPU notice, options, help."""

    def __init__(self, config: DashboardConfig, zero_gpu: bool = False):
        super().__init__("main")
        self.config = config
        self.zero_gpu = zero_gpu
        self.menu = MenuState([label for label, _ in MENU_OPTIONS])
        self._targets = {label: target for label, target in MENU_OPTIONS}

    def render(self, surface: Surface, geometry: TerminalGeometry) -> None:
        width = self.config.menu_width
        height = self.config.menu_height
        if geometry.cols < width or geometry.rows < height:
            draw_too_small(surface, geometry.rows, geometry.cols)
            return

        top = (geometry.rows - height) // 2
        left = (geometry.cols - width) // 2
        inner = width - 4

        surface.clear()
        row = draw_header(surface, APP_TITLE, width - 2, top, left)
        surface.write_at(row, left + 2, fit(WELCOME, inner, pad=False))

        if self.zero_gpu:
            surface.write_at(
                row + 1, left + 2,
                fit("⚠️  Running in Zero GPU mode (512MB RAM)", inner, pad=False),
                WARNING_STYLE,
            )
            surface.write_at(
                row + 2, left + 2,
                fit(f"📂 File server running on port {self.config.file_server_port}", inner, pad=False),
                WARNING_STYLE,
            )

        surface.write_at(row + 3, left + 2, SEPARATOR)
        self.menu.render(surface, row + 4, left, width=inner)
        draw_footer(surface, HELP_TEXT, width, top + height - 2, left)

    def handle_key(self, key: Key) -> Optional[NavAction]:
        if key == Key.QUIT:
            return BackAction()
        selected = self.menu.handle_key(key)
        if selected is None:
            return None
        target = self._targets[selected]
        if target is None:
            return QuitAction()
        return NavigateAction(target=target)
