"""Screen registry for the dashboard."""

from __future__ import annotations

import os
import time
from typing import Callable, Mapping

from common.config import DashboardConfig
from navigation.stack import NavigationStack
from screens.content import build_connection_details, build_pod_info
from screens.detail import ContentScreen, SshSetupScreen
from screens.gpu import GpuProbe
from screens.main_menu import MainMenuScreen
from screens.metadata import PodMetadata
from screens.ssh import SshProvisioner, read_password

__all__ = ["ENTRY_SCREEN", "build_navigation"]

ENTRY_SCREEN = "main"


def build_navigation(
    config: DashboardConfig,
    environ: Mapping[str, str] | None = None,
    provisioner: SshProvisioner | None = None,
    gpu: GpuProbe | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> NavigationStack:
    """
    Register every dashboard screen on a new navigation stack.

    Pod metadata is snapshotted each time a screen is opened, so a screen
    shows the environment as it was when the operator entered it.

    Args:
        config: Dashboard configuration
        environ: Environment to read pod metadata from (``os.environ`` by default)
        provisioner: SSH provisioner (built from ``config`` by default)
        gpu: GPU probe (a real one by default)
        sleep: Used for the pause after a successful SSH setup
    """
    if environ is None:
        environ = os.environ
    if provisioner is None:
        provisioner = SshProvisioner(config.password_file, config.sshd_config_path)
    if gpu is None:
        gpu = GpuProbe()

    def snapshot() -> PodMetadata:
        return PodMetadata.from_environ(environ)

    def main_menu() -> MainMenuScreen:
        return MainMenuScreen(config, zero_gpu=snapshot().is_zero_gpu)

    def pod_info() -> ContentScreen:
        title, content = build_pod_info(snapshot(), gpu)
        return ContentScreen("pod_info", title, content, clamp=config.clamp_scroll)

    def connection() -> ContentScreen:
        title, content = build_connection_details(snapshot(), read_password(config.password_file))
        return ContentScreen("connection", title, content, clamp=config.clamp_scroll)

    def ssh_setup() -> SshSetupScreen:
        return SshSetupScreen(
            provisioner,
            next_screen="connection",
            pause=config.setup_pause,
            clamp=config.clamp_scroll,
            sleep=sleep,
        )

    stack = NavigationStack()
    stack.register(ENTRY_SCREEN, main_menu)
    stack.register("pod_info", pod_info)
    stack.register("connection", connection)
    stack.register("ssh_setup", ssh_setup)
    return stack
