"""Unit tests for the dashboard screens."""

from __future__ import annotations

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.config import DashboardConfig
from navigation import BackAction, Dispatcher, NavigateAction, QuitAction, ReplaceAction
from screens import ENTRY_SCREEN, ContentScreen, MainMenuScreen, SshSetupScreen, build_navigation
from screens.main_menu import WARNING_STYLE
from screens.ssh import ProvisioningError
from terminal.keys import Key
from terminal.surface import MemorySurface


class RecordingSurface(MemorySurface):
    """Memory surface that keeps the picture shown before each keystroke."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.frames = []

    def read_key(self):
        self.frames.append("\n".join(self.lines()))
        return super().read_key()


class FakeProvisioner:
    def __init__(self, password_file=None, password="s3cret", error=None):
        self.password_file = password_file
        self.password = password
        self.error = error
        self.calls = 0

    def provision(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        if self.password_file is not None:
            with open(self.password_file, "w") as f:
                f.write(f"{self.password}\n")
        return self.password


class FakeGpu:
    def max_cuda_version(self):
        return "12.4"

    def toolkit_cuda_version(self):
        return "12.1"


@pytest.fixture
def config(tmp_path) -> DashboardConfig:
    return DashboardConfig(workspace_dir=str(tmp_path), setup_pause=0.25)


def test_main_menu_layout(config) -> None:
    """The menu box is centered; header, welcome, items and footer stack inside it."""
    surface = MemorySurface(rows=24, cols=80)
    MainMenuScreen(config).render(surface, surface.geometry)

    # 60x12 box at row 6, column 10
    row, _ = surface.find("┤ OhMyRunPod ├")
    assert row == 6
    assert surface.row_text(6)[10] == "╭"
    assert surface.row_text(6)[69] == "╮"
    assert surface.find("Welcome to your RunPod interface!") == (7, 12)
    assert surface.find("Show Pod Information")[0] == 11
    assert "▶" in surface.row_text(11)
    assert surface.find("Exit")[0] == 14
    assert surface.row_text(16)[10] == "╰"
    assert surface.find("↑↓ to navigate")[0] == 17
    assert surface.find("Zero GPU") is None


def test_main_menu_zero_gpu_notice(config) -> None:
    surface = MemorySurface(rows=24, cols=80)
    MainMenuScreen(config, zero_gpu=True).render(surface, surface.geometry)

    row, col = surface.find("Running in Zero GPU mode")
    assert row == 8
    assert surface.style_at(row, col) == WARNING_STYLE
    assert surface.find("File server running on port 8888")[0] == 9


def test_main_menu_too_small(config) -> None:
    surface = MemorySurface(rows=10, cols=40)
    MainMenuScreen(config).render(surface, surface.geometry)
    assert surface.find("Terminal too small!") is not None
    assert surface.find("OhMyRunPod") is None


def test_main_menu_actions(config) -> None:
    screen = MainMenuScreen(config)
    assert screen.handle_key(Key.DOWN) is None
    assert screen.handle_key(Key.ENTER) == NavigateAction("ssh_setup")
    assert screen.handle_key(Key.DOWN) is None
    assert screen.handle_key(Key.ENTER) == NavigateAction("connection")
    assert screen.handle_key(Key.DOWN) is None
    assert screen.handle_key(Key.ENTER) == QuitAction()
    assert screen.handle_key(Key.QUIT) == BackAction()


def test_content_screen_back_on_q() -> None:
    screen = ContentScreen("notes", "Notes", "a\nb\nc")
    assert screen.handle_key(Key.DOWN) is None
    assert screen.handle_key(Key.QUIT) == BackAction()


def test_ssh_setup_success(config) -> None:
    sleeps = []
    provisioner = FakeProvisioner()
    screen = SshSetupScreen(provisioner, pause=config.setup_pause, sleep=sleeps.append)
    surface = MemorySurface()

    action = screen.on_enter(surface, surface.geometry)

    assert action == ReplaceAction("connection")
    assert provisioner.calls == 1
    assert sleeps == [0.25]
    assert surface.find("Setting up SSH access...") == (0, 0)
    assert surface.find("SSH setup completed successfully!") == (1, 0)


def test_ssh_setup_failure_shows_error() -> None:
    """A failed step is reported in a viewer instead of crashing the dashboard."""
    provisioner = FakeProvisioner(error=ProvisioningError("chpasswd failed with code 1"))
    screen = SshSetupScreen(provisioner, sleep=lambda seconds: None)
    surface = MemorySurface()

    assert screen.on_enter(surface, surface.geometry) is None
    screen.render(surface, surface.geometry)

    assert surface.find("SSH Setup Failed") is not None
    assert surface.find("chpasswd failed with code 1") is not None
    assert surface.find("successfully") is None
    assert screen.handle_key(Key.DOWN) is None
    assert screen.handle_key(Key.QUIT) == BackAction()


def test_pod_info_without_metadata(config) -> None:
    surface = RecordingSurface(keys=[Key.ENTER, Key.QUIT, Key.QUIT])
    nav = build_navigation(config, environ={}, provisioner=FakeProvisioner(), gpu=FakeGpu())

    assert Dispatcher(surface, nav).run(ENTRY_SCREEN) == 0

    pod_info = surface.frames[1]
    assert "Pod Information" in pod_info
    assert "Pod ID:      Not Available" in pod_info
    assert "RAM:         Not Available" in pod_info
    assert "GPU Count:   0" in pod_info
    assert "GPU Information" not in pod_info
    assert "OhMyRunPod" in surface.frames[2]


def test_pod_info_with_gpus(config) -> None:
    environ = {"RUNPOD_GPU_COUNT": "2", "RUNPOD_MEM_GB": "64", "RUNPOD_POD_ID": "abc123"}
    surface = RecordingSurface(keys=[Key.ENTER, Key.QUIT, Key.QUIT])
    nav = build_navigation(config, environ=environ, provisioner=FakeProvisioner(), gpu=FakeGpu())

    Dispatcher(surface, nav).run(ENTRY_SCREEN)

    pod_info = surface.frames[1]
    assert "Pod ID:      abc123" in pod_info
    assert "RAM:         64 GB" in pod_info
    assert "Max CUDA Version: 12.4" in pod_info
    assert "Pod CUDA Version: 12.1" in pod_info


def test_metadata_read_when_screen_opens(config) -> None:
    environ = {"RUNPOD_POD_ID": "first"}

    class ChangingSurface(RecordingSurface):
        def read_key(self):
            key = super().read_key()
            if key == Key.QUIT:
                environ["RUNPOD_POD_ID"] = "second"
            return key

    surface = ChangingSurface(keys=[Key.ENTER, Key.QUIT, Key.ENTER, Key.QUIT, Key.QUIT])
    nav = build_navigation(config, environ=environ, provisioner=FakeProvisioner(), gpu=FakeGpu())
    Dispatcher(surface, nav).run(ENTRY_SCREEN)

    assert "Pod ID:      first" in surface.frames[1]
    assert "Pod ID:      second" in surface.frames[3]


def test_ssh_setup_flows_into_connection_details(config) -> None:
    """Setup replaces itself with the details screen; q then returns to the menu."""
    environ = {"RUNPOD_PUBLIC_IP": "203.0.113.7", "RUNPOD_TCP_PORT_22": "40022"}
    provisioner = FakeProvisioner(password_file=config.password_file)
    surface = RecordingSurface(keys=[Key.DOWN, Key.ENTER, Key.QUIT, Key.QUIT])
    nav = build_navigation(
        config, environ=environ, provisioner=provisioner, gpu=FakeGpu(), sleep=lambda s: None,
    )

    assert Dispatcher(surface, nav).run(ENTRY_SCREEN) == 0

    details = surface.frames[2]
    assert "SSH Connection Details" in details
    assert "Host:     203.0.113.7" in details
    assert "Password: s3cret" in details
    assert "ssh root@203.0.113.7 -p 40022" in details
    assert "OhMyRunPod" in surface.frames[3]
    assert provisioner.calls == 1


def test_connection_details_before_setup(config) -> None:
    surface = RecordingSurface(keys=[Key.DOWN, Key.DOWN, Key.ENTER, Key.QUIT, Key.QUIT])
    nav = build_navigation(config, environ={}, provisioner=FakeProvisioner(), gpu=FakeGpu())
    Dispatcher(surface, nav).run(ENTRY_SCREEN)

    details = surface.frames[3]
    assert "Username: root" in details
    assert "Password:" not in details
    assert "ssh root@Not Available -p Not Available" in details
