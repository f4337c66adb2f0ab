"""Dashboard screens and the pod-side collaborators they use."""

from screens.app import ENTRY_SCREEN, build_navigation
from screens.content import build_connection_details, build_pod_info
from screens.detail import ContentScreen, SshSetupScreen
from screens.main_menu import MainMenuScreen
from screens.metadata import NOT_AVAILABLE, PodMetadata

__all__ = [
    "ENTRY_SCREEN",
    "build_navigation",
    "build_pod_info",
    "build_connection_details",
    "ContentScreen",
    "SshSetupScreen",
    "MainMenuScreen",
    "NOT_AVAILABLE",
    "PodMetadata",
]
