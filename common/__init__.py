"""Common utilities for the OhMyRunPod dashboard."""

from common.config import DashboardConfig
from common.logging_setup import setup_logging, get_logger

__all__ = ["DashboardConfig", "setup_logging", "get_logger"]
