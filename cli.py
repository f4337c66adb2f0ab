"""Interactive terminal dashboard for a RunPod pod."""

import sys
from typing import Callable, Mapping, Optional

from common.config import DashboardConfig
from common.logging_setup import get_logger, setup_logging
from navigation.dispatcher import Dispatcher
from navigation.stack import NavigationStack
from screens.app import ENTRY_SCREEN, build_navigation
from screens.file_server import start_file_server
from screens.metadata import PodMetadata
from terminal.errors import NoTerminal
from terminal.surface import ConsoleSurface, Surface

logger = get_logger(__name__)


def run(
    config: DashboardConfig,
    surface: Optional[Surface] = None,
    environ: Optional[Mapping[str, str]] = None,
    navigation: Optional[NavigationStack] = None,
    file_server: Callable = start_file_server,
) -> int:
    """
    Run the dashboard until the operator quits.

    Args:
        config: Dashboard configuration
        surface: Terminal surface (the real terminal by default)
        environ: Environment holding the pod metadata
        navigation: Pre-built navigation stack (built from ``config`` by default)
        file_server: Starts the zero-GPU file server

    Returns:
        Process exit status
    """
    if surface is None:
        surface = ConsoleSurface(escape_timeout=config.escape_timeout)

    try:
        geometry = surface.query_geometry()
    except NoTerminal as e:
        logger.error(f"Cannot start dashboard: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.debug(f"Terminal size {geometry.cols}x{geometry.rows}")

    if PodMetadata.from_environ(environ).is_zero_gpu:
        file_server(config.workspace_dir, config.file_server_port)

    if navigation is None:
        navigation = build_navigation(config, environ=environ)
    dispatcher = Dispatcher(surface, navigation)

    try:
        with surface.fullscreen():
            return dispatcher.run(ENTRY_SCREEN)
    except (KeyboardInterrupt, EOFError):
        logger.info("Dashboard interrupted")
        return 0


def main() -> None:
    """Main entry point. Takes no arguments."""
    try:
        config = DashboardConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(config.log_level, config.log_file)
    sys.exit(run(config))


if __name__ == "__main__":
    main()
