"""Static file server for pods running without a GPU."""

from __future__ import annotations

import subprocess
import sys
from typing import Callable

from common.logging_setup import get_logger

logger = get_logger(__name__)

__all__ = ["start_file_server"]


def start_file_server(
    directory: str,
    port: int = 8888,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    popen: Callable[..., subprocess.Popen] = subprocess.Popen,
) -> subprocess.Popen | None:
    """
    Serve ``directory`` over HTTP in a detached process.

    Jupyter and any earlier server on the same port are stopped first. The
    new server is not tracked: it outlives the dashboard.

    Args:
        directory: Directory to serve
        port: TCP port to listen on
        runner: Used for the ``pkill`` calls
        popen: Used to start the server

    Returns:
        The server process, or None if it could not be started
    """
    for command in (["pkill", "jupyter-lab"], ["pkill", "-f", f"http.server {port}"]):
        try:
            runner(command, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, check=False)
        except OSError as exc:
            logger.debug(f"{' '.join(command)} failed: {exc}")

    try:
        process = popen(
            [sys.executable, "-m", "http.server", str(port)],
            cwd=directory,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        logger.warning(f"Could not start file server on port {port}: {exc}")
        return None

    logger.info(f"File server for {directory} started on port {port}")
    return process
