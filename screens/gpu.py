"""CUDA version probing through nvidia-smi and nvcc."""

from __future__ import annotations

import re
import shutil
import subprocess
from typing import Callable

from common.logging_setup import get_logger

logger = get_logger(__name__)

__all__ = ["GpuProbe", "parse_driver_cuda_version", "parse_nvcc_version"]

_DRIVER_CUDA_RE = re.compile(r"CUDA Version:\s*([0-9][0-9.]*)")
_NVCC_RELEASE_RE = re.compile(r"release\s+([0-9][0-9.]*)")


def parse_driver_cuda_version(output: str) -> str | None:
    """Extract the highest CUDA version the driver supports from nvidia-smi output."""
    match = _DRIVER_CUDA_RE.search(output)
    return match.group(1) if match else None


def parse_nvcc_version(output: str) -> str | None:
    """Extract the toolkit release from ``nvcc --version`` output."""
    match = _NVCC_RELEASE_RE.search(output)
    return match.group(1).rstrip(".") if match else None


class GpuProbe:
    """Runs the NVIDIA tools installed on the pod, if any."""

    def __init__(
        self,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        which: Callable[[str], str | None] = shutil.which,
        timeout: float = 10.0,
    ) -> None:
        self._runner = runner
        self._which = which
        self.timeout = timeout

    def max_cuda_version(self) -> str | None:
        output = self._capture(["nvidia-smi"])
        return parse_driver_cuda_version(output) if output else None

    def toolkit_cuda_version(self) -> str | None:
        output = self._capture(["nvcc", "--version"])
        return parse_nvcc_version(output) if output else None

    def _capture(self, command: list[str]) -> str | None:
        if self._which(command[0]) is None:
            return None
        try:
            result = self._runner(
                command,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except (subprocess.SubprocessError, OSError) as exc:
            logger.debug(f"{command[0]} failed: {exc}")
            return None
        return result.stdout
