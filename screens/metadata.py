"""Read-only snapshot of the pod's RUNPOD_* environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping

__all__ = ["NOT_AVAILABLE", "ENV_VARS", "PodMetadata"]

NOT_AVAILABLE = "Not Available"

# Field name -> environment variable
ENV_VARS = {
    "pod_id": "RUNPOD_POD_ID",
    "mem_gb": "RUNPOD_MEM_GB",
    "public_ip": "RUNPOD_PUBLIC_IP",
    "dc_id": "RUNPOD_DC_ID",
    "cpu_count": "RUNPOD_CPU_COUNT",
    "gpu_count": "RUNPOD_GPU_COUNT",
    "tcp_port_22": "RUNPOD_TCP_PORT_22",
}


@dataclass(frozen=True)
class PodMetadata:
    """Instance attributes captured once when a screen is entered.

    Attributes:
        pod_id: Pod identifier.
        mem_gb: RAM in GB.
        public_ip: Public IP address.
        dc_id: Datacenter identifier.
        cpu_count: Number of CPU cores.
        gpu_count: Number of GPUs. Unset means unknown, not zero.
        tcp_port_22: Public port mapped to the pod's SSH port.
    """

    pod_id: str | None = None
    mem_gb: str | None = None
    public_ip: str | None = None
    dc_id: str | None = None
    cpu_count: str | None = None
    gpu_count: str | None = None
    tcp_port_22: str | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> PodMetadata:
        """Snapshot the environment. Empty variables count as unset."""
        if environ is None:
            environ = os.environ
        values = {name: environ.get(var) or None for name, var in ENV_VARS.items()}
        return cls(**values)

    def get(self, name: str, default: str = NOT_AVAILABLE) -> str:
        """Look up an attribute, substituting ``default`` when it is missing."""
        if name not in {f.name for f in fields(self)}:
            raise KeyError(name)
        value = getattr(self, name)
        return value if value is not None else default

    @property
    def is_zero_gpu(self) -> bool:
        """True only when the pod explicitly reports zero GPUs."""
        return self.gpu_count == "0"

    @property
    def has_gpus(self) -> bool:
        return self.get("gpu_count", "0") != "0"
