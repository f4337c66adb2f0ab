"""Text content for the detail screens.

Each builder returns ``(title, text)`` where ``text`` is newline-delimited;
the scrollable viewer does all of the layout.
"""

from __future__ import annotations

from screens.gpu import GpuProbe
from screens.metadata import NOT_AVAILABLE, PodMetadata

__all__ = ["POD_INFO_TITLE", "CONNECTION_TITLE", "build_pod_info", "build_connection_details"]

POD_INFO_TITLE = "Pod Information"
CONNECTION_TITLE = "SSH Connection Details"
SECTION_RULE = "──────────────────────"


def build_pod_info(metadata: PodMetadata, gpu: GpuProbe | None = None) -> tuple[str, str]:
    """Describe the pod's identity and compute resources."""
    mem = metadata.get("mem_gb")
    if mem != NOT_AVAILABLE:
        mem = f"{mem} GB"

    lines = [
        "📦 Basic Pod Information",
        SECTION_RULE,
        f"Pod ID:      {metadata.get('pod_id')}",
        f"RAM:         {mem}",
        f"Public IP:   {metadata.get('public_ip')}",
        f"Datacenter:  {metadata.get('dc_id')}",
        "",
        "💻 Compute Resources",
        SECTION_RULE,
        f"CPU Cores:   {metadata.get('cpu_count')}",
        f"GPU Count:   {metadata.get('gpu_count', '0')}",
    ]

    if metadata.has_gpus:
        lines += ["", "🎮 GPU Information", SECTION_RULE]
        if gpu is not None:
            max_cuda = gpu.max_cuda_version()
            if max_cuda:
                lines.append(f"Max CUDA Version: {max_cuda}")
            pod_cuda = gpu.toolkit_cuda_version()
            if pod_cuda:
                lines.append(f"Pod CUDA Version: {pod_cuda}")

    return POD_INFO_TITLE, "\n".join(lines)


def build_connection_details(metadata: PodMetadata, password: str | None = None) -> tuple[str, str]:
    """Describe how to reach the pod over SSH."""
    host = metadata.get("public_ip")
    port = metadata.get("tcp_port_22")

    lines = [
        "🔐 SSH Connection Details",
        SECTION_RULE,
        f"Host:     {host}",
        f"Port:     {port}",
        "Username: root",
    ]
    if password is not None:
        lines.append(f"Password: {password}")
    lines += [
        "",
        "SSH Command:",
        f"ssh root@{host} -p {port}",
    ]
    return CONNECTION_TITLE, "\n".join(lines)
