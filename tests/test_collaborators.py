"""Unit tests for pod metadata, content builders and the pod-side helpers."""

from __future__ import annotations

import base64
import os
import subprocess
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from screens.content import build_connection_details, build_pod_info
from screens.file_server import start_file_server
from screens.gpu import GpuProbe, parse_driver_cuda_version, parse_nvcc_version
from screens.metadata import NOT_AVAILABLE, PodMetadata
from screens.ssh import (
    ProvisioningError,
    SshProvisioner,
    enable_password_login,
    generate_password,
    read_password,
)

NVIDIA_SMI_OUTPUT = """\
+-----------------------------------------------------------------------------+
| NVIDIA-SMI 535.104.05   Driver Version: 535.104.05   CUDA Version: 12.2     |
|-------------------------------+----------------------+----------------------+
"""

NVCC_OUTPUT = """\
nvcc: NVIDIA (R) Cuda compiler driver
Copyright (c) 2005-2023 NVIDIA Corporation
Cuda compilation tools, release 12.1, V12.1.105
Build cuda_12.1.r12.1/compiler.32688072_0
"""

SSHD_CONFIG = """\
Port 22
#PermitRootLogin prohibit-password
#PasswordAuthentication yes
UsePAM yes
"""


class RecordingRunner:
    """Stands in for subprocess.run."""

    def __init__(self, returncodes=None, raise_for=None):
        self.calls = []
        self.returncodes = returncodes or {}
        self.raise_for = raise_for or {}

    def __call__(self, command, **kwargs):
        self.calls.append((command, kwargs))
        name = command[0]
        if name in self.raise_for:
            raise self.raise_for[name]
        return subprocess.CompletedProcess(command, self.returncodes.get(name, 0), stdout="", stderr="")


# Pod metadata

def test_metadata_defaults() -> None:
    metadata = PodMetadata.from_environ({})
    assert metadata.get("pod_id") == NOT_AVAILABLE
    assert metadata.get("gpu_count", "0") == "0"
    assert not metadata.is_zero_gpu
    assert not metadata.has_gpus


def test_metadata_empty_values_are_unset() -> None:
    metadata = PodMetadata.from_environ({"RUNPOD_POD_ID": "", "RUNPOD_GPU_COUNT": "0"})
    assert metadata.pod_id is None
    assert metadata.is_zero_gpu
    assert not metadata.has_gpus


def test_metadata_unknown_attribute() -> None:
    with pytest.raises(KeyError):
        PodMetadata().get("hostname")


# Content builders

def test_pod_info_ram_suffix() -> None:
    _, text = build_pod_info(PodMetadata(mem_gb="32"))
    assert "RAM:         32 GB" in text.splitlines()
    _, text = build_pod_info(PodMetadata())
    assert "RAM:         Not Available" in text.splitlines()


def test_pod_info_gpu_section_separated() -> None:
    """The GPU section starts after a blank line."""

    class Probe:
        def max_cuda_version(self):
            return "12.2"

        def toolkit_cuda_version(self):
            return None

    title, text = build_pod_info(PodMetadata(gpu_count="1"), Probe())
    lines = text.splitlines()
    assert title == "Pod Information"
    index = lines.index("🎮 GPU Information")
    assert lines[index - 1] == ""
    assert "Max CUDA Version: 12.2" in lines
    assert not any(line.startswith("Pod CUDA Version") for line in lines)


def test_connection_details_password_line() -> None:
    metadata = PodMetadata(public_ip="198.51.100.4", tcp_port_22="10022")
    _, without = build_connection_details(metadata)
    _, with_password = build_connection_details(metadata, "hunter2")

    assert "Password:" not in without
    assert "Password: hunter2" in with_password.splitlines()
    assert with_password.splitlines()[-1] == "ssh root@198.51.100.4 -p 10022"


# GPU probing

def test_parse_driver_cuda_version() -> None:
    assert parse_driver_cuda_version(NVIDIA_SMI_OUTPUT) == "12.2"
    assert parse_driver_cuda_version("no gpu here") is None


def test_parse_nvcc_version() -> None:
    assert parse_nvcc_version(NVCC_OUTPUT) == "12.1"
    assert parse_nvcc_version("") is None


def test_gpu_probe_missing_tools() -> None:
    runner = RecordingRunner()
    probe = GpuProbe(runner=runner, which=lambda name: None)
    assert probe.max_cuda_version() is None
    assert probe.toolkit_cuda_version() is None
    assert runner.calls == []


def test_gpu_probe_reads_output() -> None:
    def runner(command, **kwargs):
        output = NVIDIA_SMI_OUTPUT if command[0] == "nvidia-smi" else NVCC_OUTPUT
        return subprocess.CompletedProcess(command, 0, stdout=output, stderr="")

    probe = GpuProbe(runner=runner, which=lambda name: f"/usr/bin/{name}")
    assert probe.max_cuda_version() == "12.2"
    assert probe.toolkit_cuda_version() == "12.1"


def test_gpu_probe_tool_failure() -> None:
    runner = RecordingRunner(raise_for={"nvidia-smi": subprocess.CalledProcessError(9, ["nvidia-smi"])})
    probe = GpuProbe(runner=runner, which=lambda name: f"/usr/bin/{name}")
    assert probe.max_cuda_version() is None


# SSH provisioning

def test_generate_password() -> None:
    password = generate_password()
    assert len(password) == 16
    assert len(base64.b64decode(password)) == 12
    assert generate_password() != password


def test_enable_password_login() -> None:
    updated = enable_password_login(SSHD_CONFIG)
    assert "PermitRootLogin yes" in updated.splitlines()
    assert "PasswordAuthentication yes" in updated.splitlines()
    assert "#PermitRootLogin" not in updated
    assert "UsePAM yes" in updated


def test_read_password(tmp_path: Path) -> None:
    path = tmp_path / "root_password.txt"
    assert read_password(path) is None
    path.write_text("abc\n")
    assert read_password(path) == "abc"


@pytest.fixture
def sshd_config(tmp_path: Path) -> Path:
    path = tmp_path / "sshd_config"
    path.write_text(SSHD_CONFIG)
    return path


def test_provision_runs_every_step(tmp_path: Path, sshd_config: Path) -> None:
    runner = RecordingRunner()
    password_file = tmp_path / "workspace" / "root_password.txt"
    provisioner = SshProvisioner(
        password_file, sshd_config, runner=runner, password_factory=lambda: "pw123",
    )

    assert provisioner.provision() == "pw123"

    assert password_file.read_text() == "pw123\n"
    assert password_file.stat().st_mode & 0o777 == 0o600
    assert "PermitRootLogin yes" in sshd_config.read_text()
    commands = [command for command, _ in runner.calls]
    assert commands == [["chpasswd"], ["service", "ssh", "start"]]
    assert runner.calls[0][1]["input"] == "root:pw123\n"


def test_provision_chpasswd_failure(tmp_path: Path, sshd_config: Path) -> None:
    error = subprocess.CalledProcessError(1, ["chpasswd"], stderr="Authentication token manipulation error")
    runner = RecordingRunner(raise_for={"chpasswd": error})
    provisioner = SshProvisioner(tmp_path / "pw.txt", sshd_config, runner=runner)

    with pytest.raises(ProvisioningError, match="token manipulation"):
        provisioner.provision()
    # sshd_config is left alone once a step fails
    assert sshd_config.read_text() == SSHD_CONFIG


def test_provision_service_failure(tmp_path: Path, sshd_config: Path) -> None:
    runner = RecordingRunner(returncodes={"service": 1})
    provisioner = SshProvisioner(tmp_path / "pw.txt", sshd_config, runner=runner)

    with pytest.raises(ProvisioningError, match="exited with code 1"):
        provisioner.provision()


def test_provision_missing_sshd_config(tmp_path: Path) -> None:
    provisioner = SshProvisioner(tmp_path / "pw.txt", tmp_path / "missing", runner=RecordingRunner())
    with pytest.raises(ProvisioningError):
        provisioner.provision()


# File server

def test_file_server_started_detached(tmp_path: Path) -> None:
    runner = RecordingRunner()
    launched = []

    def popen(command, **kwargs):
        launched.append((command, kwargs))
        return "process"

    assert start_file_server(str(tmp_path), 9000, runner=runner, popen=popen) == "process"

    assert [command for command, _ in runner.calls] == [
        ["pkill", "jupyter-lab"],
        ["pkill", "-f", "http.server 9000"],
    ]
    command, kwargs = launched[0]
    assert command == [sys.executable, "-m", "http.server", "9000"]
    assert kwargs["cwd"] == str(tmp_path)
    assert kwargs["start_new_session"] is True


def test_file_server_launch_failure(tmp_path: Path) -> None:
    runner = RecordingRunner(raise_for={"pkill": FileNotFoundError("pkill")})

    def popen(command, **kwargs):
        raise OSError("no python")

    assert start_file_server(str(tmp_path), runner=runner, popen=popen) is None
