"""SSH access provisioning for the pod's root account."""

from __future__ import annotations

import base64
import os
import secrets
import subprocess
from pathlib import Path
from typing import Callable

from common.logging_setup import get_logger

logger = get_logger(__name__)

__all__ = [
    "ProvisioningError",
    "SshProvisioner",
    "enable_password_login",
    "generate_password",
    "read_password",
]

# sshd_config edits: commented default -> enabled setting
SSHD_REPLACEMENTS = (
    ("#PermitRootLogin prohibit-password", "PermitRootLogin yes"),
    ("#PasswordAuthentication yes", "PasswordAuthentication yes"),
)


class ProvisioningError(Exception):
    """Raised when a provisioning step fails."""
    pass


def generate_password(nbytes: int = 12) -> str:
    """Random password: base64 of ``nbytes`` random bytes."""
    return base64.b64encode(secrets.token_bytes(nbytes)).decode("ascii")


def enable_password_login(config_text: str) -> str:
    """Return sshd_config text with root and password logins enabled."""
    for old, new in SSHD_REPLACEMENTS:
        config_text = config_text.replace(old, new)
    return config_text


def read_password(path: str | os.PathLike) -> str | None:
    """Stored root password, or None when SSH has not been set up."""
    try:
        return Path(path).read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.warning(f"Could not read password file {path}: {exc}")
        return None


class SshProvisioner:
    """Sets a fresh root password and starts the SSH daemon."""

    def __init__(
        self,
        password_file: str | os.PathLike,
        sshd_config_path: str | os.PathLike = "/etc/ssh/sshd_config",
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        password_factory: Callable[[], str] = generate_password,
    ) -> None:
        self.password_file = Path(password_file)
        self.sshd_config_path = Path(sshd_config_path)
        self._runner = runner
        self._password_factory = password_factory

    def provision(self) -> str:
        """
        Run every provisioning step.

        Returns:
            The new root password

        Raises:
            ProvisioningError: If any step fails
        """
        password = self._password_factory()
        self._store_password(password)
        self._set_root_password(password)
        self._enable_password_login()
        self._start_service()
        logger.info("SSH access provisioned")
        return password

    def _store_password(self, password: str) -> None:
        try:
            self.password_file.parent.mkdir(parents=True, exist_ok=True)
            self.password_file.write_text(f"{password}\n", encoding="utf-8")
            os.chmod(self.password_file, 0o600)
        except OSError as exc:
            raise ProvisioningError(f"Could not write {self.password_file}: {exc}") from exc

    def _set_root_password(self, password: str) -> None:
        try:
            self._runner(
                ["chpasswd"],
                input=f"root:{password}\n",
                text=True,
                capture_output=True,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise ProvisioningError(f"chpasswd failed with code {exc.returncode}: {stderr}") from exc
        except OSError as exc:
            raise ProvisioningError(f"Could not run chpasswd: {exc}") from exc

    def _enable_password_login(self) -> None:
        try:
            original = self.sshd_config_path.read_text(encoding="utf-8")
            updated = enable_password_login(original)
            if updated != original:
                self.sshd_config_path.write_text(updated, encoding="utf-8")
        except OSError as exc:
            raise ProvisioningError(f"Could not update {self.sshd_config_path}: {exc}") from exc

    def _start_service(self) -> None:
        try:
            result = self._runner(
                ["service", "ssh", "start"],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            raise ProvisioningError(f"Could not start the ssh service: {exc}") from exc
        if result.returncode != 0:
            raise ProvisioningError(f"'service ssh start' exited with code {result.returncode}")
