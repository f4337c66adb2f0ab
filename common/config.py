"""Configuration management for the OhMyRunPod dashboard."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class DashboardConfig:
    """Configuration settings for the pod dashboard."""
    
    # Main menu box, centered in the terminal
    menu_width: int = 60
    menu_height: int = 12
    
    # Pod filesystem layout
    workspace_dir: str = "/workspace"
    password_file: Optional[str] = None  # defaults to <workspace_dir>/root_password.txt
    sshd_config_path: str = "/etc/ssh/sshd_config"
    
    # Zero-GPU mode file server
    file_server_port: int = 8888
    
    # Viewer behaviour
    clamp_scroll: bool = True  # False keeps the unbounded scroll-down
    escape_timeout: float = 0.05  # seconds to wait for the rest of an escape sequence
    setup_pause: float = 1.0  # seconds the SSH success message stays up
    
    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    
    def __post_init__(self) -> None:
        if self.password_file is None:
            self.password_file = os.path.join(self.workspace_dir, "root_password.txt")
    
    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DashboardConfig":
        """
        Build a configuration from ``OHMYRUNPOD_*`` environment variables.
        
        Args:
            environ: Mapping to read from (defaults to ``os.environ``)
            
        Returns:
            Configuration with any overrides applied
        """
        if environ is None:
            environ = os.environ
        
        kwargs = {}
        if environ.get("OHMYRUNPOD_WORKSPACE"):
            kwargs["workspace_dir"] = environ["OHMYRUNPOD_WORKSPACE"]
        if environ.get("OHMYRUNPOD_SSHD_CONFIG"):
            kwargs["sshd_config_path"] = environ["OHMYRUNPOD_SSHD_CONFIG"]
        if environ.get("OHMYRUNPOD_FILE_SERVER_PORT"):
            try:
                kwargs["file_server_port"] = int(environ["OHMYRUNPOD_FILE_SERVER_PORT"])
            except ValueError:
                raise ValueError(
                    f"OHMYRUNPOD_FILE_SERVER_PORT must be an integer, "
                    f"got {environ['OHMYRUNPOD_FILE_SERVER_PORT']!r}"
                ) from None
        if "OHMYRUNPOD_CLAMP_SCROLL" in environ:
            kwargs["clamp_scroll"] = (
                environ["OHMYRUNPOD_CLAMP_SCROLL"].strip().lower() not in _FALSE_VALUES
            )
        if environ.get("OHMYRUNPOD_LOG_LEVEL"):
            kwargs["log_level"] = environ["OHMYRUNPOD_LOG_LEVEL"]
        if environ.get("OHMYRUNPOD_LOG_FILE"):
            kwargs["log_file"] = environ["OHMYRUNPOD_LOG_FILE"]
        
        return cls(**kwargs)


