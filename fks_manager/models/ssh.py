"""
SSH Configuration Models

Dataclass models for SSH operations.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fks_manager.constants import DEFAULT_SSH_USER


@dataclass(frozen=True)
class SSHConfig:
    """SSH configuration for connecting to deployment targets."""

    user: str = DEFAULT_SSH_USER
    key_path: Optional[str] = None

    @property
    def key_path_expanded(self) -> Optional[Path]:
        """Get expanded key path (resolves ~)."""
        if self.key_path:
            return Path(self.key_path).expanduser()
        return None

    @property
    def key_exists(self) -> bool:
        """Check if private key file exists."""
        if self.key_path_expanded:
            return self.key_path_expanded.exists()
        return False

    def __repr__(self) -> str:
        return f"SSHConfig(user={self.user}, key={self.key_path})"


@dataclass(frozen=True)
class SSHConnection:
    """SSH connection details for a specific host."""

    host: str
    config: SSHConfig
    connect_timeout: Optional[int] = None

    @property
    def connection_string(self) -> str:
        """Get SSH connection string (user@host)."""
        return f"{self.config.user}@{self.host}"

    @property
    def ssh_options(self) -> list[str]:
        """Options shared by ssh and scp."""
        options = []
        if self.config.key_path_expanded:
            options.extend(["-i", str(self.config.key_path_expanded)])
        options.extend(
            [
                "-o",
                "StrictHostKeyChecking=no",
                "-o",
                "BatchMode=yes",
                "-o",
                "LogLevel=ERROR",
            ]
        )
        if self.connect_timeout:
            options.extend(["-o", f"ConnectTimeout={self.connect_timeout}"])
        return options

    @property
    def ssh_command_prefix(self) -> list[str]:
        """Get SSH command prefix for subprocess."""
        return ["ssh", *self.ssh_options, self.connection_string]

    def build_command(self, remote_command: str) -> list[str]:
        """Build full SSH command with remote command."""
        return self.ssh_command_prefix + [remote_command]

    def build_copy_command(self, local_path: Path, remote_path: str) -> list[str]:
        """Build scp command uploading local_path to remote_path."""
        return [
            "scp",
            *self.ssh_options,
            str(local_path),
            f"{self.connection_string}:{remote_path}",
        ]

    def __repr__(self) -> str:
        return f"SSHConnection(host={self.host}, user={self.config.user})"
