"""
Configuration Models

A single immutable configuration value built once from CLI flags and the
environment, then handed to every component.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from fks_manager.constants import (
    DEFAULT_DOMAIN,
    DEFAULT_LOG_DIR,
    DEFAULT_SERVICE_DIR,
    DEFAULT_SSH_USER,
)
from .deployment import DeploymentTopology
from .ssh import SSHConfig


@dataclass(frozen=True)
class DNSSettings:
    """Credentials and helper location for DNS reconciliation."""

    api_token: Optional[str] = None
    zone_id: Optional[str] = None
    updater_path: Optional[Path] = None

    @property
    def is_configured(self) -> bool:
        """Both provider credentials are present and non-empty."""
        return bool(
            self.api_token
            and self.api_token.strip()
            and self.zone_id
            and self.zone_id.strip()
        )

    def __repr__(self) -> str:
        token = "***" if self.api_token else None
        return f"DNSSettings(token={token}, zone={self.zone_id}, updater={self.updater_path})"


@dataclass(frozen=True)
class ManagerConfig:
    """Everything one invocation needs, parsed once from the CLI."""

    command: str
    mode: Optional[str] = None
    server: Optional[str] = None
    auth_server: Optional[str] = None
    api_server: Optional[str] = None
    web_server: Optional[str] = None
    user: str = DEFAULT_SSH_USER
    ssh_key: Optional[str] = None
    service_dir: str = DEFAULT_SERVICE_DIR
    domain: str = DEFAULT_DOMAIN
    dns: DNSSettings = field(default_factory=DNSSettings)
    log_dir: Path = DEFAULT_LOG_DIR
    verbose: bool = False

    @property
    def ssh_config(self) -> SSHConfig:
        return SSHConfig(user=self.user, key_path=self.ssh_key)

    def build_topology(self) -> DeploymentTopology:
        """
        Validate target options into a topology.

        Raises:
            ValidationError: If options are missing or contradictory
        """
        return DeploymentTopology.from_options(
            mode=self.mode,
            user=self.user,
            server=self.server,
            auth_server=self.auth_server,
            api_server=self.api_server,
            web_server=self.web_server,
        )
