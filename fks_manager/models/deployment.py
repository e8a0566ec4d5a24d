"""
Deployment Models

Targets, topologies and resolved addresses. All values are transient and
live only for one CLI invocation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fks_manager.exceptions import ValidationError


class Role(Enum):
    """Server role within a topology."""

    AUTH = "auth"
    API = "api"
    WEB = "web"
    SINGLE = "single"


class DeploymentMode(Enum):
    """Deployment topology mode."""

    SINGLE = "single"
    MULTI = "multi"


# Deploy order for multi-server topology
MULTI_ROLE_ORDER = (Role.AUTH, Role.API, Role.WEB)


@dataclass(frozen=True)
class DeploymentTarget:
    """A single server to act upon."""

    hostname: str
    ssh_user: str
    role: Role

    def __str__(self) -> str:
        return f"{self.role.value}:{self.ssh_user}@{self.hostname}"


@dataclass(frozen=True)
class DeploymentTopology:
    """
    Ordered set of targets for one invocation.

    Invariants:
    - single: exactly one target with role SINGLE
    - multi: exactly three targets, roles auth, api, web in that order
    """

    mode: DeploymentMode
    targets: tuple[DeploymentTarget, ...]

    def __post_init__(self):
        roles = tuple(t.role for t in self.targets)
        if self.mode == DeploymentMode.SINGLE and roles != (Role.SINGLE,):
            raise ValidationError(
                "Single mode requires exactly one target",
                context=f"Got roles: {[r.value for r in roles]}",
            )
        if self.mode == DeploymentMode.MULTI and roles != MULTI_ROLE_ORDER:
            raise ValidationError(
                "Multi mode requires auth, api and web targets",
                context=f"Got roles: {[r.value for r in roles]}",
            )

    @classmethod
    def from_options(
        cls,
        mode: Optional[str],
        user: str,
        server: Optional[str] = None,
        auth_server: Optional[str] = None,
        api_server: Optional[str] = None,
        web_server: Optional[str] = None,
    ) -> "DeploymentTopology":
        """
        Build a topology from raw CLI option values.

        Raises:
            ValidationError: If the options are missing or contradictory
        """
        try:
            deployment_mode = DeploymentMode(mode)
        except ValueError:
            raise ValidationError(
                "Mode must be 'single' or 'multi'",
                context=f"Got: {mode!r}",
            )

        if not user or not user.strip():
            raise ValidationError("SSH user must not be empty")

        role_hosts = {
            Role.AUTH: _clean(auth_server),
            Role.API: _clean(api_server),
            Role.WEB: _clean(web_server),
        }
        server = _clean(server)

        if deployment_mode == DeploymentMode.SINGLE:
            if not server:
                raise ValidationError(
                    "Server hostname is required for single mode",
                    context="Pass --server HOST",
                )
            given = [r.value for r, host in role_hosts.items() if host]
            if given:
                raise ValidationError(
                    "Role servers cannot be combined with single mode",
                    context=f"Unexpected: {', '.join(f'--{r}-server' for r in given)}",
                )
            targets = (DeploymentTarget(server, user, Role.SINGLE),)
        else:
            missing = [r.value for r, host in role_hosts.items() if not host]
            if missing:
                raise ValidationError(
                    "All three server hostnames are required for multi mode",
                    context=f"Missing: {', '.join(f'--{r}-server' for r in missing)}",
                )
            if server:
                raise ValidationError(
                    "--server cannot be combined with multi mode",
                    context="Use --auth-server, --api-server and --web-server",
                )
            targets = tuple(
                DeploymentTarget(role_hosts[role], user, role)
                for role in MULTI_ROLE_ORDER
            )

        return cls(mode=deployment_mode, targets=targets)

    def target_for(self, role: Role) -> Optional[DeploymentTarget]:
        """Get the target for a role, if present."""
        for target in self.targets:
            if target.role == role:
                return target
        return None

    @property
    def is_multi(self) -> bool:
        return self.mode == DeploymentMode.MULTI


@dataclass(frozen=True)
class ResolvedAddress:
    """Mesh-network address for a target; address is None if unresolved."""

    target: DeploymentTarget
    address: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return bool(self.address)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
