"""
FKS Service Manager Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .deployment import (
    Role,
    DeploymentMode,
    DeploymentTarget,
    DeploymentTopology,
    ResolvedAddress,
    MULTI_ROLE_ORDER,
)
from .results import (
    ExecutionResult,
    SSHResult,
    HealthResult,
)
from .ssh import (
    SSHConfig,
    SSHConnection,
)
from .config import (
    DNSSettings,
    ManagerConfig,
)

__all__ = [
    # Deployment
    "Role",
    "DeploymentMode",
    "DeploymentTarget",
    "DeploymentTopology",
    "ResolvedAddress",
    "MULTI_ROLE_ORDER",
    # Results
    "ExecutionResult",
    "SSHResult",
    "HealthResult",
    # SSH
    "SSHConfig",
    "SSHConnection",
    # Config
    "DNSSettings",
    "ManagerConfig",
]
