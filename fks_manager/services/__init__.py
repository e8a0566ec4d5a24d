"""
FKS Service Manager Services Layer

SSH transport and the deployment building blocks the orchestrator drives.
"""

from .ssh_service import SSHService
from .connectivity import ConnectivityProber
from .address_resolver import AddressResolver
from .script_runner import RemoteScriptRunner
from .script_builder import ScriptBuilder, ROLE_PROFILES
from .deployers import (
    RoleDeployer,
    AuthDeployer,
    ApiDeployer,
    WebDeployer,
    SingleDeployer,
    build_deployers,
)
from .dns_service import DNSReconciler
from .health_service import HealthChecker

__all__ = [
    "SSHService",
    "ConnectivityProber",
    "AddressResolver",
    "RemoteScriptRunner",
    "ScriptBuilder",
    "ROLE_PROFILES",
    "RoleDeployer",
    "AuthDeployer",
    "ApiDeployer",
    "WebDeployer",
    "SingleDeployer",
    "build_deployers",
    "DNSReconciler",
    "HealthChecker",
]
