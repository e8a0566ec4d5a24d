"""Read-only health probes run on each target over SSH."""

from typing import List

from fks_manager.constants import (
    MULTI_HEALTH_PORTS,
    SINGLE_HEALTH_PORTS,
    SSH_HEALTH_TIMEOUT,
    SUBPROCESS_GRACE_SECONDS,
)
from fks_manager.exceptions import SSHError
from fks_manager.models.deployment import DeploymentTarget, DeploymentTopology
from fks_manager.models.results import HealthResult
from fks_manager.services.ssh_service import SSHService


class HealthChecker:
    """Curls well-known local ports on each target; never mutates anything."""

    def __init__(self, ssh_service: SSHService, timeout: int = SSH_HEALTH_TIMEOUT):
        self.ssh_service = ssh_service
        self.timeout = timeout

    @staticmethod
    def health_command(port: int) -> str:
        return (
            f"curl -f -s -o /dev/null --max-time 5 http://localhost:{port}/health 2>/dev/null"
            f" || curl -f -s -o /dev/null --max-time 5 http://localhost:{port}/ 2>/dev/null"
        )

    def checks_for(self, topology: DeploymentTopology) -> List[tuple]:
        """(target, service name, port) triples for a topology."""
        if topology.is_multi:
            return [
                (target, *MULTI_HEALTH_PORTS[target.role.value])
                for target in topology.targets
            ]
        target = topology.targets[0]
        return [(target, name, port) for name, port in SINGLE_HEALTH_PORTS]

    def check(self, target: DeploymentTarget, service_name: str, port: int) -> HealthResult:
        try:
            result = self.ssh_service.execute_command(
                target.hostname,
                self.health_command(port),
                timeout=self.timeout * 2 + SUBPROCESS_GRACE_SECONDS,
                connect_timeout=self.timeout,
                user=target.ssh_user,
            )
            healthy = result.is_success
        except SSHError:
            healthy = False
        return HealthResult(target=target, service_name=service_name, port=port, healthy=healthy)

    def check_all(self, topology: DeploymentTopology) -> List[HealthResult]:
        return [self.check(*check) for check in self.checks_for(topology)]
