"""Connectivity prober: gate remote actions on a quick SSH round-trip."""

from fks_manager.constants import SSH_PROBE_TIMEOUT, SUBPROCESS_GRACE_SECONDS
from fks_manager.exceptions import SSHError
from fks_manager.models.deployment import DeploymentTarget
from fks_manager.services.ssh_service import SSHService


class ConnectivityProber:
    """Checks that a target accepts SSH and runs a trivial command."""

    PROBE_COMMAND = "echo 'Connection successful'"

    def __init__(self, ssh_service: SSHService, timeout: int = SSH_PROBE_TIMEOUT):
        self.ssh_service = ssh_service
        self.timeout = timeout

    def probe(self, target: DeploymentTarget) -> bool:
        """Return True only if the echo exits 0 within the timeout."""
        try:
            result = self.ssh_service.execute_command(
                target.hostname,
                self.PROBE_COMMAND,
                timeout=self.timeout + SUBPROCESS_GRACE_SECONDS,
                connect_timeout=self.timeout,
                user=target.ssh_user,
            )
        except SSHError:
            return False
        return result.is_success
