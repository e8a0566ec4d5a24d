"""DNS reconciliation through the external Cloudflare updater helper."""

import os
import subprocess
from pathlib import Path
from typing import Iterable, Optional

from fks_manager.constants import (
    DNS_SINGLE_SERVICE_NAME,
    DNS_TOKEN_ENV,
    DNS_UPDATER_TIMEOUT,
    DNS_ZONE_ENV,
)
from fks_manager.exceptions import DNSError
from fks_manager.logger import DeployLogger
from fks_manager.models.config import DNSSettings
from fks_manager.models.deployment import DeploymentTopology, ResolvedAddress, Role
from fks_manager.models.results import ExecutionResult

# Helper flag per role for update-multi-server
MULTI_ROLE_FLAGS = {
    Role.AUTH: "--auth-ip",
    Role.API: "--api-ip",
    Role.WEB: "--web-ip",
}


class DNSReconciler:
    """
    Best-effort DNS updates. Never raises: every failure becomes a warning.
    """

    def __init__(self, settings: DNSSettings, logger: DeployLogger):
        self.settings = settings
        self.logger = logger

    def check_preconditions(self) -> bool:
        """Credentials present and helper executable; warns when not."""
        if not self.settings.is_configured:
            self.logger.warning(
                "Cloudflare credentials not available - skipping DNS updates"
            )
            return False

        updater = self.settings.updater_path
        if updater is None or not Path(updater).is_file() or not os.access(updater, os.X_OK):
            self.logger.warning(
                f"DNS updater script not found or not executable ({updater}) - skipping DNS updates"
            )
            return False

        return True

    def build_arguments(
        self, topology: DeploymentTopology, addresses: Iterable[ResolvedAddress]
    ) -> Optional[list[str]]:
        """
        Helper arguments for the resolved addresses, or None if nothing resolved.
        """
        resolved = {a.target.role: a.address for a in addresses if a.is_resolved}

        if topology.is_multi:
            args = ["update-multi-server"]
            for role, flag in MULTI_ROLE_FLAGS.items():
                if role in resolved:
                    args.extend([flag, resolved[role]])
            return args if len(args) > 1 else None

        address = resolved.get(Role.SINGLE)
        if not address:
            return None
        return ["update-service", "--service", DNS_SINGLE_SERVICE_NAME, "--ip", address]

    def reconcile(
        self, topology: DeploymentTopology, addresses: Iterable[ResolvedAddress]
    ) -> None:
        """Invoke the helper once for whatever addresses resolved."""
        if not self.check_preconditions():
            return

        addresses = list(addresses)
        for address in addresses:
            if not address.is_resolved:
                self.logger.warning(
                    f"Could not get Tailscale IP for {address.target.hostname}"
                )

        args = self.build_arguments(topology, addresses)
        if args is None:
            self.logger.warning("No mesh addresses resolved - skipping DNS updates")
            return

        mode = "multi-server" if topology.is_multi else "single-server"
        self.logger.log(f"Updating DNS for {mode} deployment...")

        try:
            result = self._run_updater(args)
        except DNSError as e:
            self.logger.warning(f"DNS update failed: {e.message}")
            return

        self.logger.log_output(result.output)
        if result.is_failure:
            self.logger.warning(f"DNS updater exited with code {result.returncode}")
        else:
            self.logger.success("DNS records updated")

    def _run_updater(self, args: list[str]) -> ExecutionResult:
        command = [str(self.settings.updater_path), *args]
        self.logger.log_command(" ".join(command))

        env = {
            **os.environ,
            DNS_TOKEN_ENV: self.settings.api_token or "",
            DNS_ZONE_ENV: self.settings.zone_id or "",
        }

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                env=env,
                timeout=DNS_UPDATER_TIMEOUT,
            )
        except subprocess.TimeoutExpired:
            raise DNSError(
                f"DNS updater timed out after {DNS_UPDATER_TIMEOUT}s",
                context=" ".join(command),
            )
        except OSError as e:
            raise DNSError(f"DNS updater could not be started: {e}", context=" ".join(command))

        return ExecutionResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            command=" ".join(command),
        )
