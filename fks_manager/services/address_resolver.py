"""Resolve a server's mesh-network (Tailscale) address."""

import ipaddress
import shutil
import subprocess
from typing import Optional

from fks_manager.constants import (
    MESH_CLIENT,
    SSH_RESOLVE_TIMEOUT,
    SUBPROCESS_GRACE_SECONDS,
)
from fks_manager.exceptions import SSHError
from fks_manager.services.ssh_service import SSHService


class AddressResolver:
    """
    Two-tier lookup of a host's mesh address.

    1. Local mesh client peer list
    2. Ask the host itself over SSH
    """

    def __init__(self, ssh_service: SSHService, timeout: int = SSH_RESOLVE_TIMEOUT):
        self.ssh_service = ssh_service
        self.timeout = timeout

    def resolve(self, hostname: str) -> Optional[str]:
        """Return the mesh address for hostname, or None if both tiers fail."""
        return self._from_local_peers(hostname) or self._from_remote(hostname)

    def _from_local_peers(self, hostname: str) -> Optional[str]:
        if shutil.which(MESH_CLIENT) is None:
            return None

        try:
            result = subprocess.run(
                [MESH_CLIENT, "status", "--peers"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (subprocess.TimeoutExpired, OSError):
            return None

        if result.returncode != 0:
            return None

        # Peer lines look like: "100.64.0.3  auth  user@  linux  -"
        for line in result.stdout.splitlines():
            if hostname not in line:
                continue
            fields = line.split()
            if fields and _is_ip(fields[0]):
                return fields[0]
        return None

    def _from_remote(self, hostname: str) -> Optional[str]:
        try:
            result = self.ssh_service.execute_command(
                hostname,
                f"{MESH_CLIENT} ip -4 2>/dev/null",
                timeout=self.timeout + SUBPROCESS_GRACE_SECONDS,
                connect_timeout=self.timeout,
            )
        except SSHError:
            return None

        if result.is_failure:
            return None

        lines = result.stdout.strip().splitlines()
        if lines and _is_ip(lines[0].strip()):
            return lines[0].strip()
        return None


def _is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True
