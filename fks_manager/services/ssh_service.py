"""SSH service for executing commands and copying files to remote hosts."""

import subprocess
import time
from dataclasses import replace
from pathlib import Path
from typing import Optional

from fks_manager.exceptions import SSHError
from fks_manager.models.results import SSHResult
from fks_manager.models.ssh import SSHConfig, SSHConnection


class SSHService:
    """Service for SSH operations."""

    def __init__(self, config: SSHConfig):
        """
        Initialize SSH service.

        Args:
            config: SSH configuration
        """
        self.config = config

    def connection(
        self,
        host: str,
        connect_timeout: Optional[int] = None,
        user: Optional[str] = None,
    ) -> SSHConnection:
        """Build a connection, optionally overriding the configured user."""
        config = self.config
        if user and user != config.user:
            config = replace(config, user=user)
        return SSHConnection(host=host, config=config, connect_timeout=connect_timeout)

    def execute_command(
        self,
        host: str,
        command: str,
        timeout: Optional[int] = 30,
        connect_timeout: Optional[int] = None,
        merge_output: bool = False,
        user: Optional[str] = None,
    ) -> SSHResult:
        """
        Execute command on remote host via SSH.

        Args:
            host: Host IP or hostname
            command: Command to execute
            timeout: Overall timeout in seconds (None waits forever)
            connect_timeout: SSH ConnectTimeout in seconds
            merge_output: Interleave stderr into stdout
            user: SSH user overriding the configured one

        Returns:
            SSHResult with execution details

        Raises:
            SSHError: If ssh times out or cannot be started
        """
        ssh_cmd = self.connection(host, connect_timeout, user).build_command(command)
        return self._run(ssh_cmd, host, command, timeout, merge_output)

    def copy_file(
        self,
        host: str,
        local_path: Path,
        remote_path: str,
        timeout: Optional[int] = 60,
        user: Optional[str] = None,
    ) -> SSHResult:
        """
        Upload a local file via scp.

        Args:
            host: Host IP or hostname
            local_path: File to upload
            remote_path: Destination path on the host
            timeout: Transfer timeout in seconds
            user: SSH user overriding the configured one

        Returns:
            SSHResult with execution details

        Raises:
            SSHError: If scp times out or cannot be started
        """
        scp_cmd = self.connection(host, user=user).build_copy_command(local_path, remote_path)
        return self._run(scp_cmd, host, f"scp {local_path} {remote_path}", timeout)

    def _run(
        self,
        argv: list[str],
        host: str,
        command: str,
        timeout: Optional[int],
        merge_output: bool = False,
    ) -> SSHResult:
        start_time = time.time()

        try:
            result = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_output else subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            raise SSHError(
                f"SSH command timed out after {timeout}s",
                context=f"Host: {host}, Command: {command}",
            )
        except OSError as e:
            raise SSHError(
                f"SSH command failed: {e}",
                context=f"Host: {host}, Command: {command}",
            )

        return SSHResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            host=host,
            command=command,
            duration_seconds=time.time() - start_time,
        )
