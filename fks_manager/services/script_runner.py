"""Remote script runner: upload a script, execute it, remove it."""

import os
import tempfile
from pathlib import Path

from fks_manager.constants import REMOTE_SCRIPT_DIR, SSH_PROBE_TIMEOUT
from fks_manager.exceptions import SSHError
from fks_manager.models.deployment import DeploymentTarget
from fks_manager.models.results import SSHResult
from fks_manager.services.ssh_service import SSHService


class RemoteScriptRunner:
    """Runs a generated bash script on a target via scp + ssh."""

    def __init__(self, ssh_service: SSHService, remote_dir: str = REMOTE_SCRIPT_DIR):
        self.ssh_service = ssh_service
        self.remote_dir = remote_dir

    def remote_path_for(self, target: DeploymentTarget) -> str:
        """Fixed remote location of the script for a target's role."""
        return f"{self.remote_dir}/deploy-{target.role.value}.sh"

    def run(self, script_body: str, target: DeploymentTarget) -> SSHResult:
        """
        Execute script_body on target.

        The script runs without a timeout; its own grace sleeps bound it.
        Stdout and stderr are captured interleaved.

        Returns:
            SSHResult of the upload (if it failed) or of the execution

        Raises:
            SSHError: If ssh/scp cannot be started
        """
        remote_path = self.remote_path_for(target)

        fd, local_name = tempfile.mkstemp(prefix=f"deploy-{target.role.value}-", suffix=".sh")
        local_path = Path(local_name)
        try:
            with os.fdopen(fd, "w") as f:
                f.write(script_body)
            local_path.chmod(0o755)

            upload = self.ssh_service.copy_file(
                target.hostname, local_path, remote_path, user=target.ssh_user
            )
            if upload.is_failure:
                return upload

            try:
                return self.ssh_service.execute_command(
                    target.hostname,
                    f"chmod +x {remote_path} && {remote_path}",
                    timeout=None,
                    merge_output=True,
                    user=target.ssh_user,
                )
            finally:
                self._remove_remote(target, remote_path)
        finally:
            local_path.unlink(missing_ok=True)

    def _remove_remote(self, target: DeploymentTarget, remote_path: str) -> None:
        try:
            self.ssh_service.execute_command(
                target.hostname,
                f"rm -f {remote_path}",
                timeout=SSH_PROBE_TIMEOUT * 3,
                connect_timeout=SSH_PROBE_TIMEOUT,
                user=target.ssh_user,
            )
        except SSHError:
            # Leftover script in /tmp is harmless
            pass
