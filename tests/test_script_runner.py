from pathlib import Path

import pytest

from fks_manager.exceptions import SSHError
from fks_manager.models import SSHResult
from fks_manager.services import RemoteScriptRunner

from conftest import FakeSSHService


SCRIPT = "#!/bin/bash\nset -euo pipefail\necho hi\n"


def test_upload_execute_then_cleanup(auth_target):
    ssh = FakeSSHService()
    result = RemoteScriptRunner(ssh).run(SCRIPT, auth_target)

    assert result.is_success
    kinds = [call[0] for call in ssh.calls]
    assert kinds == ["copy", "exec", "exec"]

    _, host, content, remote, user = ssh.calls[0]
    assert host == "auth.example.com"
    assert content == SCRIPT
    assert remote == "/tmp/deploy-auth.sh"
    assert user == "fks_user"

    assert ssh.calls[1][2] == "chmod +x /tmp/deploy-auth.sh && /tmp/deploy-auth.sh"
    assert ssh.calls[2][2] == "rm -f /tmp/deploy-auth.sh"


def test_local_copy_is_removed(auth_target, monkeypatch):
    created = []
    ssh = FakeSSHService()
    original_copy = ssh.copy_file

    def recording_copy(host, local_path, remote_path, timeout=60, user=None):
        created.append(Path(local_path))
        return original_copy(host, local_path, remote_path, timeout, user)

    monkeypatch.setattr(ssh, "copy_file", recording_copy)
    RemoteScriptRunner(ssh).run(SCRIPT, auth_target)

    assert created and not created[0].exists()


def test_failed_upload_skips_execution(auth_target):
    ssh = FakeSSHService(copy_returncode=1)
    result = RemoteScriptRunner(ssh).run(SCRIPT, auth_target)

    assert result.is_failure
    assert [call[0] for call in ssh.calls] == ["copy"]


def test_remote_cleanup_runs_when_execution_raises(auth_target):
    def responder(host, command):
        if command.startswith("chmod"):
            return SSHError("connection reset")
        return None

    ssh = FakeSSHService(responder)

    with pytest.raises(SSHError):
        RemoteScriptRunner(ssh).run(SCRIPT, auth_target)

    assert ssh.calls[-1][2] == "rm -f /tmp/deploy-auth.sh"


def test_cleanup_failure_does_not_mask_result(auth_target):
    def responder(host, command):
        if command.startswith("rm"):
            return SSHError("timed out")
        return SSHResult(returncode=3, stdout="compose failed", host=host)

    result = RemoteScriptRunner(FakeSSHService(responder)).run(SCRIPT, auth_target)

    assert result.returncode == 3
    assert "compose failed" in result.output
