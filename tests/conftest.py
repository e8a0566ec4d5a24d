import subprocess
from pathlib import Path

import pytest

from fks_manager.logger import DeployLogger
from fks_manager.models import (
    DNSSettings,
    DeploymentTarget,
    ManagerConfig,
    Role,
    SSHConfig,
    SSHResult,
)
from fks_manager.exceptions import SSHError

# ----------------- Fakes -----------------


class FakeSSHService:
    """Records every ssh/scp call; responder(host, command) -> SSHResult | Exception."""

    def __init__(self, responder=None, copy_returncode=0):
        self.config = SSHConfig()
        self.calls = []
        self._responder = responder or (lambda host, command: SSHResult(returncode=0, host=host, command=command))
        self._copy_returncode = copy_returncode

    def execute_command(self, host, command, timeout=30, connect_timeout=None, merge_output=False, user=None):
        self.calls.append(("exec", host, command, user))
        response = self._responder(host, command)
        if isinstance(response, Exception):
            raise response
        return response

    def copy_file(self, host, local_path, remote_path, timeout=60, user=None):
        self.calls.append(("copy", host, Path(local_path).read_text(), remote_path, user))
        return SSHResult(returncode=self._copy_returncode, host=host, command="scp")


class FakeProber:
    def __init__(self, unreachable=()):
        self.unreachable = set(unreachable)
        self.probed = []

    def probe(self, target):
        self.probed.append(target.hostname)
        return target.hostname not in self.unreachable


class FakeRunner:
    """Stands in for RemoteScriptRunner; fail_roles exit non-zero."""

    def __init__(self, fail_roles=(), raise_roles=()):
        self.fail_roles = set(fail_roles)
        self.raise_roles = set(raise_roles)
        self.runs = []

    def run(self, script_body, target):
        self.runs.append((target.role, script_body))
        if target.role in self.raise_roles:
            raise SSHError("ssh could not be started", context=target.hostname)
        returncode = 1 if target.role in self.fail_roles else 0
        return SSHResult(
            returncode=returncode,
            stdout="remote output",
            host=target.hostname,
            command=f"/tmp/deploy-{target.role.value}.sh",
        )


class FakeResolver:
    def __init__(self, addresses=None):
        self.addresses = addresses or {}
        self.resolved = []

    def resolve(self, hostname):
        self.resolved.append(hostname)
        return self.addresses.get(hostname)


class FakeHealthChecker:
    def __init__(self, results=None):
        self.results = results or []
        self.calls = 0

    def check_all(self, topology):
        self.calls += 1
        return list(self.results)


# ----------------- Fixtures -----------------


@pytest.fixture
def logger(tmp_path):
    log = DeployLogger("test", log_dir=tmp_path / "logs")
    yield log
    log.close()


@pytest.fixture
def multi_config(tmp_path):
    return ManagerConfig(
        command="deploy",
        mode="multi",
        auth_server="auth.example.com",
        api_server="api.example.com",
        web_server="web.example.com",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def single_config(tmp_path):
    return ManagerConfig(
        command="deploy",
        mode="single",
        server="fks.example.com",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def dns_updater(tmp_path):
    """Executable stand-in for the Cloudflare updater script."""
    script = tmp_path / "cloudflare-updater.sh"
    script.write_text("#!/bin/sh\nexit 0\n")
    script.chmod(0o755)
    return script


@pytest.fixture
def dns_settings(dns_updater):
    return DNSSettings(api_token="token", zone_id="zone", updater_path=dns_updater)


@pytest.fixture
def auth_target():
    return DeploymentTarget("auth.example.com", "fks_user", Role.AUTH)


@pytest.fixture
def forbid_subprocess(monkeypatch):
    """Fail the test if anything shells out."""
    calls = []

    def _run(*args, **kwargs):
        calls.append(args)
        raise AssertionError(f"unexpected subprocess call: {args}")

    monkeypatch.setattr(subprocess, "run", _run)
    monkeypatch.setattr(subprocess, "Popen", _run)
    return calls
