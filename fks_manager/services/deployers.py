"""
Per-role deployers.

Each deployer renders its role's script and hands it to the remote script
runner. The runner's result is returned unchanged; callers decide whether a
non-zero exit aborts the sequence.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from fks_manager.models.deployment import DeploymentTarget, Role
from fks_manager.models.results import SSHResult
from fks_manager.services.script_builder import ScriptBuilder
from fks_manager.services.script_runner import RemoteScriptRunner


class RoleDeployer(ABC):
    """Base class for role deployers."""

    role: Role

    def __init__(self, runner: RemoteScriptRunner, builder: ScriptBuilder):
        self.runner = runner
        self.builder = builder

    @abstractmethod
    def build_script(self, target: DeploymentTarget, **dependencies) -> str:
        """Render the remote script for target."""
        pass

    def deploy(self, target: DeploymentTarget, **dependencies) -> SSHResult:
        """Run this role's deploy script on target."""
        if target.role != self.role:
            raise ValueError(
                f"{type(self).__name__} cannot deploy a {target.role.value} target"
            )
        return self.runner.run(self.build_script(target, **dependencies), target)


class AuthDeployer(RoleDeployer):
    role = Role.AUTH

    def build_script(self, target: DeploymentTarget, **dependencies) -> str:
        return self.builder.build_auth()


class ApiDeployer(RoleDeployer):
    role = Role.API

    def build_script(
        self,
        target: DeploymentTarget,
        auth_server: Optional[str] = None,
        **dependencies,
    ) -> str:
        return self.builder.build_api(auth_server=auth_server)


class WebDeployer(RoleDeployer):
    """
    Web role. Accepts the auth and api hostnames so the call site mirrors the
    other roles, but the web stack discovers nothing at boot and the script
    does not use them.
    """

    role = Role.WEB

    def build_script(
        self,
        target: DeploymentTarget,
        auth_server: Optional[str] = None,
        api_server: Optional[str] = None,
        **dependencies,
    ) -> str:
        return self.builder.build_web()


class SingleDeployer(RoleDeployer):
    role = Role.SINGLE

    def build_script(self, target: DeploymentTarget, **dependencies) -> str:
        return self.builder.build_single()


def build_deployers(
    runner: RemoteScriptRunner, builder: ScriptBuilder
) -> Dict[Role, RoleDeployer]:
    """One deployer per role, sharing a runner and builder."""
    return {
        cls.role: cls(runner, builder)
        for cls in (AuthDeployer, ApiDeployer, WebDeployer, SingleDeployer)
    }
