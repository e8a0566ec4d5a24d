"""
Deployment Orchestrator

Explicit state machine driving deploy, health-check and update-dns:

    PARSE_ARGS -> VALIDATE -> PREFLIGHT
        deploy/multi:  PROBE_ALL -> DEPLOY_AUTH -> DEPLOY_API -> DEPLOY_WEB
        deploy/single: PROBE -> DEPLOY_SINGLE
        health-check:  HEALTH_CHECK
    -> RECONCILE_DNS (deploy, update-dns) -> DONE

Terminal failures: ABORT_MISSING_ARGS, ABORT_MISSING_TOOLS,
ABORT_UNREACHABLE, ABORT_DEPLOY_FAILED.

Collaborators are injected so every transition can be exercised without a
network or container runtime.
"""

import shutil
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from fks_manager.constants import REQUIRED_TOOLS
from fks_manager.exceptions import (
    DeploymentError,
    FKSError,
    MissingToolsError,
    SSHError,
    UnreachableTargetError,
    ValidationError,
)
from fks_manager.logger import DeployLogger
from fks_manager.models.config import ManagerConfig
from fks_manager.models.deployment import (
    DeploymentTopology,
    ResolvedAddress,
    Role,
)
from fks_manager.models.results import HealthResult
from fks_manager.services import (
    AddressResolver,
    ConnectivityProber,
    DNSReconciler,
    HealthChecker,
    RemoteScriptRunner,
    RoleDeployer,
    ScriptBuilder,
    SSHService,
    build_deployers,
)

COMMAND_DEPLOY = "deploy"
COMMAND_HEALTH_CHECK = "health-check"
COMMAND_UPDATE_DNS = "update-dns"
COMMANDS = (COMMAND_DEPLOY, COMMAND_HEALTH_CHECK, COMMAND_UPDATE_DNS)


class OrchestratorState(Enum):
    PARSE_ARGS = "parse_args"
    VALIDATE = "validate"
    PREFLIGHT = "preflight"
    PROBE_ALL = "probe_all"
    PROBE = "probe"
    DEPLOY_AUTH = "deploy_auth"
    DEPLOY_API = "deploy_api"
    DEPLOY_WEB = "deploy_web"
    DEPLOY_SINGLE = "deploy_single"
    HEALTH_CHECK = "health_check"
    RECONCILE_DNS = "reconcile_dns"
    DONE = "done"
    ABORT_MISSING_ARGS = "abort_missing_args"
    ABORT_MISSING_TOOLS = "abort_missing_tools"
    ABORT_UNREACHABLE = "abort_unreachable"
    ABORT_DEPLOY_FAILED = "abort_deploy_failed"


FAILURE_STATES = frozenset(
    {
        OrchestratorState.ABORT_MISSING_ARGS,
        OrchestratorState.ABORT_MISSING_TOOLS,
        OrchestratorState.ABORT_UNREACHABLE,
        OrchestratorState.ABORT_DEPLOY_FAILED,
    }
)
TERMINAL_STATES = FAILURE_STATES | {OrchestratorState.DONE}


@dataclass
class OrchestratorResult:
    """Final state of one run plus anything it produced."""

    state: OrchestratorState
    history: List[OrchestratorState] = field(default_factory=list)
    health_results: List[HealthResult] = field(default_factory=list)
    error: Optional[FKSError] = None

    @property
    def is_success(self) -> bool:
        return self.state == OrchestratorState.DONE

    @property
    def exit_code(self) -> int:
        return 0 if self.is_success else 1


class Orchestrator:
    """Runs one command over one topology, strictly sequentially."""

    def __init__(
        self,
        config: ManagerConfig,
        logger: DeployLogger,
        prober: ConnectivityProber,
        deployers: Dict[Role, RoleDeployer],
        resolver: AddressResolver,
        reconciler: DNSReconciler,
        health_checker: HealthChecker,
        which: Optional[Callable[[str], Optional[str]]] = None,
    ):
        self.config = config
        self.logger = logger
        self.prober = prober
        self.deployers = deployers
        self.resolver = resolver
        self.reconciler = reconciler
        self.health_checker = health_checker
        self.which = which or shutil.which

        self.topology: Optional[DeploymentTopology] = None
        self.health_results: List[HealthResult] = []
        self.error: Optional[FKSError] = None

        self._handlers: Dict[OrchestratorState, Callable[[], OrchestratorState]] = {
            OrchestratorState.PARSE_ARGS: self._parse_args,
            OrchestratorState.VALIDATE: self._validate,
            OrchestratorState.PREFLIGHT: self._preflight,
            OrchestratorState.PROBE_ALL: self._probe_all,
            OrchestratorState.PROBE: self._probe_all,
            OrchestratorState.DEPLOY_AUTH: self._deploy_auth,
            OrchestratorState.DEPLOY_API: self._deploy_api,
            OrchestratorState.DEPLOY_WEB: self._deploy_web,
            OrchestratorState.DEPLOY_SINGLE: self._deploy_single,
            OrchestratorState.HEALTH_CHECK: self._health_check,
            OrchestratorState.RECONCILE_DNS: self._reconcile_dns,
        }

    @classmethod
    def from_config(cls, config: ManagerConfig, logger: DeployLogger) -> "Orchestrator":
        """Wire real SSH-backed collaborators."""
        ssh_service = SSHService(config.ssh_config)
        runner = RemoteScriptRunner(ssh_service)
        builder = ScriptBuilder(service_dir=config.service_dir)
        return cls(
            config=config,
            logger=logger,
            prober=ConnectivityProber(ssh_service),
            deployers=build_deployers(runner, builder),
            resolver=AddressResolver(ssh_service),
            reconciler=DNSReconciler(config.dns, logger),
            health_checker=HealthChecker(ssh_service),
        )

    def run(self) -> OrchestratorResult:
        """Drive the state machine to a terminal state."""
        state = OrchestratorState.PARSE_ARGS
        history = [state]

        while state not in TERMINAL_STATES:
            next_state = self._handlers[state]()
            self.logger.step(f"{state.name} -> {next_state.name}")
            state = next_state
            history.append(state)

        if state == OrchestratorState.DONE:
            self._log_completion()
        else:
            self.logger.log_error(f"Aborted in state {state.name}")

        return OrchestratorResult(
            state=state,
            history=history,
            health_results=list(self.health_results),
            error=self.error,
        )

    # -- transitions -------------------------------------------------------

    def _parse_args(self) -> OrchestratorState:
        if self.config.command not in COMMANDS:
            return self._fail(
                ValidationError(
                    f"Unknown command: {self.config.command}",
                    context=f"Expected one of: {', '.join(COMMANDS)}",
                ),
                OrchestratorState.ABORT_MISSING_ARGS,
            )
        return OrchestratorState.VALIDATE

    def _validate(self) -> OrchestratorState:
        try:
            self.topology = self.config.build_topology()
        except ValidationError as e:
            return self._fail(e, OrchestratorState.ABORT_MISSING_ARGS)

        ssh_config = self.config.ssh_config
        if ssh_config.key_path and not ssh_config.key_exists:
            return self._fail(
                ValidationError(
                    "SSH key not found",
                    context=f"--ssh-key {ssh_config.key_path_expanded}",
                ),
                OrchestratorState.ABORT_MISSING_ARGS,
            )

        if self.topology.is_multi:
            for target in self.topology.targets:
                self.logger.log(f"{target.role.value.capitalize()} server: {target.hostname}")
        else:
            self.logger.log(f"Server: {self.topology.targets[0].hostname}")
        return OrchestratorState.PREFLIGHT

    def _preflight(self) -> OrchestratorState:
        missing = [tool for tool in REQUIRED_TOOLS if self.which(tool) is None]
        if missing:
            return self._fail(
                MissingToolsError(missing), OrchestratorState.ABORT_MISSING_TOOLS
            )

        if self.config.command == COMMAND_HEALTH_CHECK:
            return OrchestratorState.HEALTH_CHECK
        if self.config.command == COMMAND_UPDATE_DNS:
            return OrchestratorState.RECONCILE_DNS

        mode = "multi-server" if self.topology.is_multi else "single-server"
        self.logger.fks(f"Starting {mode} FKS deployment...")
        if self.topology.is_multi:
            return OrchestratorState.PROBE_ALL
        return OrchestratorState.PROBE

    def _probe_all(self) -> OrchestratorState:
        unreachable = []
        # Probe every target so the operator sees all failures at once
        for target in self.topology.targets:
            self.logger.log(f"Testing connectivity to {target.hostname}...")
            if self.prober.probe(target):
                self.logger.success(f"Connected to {target.hostname}")
            else:
                self.logger.log_error(f"Cannot connect to {target.hostname}")
                unreachable.append(target.hostname)

        if unreachable:
            return self._fail(
                UnreachableTargetError(unreachable), OrchestratorState.ABORT_UNREACHABLE
            )

        if self.topology.is_multi:
            return OrchestratorState.DEPLOY_AUTH
        return OrchestratorState.DEPLOY_SINGLE

    def _deploy_auth(self) -> OrchestratorState:
        return self._deploy(Role.AUTH, OrchestratorState.DEPLOY_API)

    def _deploy_api(self) -> OrchestratorState:
        auth = self.topology.target_for(Role.AUTH)
        return self._deploy(
            Role.API, OrchestratorState.DEPLOY_WEB, auth_server=auth.hostname
        )

    def _deploy_web(self) -> OrchestratorState:
        return self._deploy(
            Role.WEB,
            OrchestratorState.RECONCILE_DNS,
            auth_server=self.topology.target_for(Role.AUTH).hostname,
            api_server=self.topology.target_for(Role.API).hostname,
        )

    def _deploy_single(self) -> OrchestratorState:
        return self._deploy(Role.SINGLE, OrchestratorState.RECONCILE_DNS)

    def _deploy(
        self, role: Role, next_state: OrchestratorState, **dependencies
    ) -> OrchestratorState:
        target = self.topology.target_for(role)
        label = "single-server FKS" if role == Role.SINGLE else f"{role.value.capitalize()} server"
        self.logger.fks(f"Deploying {label} to {target.hostname}...")

        try:
            result = self.deployers[role].deploy(target, **dependencies)
        except SSHError as e:
            return self._fail(
                DeploymentError(f"Deploy of {target} failed", context=e.message),
                OrchestratorState.ABORT_DEPLOY_FAILED,
            )

        if result.is_failure:
            self.logger.log_output(result.output, show=True)
            return self._fail(
                DeploymentError(
                    f"Deploy of {target} failed with exit code {result.returncode}",
                    context=result.command,
                ),
                OrchestratorState.ABORT_DEPLOY_FAILED,
            )

        self.logger.log_output(result.output)
        self.logger.success(f"{label} deployed to {target.hostname}")
        return next_state

    def _health_check(self) -> OrchestratorState:
        self.logger.log("Running health checks...")
        for result in self.health_checker.check_all(self.topology):
            self.health_results.append(result)
            where = f"{result.service_name} on {result.target.hostname}:{result.port}"
            if result.healthy:
                self.logger.success(f"{where} is healthy")
            else:
                self.logger.warning(f"{where} health check failed")
        return OrchestratorState.DONE

    def _reconcile_dns(self) -> OrchestratorState:
        if not self.reconciler.check_preconditions():
            return OrchestratorState.DONE

        addresses = [
            ResolvedAddress(target, self.resolver.resolve(target.hostname))
            for target in self.topology.targets
        ]
        self.reconciler.reconcile(self.topology, addresses)
        return OrchestratorState.DONE

    # -- helpers -----------------------------------------------------------

    def _fail(self, error: FKSError, state: OrchestratorState) -> OrchestratorState:
        self.error = error
        self.logger.log_error(error.message, context=error.context)
        return state

    def _log_completion(self) -> None:
        if self.config.command != COMMAND_DEPLOY:
            self.logger.success(f"{self.config.command} complete")
            return

        domain = self.config.domain
        if self.topology.is_multi:
            self.logger.success("Multi-server FKS deployment complete!")
            urls = [
                ("Auth", f"https://auth.{domain}"),
                ("API", f"https://api.{domain}"),
                ("Trading", f"https://trading.{domain}"),
                ("Web", f"https://fks.{domain}"),
            ]
        else:
            self.logger.success("Single-server FKS deployment complete!")
            urls = [
                ("Main app", f"https://fks.{domain}"),
                ("API", f"https://api.{domain}"),
                ("Auth", f"https://auth.{domain}"),
            ]
        self.logger.log("Services available at:")
        for name, url in urls:
            self.logger.log(f"  - {name}: {url}")
