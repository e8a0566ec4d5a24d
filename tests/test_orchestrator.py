from dataclasses import replace

import pytest

from fks_manager.exceptions import MissingToolsError, UnreachableTargetError
from fks_manager.models import DNSSettings, DeploymentTarget, HealthResult, Role
from fks_manager.orchestrator import Orchestrator, OrchestratorState
from fks_manager.services import DNSReconciler, ScriptBuilder, build_deployers

from conftest import FakeHealthChecker, FakeProber, FakeResolver, FakeRunner

S = OrchestratorState


def all_tools(name):
    return f"/usr/bin/{name}"


class Harness:
    """Orchestrator wired to recording fakes."""

    def __init__(
        self,
        config,
        logger,
        unreachable=(),
        fail_roles=(),
        raise_roles=(),
        addresses=None,
        health_results=None,
        dns=None,
        which=all_tools,
    ):
        self.prober = FakeProber(unreachable)
        self.runner = FakeRunner(fail_roles, raise_roles)
        self.resolver = FakeResolver(addresses)
        self.health_checker = FakeHealthChecker(health_results)
        self.reconciler = DNSReconciler(dns or DNSSettings(), logger)
        self.orchestrator = Orchestrator(
            config=config,
            logger=logger,
            prober=self.prober,
            deployers=build_deployers(self.runner, ScriptBuilder(service_dir=config.service_dir)),
            resolver=self.resolver,
            reconciler=self.reconciler,
            health_checker=self.health_checker,
            which=which,
        )

    def run(self):
        return self.orchestrator.run()

    @property
    def deployed_roles(self):
        return [role for role, _ in self.runner.runs]


# ----------------- Validation -----------------


@pytest.mark.parametrize(
    "missing",
    ["auth_server", "api_server", "web_server"],
)
def test_multi_missing_host_aborts_before_any_remote_action(multi_config, logger, missing, forbid_subprocess):
    config = replace(multi_config, **{missing: None})
    harness = Harness(config, logger)

    result = harness.run()

    assert result.state == S.ABORT_MISSING_ARGS
    assert result.exit_code == 1
    assert harness.prober.probed == []
    assert harness.runner.runs == []
    assert forbid_subprocess == []


def test_single_missing_server_aborts(single_config, logger):
    harness = Harness(replace(single_config, server=None), logger)

    result = harness.run()

    assert result.history == [S.PARSE_ARGS, S.VALIDATE, S.ABORT_MISSING_ARGS]
    assert harness.prober.probed == []


def test_invalid_mode_aborts(single_config, logger):
    result = Harness(replace(single_config, mode="cluster"), logger).run()

    assert result.state == S.ABORT_MISSING_ARGS
    assert "Mode must be" in result.error.message


def test_missing_ssh_key_aborts_before_probing(single_config, logger, tmp_path):
    harness = Harness(replace(single_config, ssh_key=str(tmp_path / "id_missing")), logger)

    result = harness.run()

    assert result.state == S.ABORT_MISSING_ARGS
    assert result.error.message == "SSH key not found"
    assert harness.prober.probed == []


def test_existing_ssh_key_passes_validation(single_config, logger, tmp_path):
    key = tmp_path / "id_ed25519"
    key.write_text("key")
    harness = Harness(replace(single_config, ssh_key=str(key)), logger)

    assert harness.run().state == S.DONE


def test_missing_local_tools_aborts_before_probing(multi_config, logger):
    harness = Harness(multi_config, logger, which=lambda name: None if name == "scp" else all_tools(name))

    result = harness.run()

    assert result.state == S.ABORT_MISSING_TOOLS
    assert isinstance(result.error, MissingToolsError)
    assert "scp" in result.error.message
    assert harness.prober.probed == []


# ----------------- Multi-server deploy -----------------


def test_multi_deploy_runs_auth_api_web_in_order(multi_config, logger):
    harness = Harness(multi_config, logger)

    result = harness.run()

    assert result.state == S.DONE
    assert result.exit_code == 0
    assert result.history == [
        S.PARSE_ARGS,
        S.VALIDATE,
        S.PREFLIGHT,
        S.PROBE_ALL,
        S.DEPLOY_AUTH,
        S.DEPLOY_API,
        S.DEPLOY_WEB,
        S.RECONCILE_DNS,
        S.DONE,
    ]
    assert harness.deployed_roles == [Role.AUTH, Role.API, Role.WEB]


def test_unreachable_api_probes_all_then_deploys_nothing(multi_config, logger):
    harness = Harness(multi_config, logger, unreachable={"api.example.com"})

    result = harness.run()

    assert result.state == S.ABORT_UNREACHABLE
    assert result.exit_code == 1
    assert harness.prober.probed == ["auth.example.com", "api.example.com", "web.example.com"]
    assert harness.runner.runs == []
    assert isinstance(result.error, UnreachableTargetError)
    assert "api.example.com" in result.error.message


def test_auth_failure_stops_sequence(multi_config, logger):
    harness = Harness(multi_config, logger, fail_roles={Role.AUTH})

    result = harness.run()

    assert result.state == S.ABORT_DEPLOY_FAILED
    assert result.exit_code == 1
    assert harness.deployed_roles == [Role.AUTH]
    assert S.RECONCILE_DNS not in result.history
    assert harness.resolver.resolved == []


def test_api_failure_skips_web(multi_config, logger):
    harness = Harness(multi_config, logger, fail_roles={Role.API})

    result = harness.run()

    assert result.state == S.ABORT_DEPLOY_FAILED
    assert harness.deployed_roles == [Role.AUTH, Role.API]
    assert "remote output" in logger.log_path.read_text()


def test_transport_error_during_deploy_aborts(multi_config, logger):
    harness = Harness(multi_config, logger, raise_roles={Role.WEB})

    result = harness.run()

    assert result.state == S.ABORT_DEPLOY_FAILED
    assert "ssh could not be started" in result.error.context


def test_api_script_points_at_auth_server(multi_config, logger):
    harness = Harness(multi_config, logger)
    harness.run()

    scripts = dict(harness.runner.runs)
    assert "AUTHENTIK_URL=https://auth.example.com" in scripts[Role.API]
    assert "PLACEHOLDER" not in scripts[Role.API]
    assert "AUTHENTIK_URL" not in scripts[Role.WEB]


def test_completion_lists_service_urls(multi_config, logger):
    Harness(replace(multi_config, domain="example.org"), logger).run()

    log = logger.log_path.read_text()
    assert "Multi-server FKS deployment complete!" in log
    assert "https://auth.example.org" in log
    assert "https://trading.example.org" in log


# ----------------- Single-server deploy -----------------


def test_single_deploy_path(single_config, logger):
    harness = Harness(single_config, logger)

    result = harness.run()

    assert result.history == [
        S.PARSE_ARGS,
        S.VALIDATE,
        S.PREFLIGHT,
        S.PROBE,
        S.DEPLOY_SINGLE,
        S.RECONCILE_DNS,
        S.DONE,
    ]
    assert harness.deployed_roles == [Role.SINGLE]


def test_single_unreachable_aborts(single_config, logger):
    harness = Harness(single_config, logger, unreachable={"fks.example.com"})

    assert harness.run().state == S.ABORT_UNREACHABLE
    assert harness.runner.runs == []


# ----------------- DNS reconciliation -----------------


def test_missing_dns_credentials_still_succeeds(multi_config, logger, forbid_subprocess):
    harness = Harness(multi_config, logger, addresses={"auth.example.com": "100.64.0.1"})

    result = harness.run()

    assert result.exit_code == 0
    assert harness.resolver.resolved == []
    assert forbid_subprocess == []
    assert "Cloudflare credentials not available" in logger.log_path.read_text()


def test_dns_reconciled_with_resolved_addresses(multi_config, logger, dns_settings, monkeypatch):
    harness = Harness(
        multi_config,
        logger,
        dns=dns_settings,
        addresses={"auth.example.com": "100.64.0.1", "api.example.com": "100.64.0.2"},
    )
    calls = []
    monkeypatch.setattr(harness.reconciler, "reconcile", lambda topology, addresses: calls.append(addresses))

    result = harness.run()

    assert result.exit_code == 0
    assert harness.resolver.resolved == ["auth.example.com", "api.example.com", "web.example.com"]
    resolved = {a.target.role: a.address for a in calls[0]}
    assert resolved == {Role.AUTH: "100.64.0.1", Role.API: "100.64.0.2", Role.WEB: None}


def test_update_dns_skips_probes_and_deploys(single_config, logger, dns_settings, monkeypatch):
    config = replace(single_config, command="update-dns")
    harness = Harness(config, logger, dns=dns_settings, addresses={"fks.example.com": "100.64.0.8"})
    monkeypatch.setattr(harness.reconciler, "reconcile", lambda topology, addresses: None)

    result = harness.run()

    assert result.history == [S.PARSE_ARGS, S.VALIDATE, S.PREFLIGHT, S.RECONCILE_DNS, S.DONE]
    assert harness.prober.probed == []
    assert harness.runner.runs == []


# ----------------- Health check -----------------


def test_unhealthy_single_server_still_exits_zero(single_config, logger):
    target = DeploymentTarget("fks.example.com", "fks_user", Role.SINGLE)
    results = [
        HealthResult(target, "API", 8000, False),
        HealthResult(target, "Web", 3000, False),
        HealthResult(target, "Auth", 9000, False),
    ]
    harness = Harness(replace(single_config, command="health-check"), logger, health_results=results)

    result = harness.run()

    assert result.state == S.DONE
    assert result.exit_code == 0
    assert result.history == [S.PARSE_ARGS, S.VALIDATE, S.PREFLIGHT, S.HEALTH_CHECK, S.DONE]
    assert len(result.health_results) == 3
    assert harness.runner.runs == []
    assert harness.prober.probed == []
    assert "API on fks.example.com:8000 health check failed" in logger.log_path.read_text()


def test_transitions_are_logged(single_config, logger):
    Harness(replace(single_config, command="health-check"), logger).run()

    assert "Step: PREFLIGHT -> HEALTH_CHECK" in logger.log_path.read_text()
