from fks_manager.exceptions import SSHError
from fks_manager.models import SSHResult
from fks_manager.services import HealthChecker

from conftest import FakeSSHService


def test_multi_checks_one_port_per_role(multi_config):
    checks = HealthChecker(FakeSSHService()).checks_for(multi_config.build_topology())

    assert [(t.hostname, name, port) for t, name, port in checks] == [
        ("auth.example.com", "Auth", 9000),
        ("api.example.com", "API", 8000),
        ("web.example.com", "Web", 80),
    ]


def test_single_checks_three_ports_on_one_host(single_config):
    checks = HealthChecker(FakeSSHService()).checks_for(single_config.build_topology())

    assert [(t.hostname, name, port) for t, name, port in checks] == [
        ("fks.example.com", "API", 8000),
        ("fks.example.com", "Web", 3000),
        ("fks.example.com", "Auth", 9000),
    ]


def test_refusing_ports_report_unhealthy(single_config):
    ssh = FakeSSHService(lambda host, command: SSHResult(returncode=7, host=host))
    results = HealthChecker(ssh).check_all(single_config.build_topology())

    assert len(results) == 3
    assert not any(r.healthy for r in results)


def test_transport_errors_report_unhealthy(multi_config):
    ssh = FakeSSHService(lambda host, command: SSHError("timed out"))
    results = HealthChecker(ssh).check_all(multi_config.build_topology())

    assert [r.healthy for r in results] == [False, False, False]


def test_probe_is_read_only_curl(multi_config):
    ssh = FakeSSHService()
    results = HealthChecker(ssh).check_all(multi_config.build_topology())

    assert all(r.healthy for r in results)
    for _, _, command, user in ssh.calls:
        assert command.startswith("curl -f")
        assert "docker" not in command
        assert user == "fks_user"
    assert "http://localhost:9000/health" in ssh.calls[0][2]


def test_health_result_serializes_flat(multi_config):
    ssh = FakeSSHService()
    result = HealthChecker(ssh).check_all(multi_config.build_topology())[1]

    assert result.to_dict() == {
        "role": "api",
        "host": "api.example.com",
        "service_name": "API",
        "port": 8000,
        "healthy": True,
    }
