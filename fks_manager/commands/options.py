"""Shared click options and config assembly for manager commands."""

from typing import Optional

import click

from fks_manager.constants import DEFAULT_DOMAIN, DEFAULT_SERVICE_DIR, DEFAULT_SSH_USER
from fks_manager.models.config import ManagerConfig
from fks_manager.utils import build_dns_settings, load_env, resolve_log_dir

TARGET_OPTIONS = [
    # Validated by the orchestrator so bad values exit 1 like other validation errors
    click.option(
        "--mode",
        metavar="single|multi",
        help="Deployment mode: single or multi (required)",
    ),
    click.option("--server", metavar="HOST", help="Server hostname (single mode)"),
    click.option("--auth-server", metavar="HOST", help="Auth server hostname (multi mode)"),
    click.option("--api-server", metavar="HOST", help="API server hostname (multi mode)"),
    click.option("--web-server", metavar="HOST", help="Web server hostname (multi mode)"),
    click.option("--user", default=DEFAULT_SSH_USER, show_default=True, help="SSH user"),
    click.option("--ssh-key", metavar="PATH", help="SSH identity file"),
    click.option("--domain", default=DEFAULT_DOMAIN, show_default=True, help="Public domain"),
    click.option(
        "--service-dir",
        default=DEFAULT_SERVICE_DIR,
        show_default=True,
        help="Service checkout directory on the servers",
    ),
    click.option(
        "--dns-updater",
        metavar="PATH",
        help="DNS updater script (default: $FKS_DNS_UPDATER or scripts/dns/cloudflare-updater.sh)",
    ),
    click.option("--verbose", "-v", is_flag=True, help="Show all remote output"),
]


def target_options(func):
    """Attach the topology and connection options to a command."""
    for option in reversed(TARGET_OPTIONS):
        func = option(func)
    return func


def build_config(
    command: str,
    mode: Optional[str] = None,
    server: Optional[str] = None,
    auth_server: Optional[str] = None,
    api_server: Optional[str] = None,
    web_server: Optional[str] = None,
    user: str = DEFAULT_SSH_USER,
    ssh_key: Optional[str] = None,
    domain: str = DEFAULT_DOMAIN,
    service_dir: str = DEFAULT_SERVICE_DIR,
    dns_updater: Optional[str] = None,
    verbose: bool = False,
) -> ManagerConfig:
    """Build the immutable config once from CLI values and the environment."""
    env = load_env()
    return ManagerConfig(
        command=command,
        mode=mode,
        server=server,
        auth_server=auth_server,
        api_server=api_server,
        web_server=web_server,
        user=user,
        ssh_key=ssh_key,
        service_dir=service_dir,
        domain=domain,
        dns=build_dns_settings(env, dns_updater),
        log_dir=resolve_log_dir(env),
        verbose=verbose,
    )
