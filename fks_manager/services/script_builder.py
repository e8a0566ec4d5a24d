"""
Remote deploy script builder.

Scripts are rendered from a Jinja2 template. Every value that reaches the
shell goes through the shell_quote filter, so hostnames are never spliced
into the script unquoted.
"""

import re
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from fks_manager.constants import (
    API_COMPOSE_FILE,
    API_GRACE_SECONDS,
    AUTH_COMPOSE_FILE,
    AUTH_GRACE_SECONDS,
    DEFAULT_SERVICE_DIR,
    ENDPOINT_PROBE_TIMEOUT,
    SINGLE_GRACE_SECONDS,
    WEB_COMPOSE_FILE,
    WEB_GRACE_SECONDS,
)
from fks_manager.models.deployment import Role

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
DEPLOY_TEMPLATE = "deploy.sh.j2"

ENV_NAME_PATTERN = re.compile(r"^[A-Z_][A-Z0-9_]*$")


@dataclass(frozen=True)
class Endpoint:
    """Local HTTP endpoint probed after startup (diagnostic only)."""

    name: str
    url: str


@dataclass(frozen=True)
class RoleProfile:
    """What a role's deploy script pulls, starts, waits for and probes."""

    role: Role
    title: str
    compose_file: Optional[str]
    grace_seconds: int
    endpoints: tuple[Endpoint, ...]


ROLE_PROFILES: Dict[Role, RoleProfile] = {
    Role.AUTH: RoleProfile(
        role=Role.AUTH,
        title="Auth Server (Authentik + Nginx)",
        compose_file=AUTH_COMPOSE_FILE,
        grace_seconds=AUTH_GRACE_SECONDS,
        endpoints=(Endpoint("Authentik", "http://localhost:9000/api/v3/ping/"),),
    ),
    Role.API: RoleProfile(
        role=Role.API,
        title="API Server (API + Workers + Data)",
        compose_file=API_COMPOSE_FILE,
        grace_seconds=API_GRACE_SECONDS,
        endpoints=(
            Endpoint("API", "http://localhost:8000/health"),
            Endpoint("Data service", "http://localhost:9001/health"),
        ),
    ),
    Role.WEB: RoleProfile(
        role=Role.WEB,
        title="Web Server (React + Nginx)",
        compose_file=WEB_COMPOSE_FILE,
        grace_seconds=WEB_GRACE_SECONDS,
        endpoints=(Endpoint("Web server", "http://localhost/"),),
    ),
    Role.SINGLE: RoleProfile(
        role=Role.SINGLE,
        title="FKS Single Server (All Services)",
        compose_file=None,
        grace_seconds=SINGLE_GRACE_SECONDS,
        endpoints=(
            Endpoint("API", "http://localhost:8000/health"),
            Endpoint("Web frontend", "http://localhost:3000/"),
            Endpoint("Authentik", "http://localhost:9000/api/v3/ping/"),
        ),
    ),
}


def shell_quote(value) -> str:
    """Jinja filter: quote a value for safe use as one shell word."""
    return shlex.quote(str(value))


class ScriptBuilder:
    """Renders per-role deploy scripts."""

    def __init__(
        self,
        service_dir: str = DEFAULT_SERVICE_DIR,
        templates_dir: Path = TEMPLATES_DIR,
    ):
        self.service_dir = service_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self.env.filters["shell_quote"] = shell_quote

    def build(
        self, role: Role, environment: Optional[Dict[str, str]] = None
    ) -> str:
        """
        Render the deploy script for a role.

        Args:
            role: Role whose profile to use
            environment: Variables exported before containers start

        Returns:
            Script body

        Raises:
            ValueError: If an environment variable name is not a valid identifier
        """
        environment = environment or {}
        for name in environment:
            if not ENV_NAME_PATTERN.match(name):
                raise ValueError(f"Invalid environment variable name: {name!r}")

        profile = ROLE_PROFILES[role]
        compose_args = ""
        if profile.compose_file:
            compose_args = f" -f {shell_quote(profile.compose_file)}"

        template = self.env.get_template(DEPLOY_TEMPLATE)
        return template.render(
            profile=profile,
            service_dir=self.service_dir,
            environment=environment,
            compose_args=compose_args,
            probe_timeout=ENDPOINT_PROBE_TIMEOUT,
        )

    def build_auth(self) -> str:
        return self.build(Role.AUTH)

    def build_api(self, auth_server: Optional[str] = None) -> str:
        """API script; exports AUTHENTIK_URL when the auth host is known."""
        environment = {}
        if auth_server:
            environment["AUTHENTIK_URL"] = f"https://{auth_server}"
        return self.build(Role.API, environment)

    def build_web(self) -> str:
        return self.build(Role.WEB)

    def build_single(self) -> str:
        return self.build(Role.SINGLE)
