"""
Deploy Command

Deploy FKS services to one server or across auth, api and web servers.
"""

import click

from fks_manager.base import ManagerCommand
from fks_manager.orchestrator import COMMAND_DEPLOY
from .options import build_config, target_options


class DeployCommand(ManagerCommand):
    """
    Deploy FKS services.

    Features:
    - Connectivity gate before any remote change
    - Ordered auth -> api -> web rollout
    - Best-effort DNS update afterwards
    """

    title = "Deploy"

    def execute(self) -> None:
        """Execute deploy command."""
        self.show_command_header()
        result = self.run_orchestrator()
        self.finish(result)


@click.command()
@target_options
def deploy(**options):
    """
    Deploy FKS services

    Examples:
        # Single server deployment
        fks-service-manager deploy --mode single --server fks.7gram.xyz

        # Multi-server deployment
        fks-service-manager deploy --mode multi \\
            --auth-server auth.7gram.xyz \\
            --api-server api.7gram.xyz \\
            --web-server web.7gram.xyz
    """
    config = build_config(COMMAND_DEPLOY, **options)
    DeployCommand(config).run()
