"""
Update DNS Command

Resolve mesh addresses and push them to Cloudflare, without deploying.
"""

import click

from fks_manager.base import ManagerCommand
from fks_manager.orchestrator import COMMAND_UPDATE_DNS
from .options import build_config, target_options


class UpdateDnsCommand(ManagerCommand):
    """Update DNS records only."""

    title = "Update DNS"

    def execute(self) -> None:
        """Execute update-dns command."""
        self.show_command_header()
        result = self.run_orchestrator()
        self.finish(result)


@click.command(name="update-dns")
@target_options
def update_dns(**options):
    """
    Update DNS records only

    Needs CLOUDFLARE_API_TOKEN and CLOUDFLARE_ZONE_ID; without them the
    command logs a warning and exits successfully.

    Examples:
        fks-service-manager update-dns --mode single --server fks.7gram.xyz
    """
    config = build_config(COMMAND_UPDATE_DNS, **options)
    UpdateDnsCommand(config).run()
