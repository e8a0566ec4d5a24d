"""
Health Check Command

Read-only probes of each server's well-known ports. Unhealthy services are
reported, never treated as a command failure.
"""

import click

from fks_manager.base import ManagerCommand
from fks_manager.orchestrator import COMMAND_HEALTH_CHECK
from fks_manager.ui_components import health_table
from .options import build_config, target_options


class HealthCheckCommand(ManagerCommand):
    """Check service health on every target."""

    title = "Health Check"

    def execute(self) -> None:
        """Execute health-check command."""
        self.show_command_header()
        result = self.run_orchestrator()

        if self.json_output:
            if result.is_success:
                self.output_json([r.to_dict() for r in result.health_results])
            else:
                self.output_json_error(
                    result.error.message if result.error else result.state.name,
                    details={"state": result.state.name},
                    exit_code=result.exit_code,
                )
            return

        if result.health_results:
            self.console.print()
            self.console.print(health_table(result.health_results))
        self.finish(result)


@click.command(name="health-check")
@target_options
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def health_check(json_output, **options):
    """
    Check FKS service health

    Examples:
        fks-service-manager health-check --mode single --server fks.7gram.xyz

        fks-service-manager health-check --mode multi \\
            --auth-server auth.7gram.xyz \\
            --api-server api.7gram.xyz \\
            --web-server web.7gram.xyz --json
    """
    config = build_config(COMMAND_HEALTH_CHECK, **options)
    HealthCheckCommand(config, json_output=json_output).run()
