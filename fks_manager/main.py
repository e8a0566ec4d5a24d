#!/usr/bin/env python3
"""FKS Service Manager - Main entry point"""

import sys

from rich.console import Console

# Rich-Click: CLI help with colors
import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

click.rich_click.STYLE_COMMAND = "bold magenta"
click.rich_click.STYLE_OPTION = "bold cyan"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_METAVAR = "bold yellow"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.STYLE_EPILOG_TEXT = "dim"

click.rich_click.ALIGN_OPTIONS_PANEL = "left"
click.rich_click.ALIGN_ERRORS_PANEL = "left"

from fks_manager import __version__
from fks_manager.commands import deploy, health_check, update_dns

console = Console()

EPILOG = """
Environment Variables:
  CLOUDFLARE_API_TOKEN   Cloudflare API token (for DNS updates)
  CLOUDFLARE_ZONE_ID     Cloudflare zone ID (for DNS updates)
  FKS_DNS_UPDATER        DNS updater script path
  FKS_LOG_DIR            Log directory (default: ~/.fks/logs)
"""


@click.group(epilog=EPILOG, invoke_without_command=True, no_args_is_help=False)
@click.version_option(version=__version__, prog_name="fks-service-manager")
@click.pass_context
def cli(ctx):
    """
    FKS Service Manager - Multi-Server Deployment Tool

    Deploys the FKS trading platform to a single server or across
    dedicated auth, api and web servers on the Tailscale network.
    """
    if ctx.invoked_subcommand is None:
        # A missing command is a usage error: show help, exit 1
        click.echo(ctx.get_help())
        raise SystemExit(1)


cli.add_command(deploy)
cli.add_command(health_check)
cli.add_command(update_dns)


def main():
    """Entry point: usage errors exit 1 like every other validation failure."""
    from click.exceptions import Abort, ClickException, UsageError

    try:
        cli.main(standalone_mode=False)
    except UsageError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e.format_message()}\n")
        command_name = e.ctx.command.name if e.ctx and e.ctx.command else None
        hint = f"fks-service-manager {command_name} --help" if command_name else "fks-service-manager --help"
        console.print(f"[dim]Run[/dim] [cyan]{hint}[/cyan] [dim]for usage information[/dim]\n")
        sys.exit(1)
    except ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except Abort:
        console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
