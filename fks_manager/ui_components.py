"""
FKS Service Manager - UI Components
Standardized headers and summary tables
"""

from typing import Iterable

from rich.console import Console
from rich.table import Table

from fks_manager.models.results import HealthResult

LOGO = "fks"

# Color scheme
BRAND_COLOR = "magenta"
SUCCESS_COLOR = "green"
WARNING_COLOR = "yellow"


def show_header(
    title: str,
    subtitle: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized command header.

    Args:
        title: Main title (e.g., "Deploy", "Health Check")
        subtitle: Optional subtitle line
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Deploy",
            details={"Mode": "multi", "User": "fks_user"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold {BRAND_COLOR}]{LOGO}[/bold {BRAND_COLOR}] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{title}[/bold white]")

    if subtitle:
        console.print(f"{prefix} [dim]{subtitle}[/dim]")

    if details:
        for key, value in details.items():
            if value:
                console.print(f"{prefix} {key}: [cyan]{value}[/cyan]")

    console.print()


def health_table(results: Iterable[HealthResult]) -> Table:
    """Summary table for health-check results."""
    table = Table(title="Health Report", title_justify="left", padding=(0, 1))
    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Host")
    table.add_column("Service")
    table.add_column("Port", justify="right")
    table.add_column("Status")

    for result in results:
        status = (
            f"[{SUCCESS_COLOR}]healthy[/{SUCCESS_COLOR}]"
            if result.healthy
            else f"[{WARNING_COLOR}]unhealthy[/{WARNING_COLOR}]"
        )
        table.add_row(
            result.target.role.value,
            result.target.hostname,
            result.service_name,
            str(result.port),
            status,
        )
    return table
