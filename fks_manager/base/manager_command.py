"""
Manager Command Base Class

Base class for commands that drive the deployment orchestrator.
"""

from fks_manager.orchestrator import Orchestrator, OrchestratorResult
from .base_command import BaseCommand


class ManagerCommand(BaseCommand):
    """
    Base class for deploy, health-check and update-dns.

    Provides:
    - Header with the parsed topology options
    - Orchestrator wiring from the immutable config
    - Exit code from the orchestrator's final state
    """

    title = "FKS Service Manager"

    def show_command_header(self) -> None:
        config = self.config
        self.show_header(
            title=self.title,
            details={
                "Mode": config.mode,
                "Server": config.server,
                "Auth server": config.auth_server,
                "API server": config.api_server,
                "Web server": config.web_server,
                "User": config.user,
            },
        )

    def build_orchestrator(self) -> Orchestrator:
        return Orchestrator.from_config(self.config, self.logger)

    def run_orchestrator(self) -> OrchestratorResult:
        """Initialize logging and drive the state machine."""
        self.init_logger(self.config.command)
        return self.build_orchestrator().run()

    def finish(self, result: OrchestratorResult) -> None:
        """
        Print the log location and exit non-zero on a failure state.

        Raises:
            SystemExit: If the orchestrator aborted
        """
        self.print_log_location()
        if not result.is_success:
            raise SystemExit(result.exit_code)
