"""
Logging system for the FKS service manager
Writes every event to a per-run log file and echoes tagged lines to the console
"""

import re
from pathlib import Path
from datetime import datetime
from typing import Optional, TextIO
from rich.console import Console
from rich.markup import escape

from fks_manager.constants import LOG_DATE_FORMAT, LOG_DATETIME_FORMAT

console = Console()

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

LEVEL_STYLES = {
    "INFO": "blue",
    "SUCCESS": "green",
    "WARN": "yellow",
    "ERROR": "red",
    "FKS": "magenta",
    "DEBUG": "dim",
}


class DeployLogger:
    """
    Manages logging for service manager operations
    - Writes all output to log files in real-time
    - Shows level-tagged, timestamped lines in the console
    - Remote output reaches the console only in verbose mode
    """

    def __init__(
        self,
        operation: str,
        log_dir: Path,
        verbose: bool = False,
        quiet: bool = False,
    ):
        """
        Initialize logger

        Args:
            operation: Operation name (e.g., 'deploy', 'health-check')
            log_dir: Root directory for log files
            verbose: If True, show command output in console
            quiet: If True, write to the log file only (JSON output mode)
        """
        self.operation = operation
        self.verbose = verbose
        self.quiet = quiet
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        # Structure: {log_dir}/{date}/{time}_{operation}.log
        now = datetime.now()
        date_dir = Path(log_dir).expanduser() / now.strftime(LOG_DATE_FORMAT)
        date_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = date_dir / f"{now.strftime('%H-%M-%S')}_{operation}.log"

        # Line buffered for real-time tailing
        self.log_file = open(self.log_path, "w", buffering=1)

        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
FKS Service Manager Log
{"=" * 80}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and console

        Args:
            message: Message to log
            level: Log level (INFO, SUCCESS, WARN, ERROR, FKS, DEBUG)
        """
        timestamp = datetime.now().strftime(LOG_DATETIME_FORMAT)

        if self.log_file:
            self.log_file.write(f"[{timestamp}] [{level}] {message}\n")
            self.log_file.flush()

        if self.quiet or (level == "DEBUG" and not self.verbose):
            return

        style = LEVEL_STYLES.get(level, "white")
        console.print(
            f"[{style}]\\[{level}][/{style}] [dim]\\[{timestamp}][/dim] {escape(message)}"
        )

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout", show: bool = False):
        """
        Log command output

        Always written to the log file; echoed to the console when verbose
        or when show is set (e.g. output of a failed deploy step).

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
            show: Force console echo
        """
        if not output:
            return

        clean_output = ANSI_ESCAPE.sub("", output)

        if self.log_file:
            for line in clean_output.splitlines():
                self.log_file.write(f"  [{stream}] {line}\n")
            self.log_file.flush()

        if (self.verbose or show) and not self.quiet:
            for line in clean_output.splitlines():
                console.print(f"  [dim]{escape(line)}[/dim]")

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True

        # Clear markers for grepping
        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"

        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

        if self.quiet:
            return

        timestamp = datetime.now().strftime(LOG_DATETIME_FORMAT)
        console.print(
            f"[red]\\[ERROR][/red] [dim]\\[{timestamp}][/dim] [bold red]{escape(error)}[/bold red]"
        )
        if context:
            console.print(f"  [color(208)]{escape(context)}[/color(208)]")

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

    def fks(self, message: str):
        """Log a banner-level message"""
        self.log(message, "FKS")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "SUCCESS")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARN")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        """Context manager exit"""
        if exc_type is not None and exc_type != SystemExit:
            # SystemExit is the normal way commands report their exit code
            self.log_error(
                str(exc_val) if exc_val else "Operation failed",
                context=f"{exc_type.__name__}",
            )
        self.close()
        return False
