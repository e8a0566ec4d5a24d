"""
FKS Service Manager Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
"""

from typing import Optional


class FKSError(Exception):
    """Base exception for all FKS service manager errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(FKSError):
    """Raised when configuration is invalid or missing."""

    pass


class ValidationError(FKSError):
    """Raised when CLI arguments violate the topology rules."""

    pass


class ConnectivityError(FKSError):
    """Raised when a deployment target cannot be reached."""

    pass


class DeploymentError(FKSError):
    """Raised when a remote deploy script fails."""

    pass


class SSHError(FKSError):
    """Raised when SSH/SCP transport fails (timeout, missing binary)."""

    pass


class DNSError(FKSError):
    """Raised when the DNS updater helper fails."""

    pass


class MissingToolsError(ConfigurationError):
    """Raised when required local tools are not installed."""

    def __init__(self, missing_tools: list[str]):
        self.missing_tools = missing_tools
        message = f"Missing required dependencies: {', '.join(missing_tools)}"
        context = "Install them and make sure they are on PATH"
        super().__init__(message, context)


class UnreachableTargetError(ConnectivityError):
    """Raised when one or more deployment targets fail the SSH probe."""

    def __init__(self, hostnames: list[str]):
        self.hostnames = hostnames
        message = f"Cannot connect to: {', '.join(hostnames)}"
        context = "Check the mesh network and that SSH keys are provisioned"
        super().__init__(message, context)
