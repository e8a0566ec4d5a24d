"""FKS Service Manager CLI commands."""

from .deploy import deploy
from .health_check import health_check
from .update_dns import update_dns

__all__ = [
    "deploy",
    "health_check",
    "update_dns",
]
