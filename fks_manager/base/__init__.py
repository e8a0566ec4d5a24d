"""
FKS Service Manager Base Command Classes

Abstract base classes for consistent command structure.
"""

from .base_command import BaseCommand
from .manager_command import ManagerCommand

__all__ = [
    "BaseCommand",
    "ManagerCommand",
]
