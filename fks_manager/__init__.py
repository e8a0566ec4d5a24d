"""FKS Service Manager - multi-server deployment for the FKS trading platform."""

__version__ = "1.0.0"
