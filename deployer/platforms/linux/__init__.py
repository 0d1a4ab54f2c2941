"""Linux deployment."""

from .deployment import LinuxDeployment

__all__ = ["LinuxDeployment"]
