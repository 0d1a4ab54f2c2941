"""macOS deployment."""

from .deployment import MacOsDeployment
from .options import MacOsDeploymentOptions, sanitize_app_name

__all__ = ["MacOsDeployment", "MacOsDeploymentOptions", "sanitize_app_name"]
