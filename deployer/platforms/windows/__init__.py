"""Windows deployment."""

from .deployment import WindowsDeployment
from .icon import WindowsIcon, WindowsIconResolver, png_to_ico
from .identity import build_manifest, default_identity, sanitize
from .options import MsixOptions, WindowsDeploymentOptions

__all__ = [
    "WindowsDeployment",
    "WindowsIcon",
    "WindowsIconResolver",
    "png_to_ico",
    "build_manifest",
    "default_identity",
    "sanitize",
    "MsixOptions",
    "WindowsDeploymentOptions",
]
