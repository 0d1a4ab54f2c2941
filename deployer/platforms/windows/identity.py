"""Package identity defaults for MSIX and the setup installer."""

from __future__ import annotations

from deployer.packaging.msix import (
    DEFAULT_BACKGROUND,
    DEFAULT_LOGO,
    DEFAULT_SQUARE44_LOGO,
    DEFAULT_SQUARE150_LOGO,
    MsixManifest,
    normalize_msix_version,
)

from .options import WindowsDeploymentOptions

__all__ = ["sanitize", "default_identity", "build_manifest"]


def sanitize(value: str) -> str:
    """Letters and digits only, lower-cased; ``"app"`` if nothing is left."""
    cleaned = "".join(ch for ch in value if ch.isalnum())
    return cleaned.lower() if cleaned else "app"


def default_identity(package_name: str) -> str:
    sanitized = sanitize(package_name)
    if "." in sanitized:
        return sanitized
    return f"com.example.{sanitized}"


def build_manifest(
    options: WindowsDeploymentOptions, executable: str, architecture: str
) -> MsixManifest:
    msix = options.msix
    display_name = msix.display_name or options.package_name
    return MsixManifest(
        identity_name=msix.identity_name or default_identity(options.package_name),
        publisher=msix.publisher or f"CN={display_name}",
        version=normalize_msix_version(options.version),
        display_name=display_name,
        publisher_display_name=msix.publisher_display_name or display_name,
        app_id=msix.app_id or sanitize(options.package_name),
        executable=executable,
        description=msix.description or display_name,
        architecture=architecture,
        logo=msix.logo or DEFAULT_LOGO,
        square150x150_logo=msix.square150x150_logo or DEFAULT_SQUARE150_LOGO,
        square44x44_logo=msix.square44x44_logo or DEFAULT_SQUARE44_LOGO,
        background_color=msix.background_color or DEFAULT_BACKGROUND,
        internet_client=True if msix.internet_client is None else msix.internet_client,
        run_full_trust=True if msix.run_full_trust is None else msix.run_full_trust,
    )
