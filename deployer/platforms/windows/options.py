from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["MsixOptions", "WindowsDeploymentOptions"]


@dataclass(frozen=True, slots=True)
class MsixOptions:
    """Manifest overrides. Unset fields are derived from the package name."""

    identity_name: str | None = None
    publisher: str | None = None
    publisher_display_name: str | None = None
    display_name: str | None = None
    description: str | None = None
    background_color: str | None = None
    logo: str | None = None
    square150x150_logo: str | None = None
    square44x44_logo: str | None = None
    internet_client: bool | None = None
    run_full_trust: bool | None = None
    app_id: str | None = None


@dataclass(frozen=True, slots=True)
class WindowsDeploymentOptions:
    package_name: str
    version: str
    msix: MsixOptions = field(default_factory=MsixOptions)
