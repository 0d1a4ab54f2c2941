"""What a release contains: version, identity, and per-platform settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Flag, auto
from pathlib import Path

from deployer.packaging.metadata import LinuxMetadata
from deployer.platforms.android.options import AndroidDeploymentOptions
from deployer.platforms.windows.options import WindowsDeploymentOptions

__all__ = [
    "TargetPlatform",
    "PACKAGING_ORDER",
    "ApplicationInfo",
    "WindowsPlatformConfig",
    "LinuxPlatformConfig",
    "MacOsPlatformConfig",
    "AndroidPlatformConfig",
    "WebAssemblyPlatformConfig",
    "ReleaseConfiguration",
]


class TargetPlatform(Flag):
    NONE = 0
    WINDOWS = auto()
    LINUX = auto()
    MACOS = auto()
    ANDROID = auto()
    WEBASSEMBLY = auto()

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES.get(self, self.name or "None")


_DISPLAY_NAMES = {
    TargetPlatform.WINDOWS: "Windows",
    TargetPlatform.LINUX: "Linux",
    TargetPlatform.MACOS: "macOS",
    TargetPlatform.ANDROID: "Android",
    TargetPlatform.WEBASSEMBLY: "WebAssembly",
}

# Platforms are always packaged in this order.
PACKAGING_ORDER: tuple[TargetPlatform, ...] = (
    TargetPlatform.WINDOWS,
    TargetPlatform.LINUX,
    TargetPlatform.MACOS,
    TargetPlatform.ANDROID,
    TargetPlatform.WEBASSEMBLY,
)


@dataclass(frozen=True, slots=True)
class ApplicationInfo:
    package_name: str = ""
    app_id: str = ""
    app_name: str = ""


@dataclass(frozen=True, slots=True)
class WindowsPlatformConfig:
    project: Path
    options: WindowsDeploymentOptions


@dataclass(frozen=True, slots=True)
class LinuxPlatformConfig:
    project: Path
    metadata: LinuxMetadata


@dataclass(frozen=True, slots=True)
class MacOsPlatformConfig:
    project: Path


@dataclass(frozen=True, slots=True)
class AndroidPlatformConfig:
    project: Path
    options: AndroidDeploymentOptions


@dataclass(frozen=True, slots=True)
class WebAssemblyPlatformConfig:
    project: Path


@dataclass(frozen=True, slots=True)
class ReleaseConfiguration:
    """Immutable release description produced by ``ReleaseBuilder.build()``."""

    version: str
    application: ApplicationInfo = field(default_factory=ApplicationInfo)
    platforms: TargetPlatform = TargetPlatform.NONE
    windows: WindowsPlatformConfig | None = None
    linux: LinuxPlatformConfig | None = None
    macos: MacOsPlatformConfig | None = None
    android: AndroidPlatformConfig | None = None
    webassembly: WebAssemblyPlatformConfig | None = None

    def enabled(self) -> list[TargetPlatform]:
        """Requested platforms in packaging order."""
        return [p for p in PACKAGING_ORDER if p in self.platforms]

    def project_for(self, platform: TargetPlatform) -> Path | None:
        config = {
            TargetPlatform.WINDOWS: self.windows,
            TargetPlatform.LINUX: self.linux,
            TargetPlatform.MACOS: self.macos,
            TargetPlatform.ANDROID: self.android,
            TargetPlatform.WEBASSEMBLY: self.webassembly,
        }.get(platform)
        return config.project if config is not None else None
