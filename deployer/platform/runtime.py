"""Runtime identifiers and per-format architecture names."""

from __future__ import annotations

from dataclasses import dataclass

from .detection import Arch, detect_arch

__all__ = [
    "RuntimeTarget",
    "ANDROID_RID",
    "WASM_RID",
    "windows_target",
    "linux_target",
    "macos_target",
    "host_linux_target",
    "WINDOWS_ARCHES",
    "MACOS_ARCHES",
]

ANDROID_RID = "android-arm64"
WASM_RID = "browser-wasm"

# Build order matters: ARM64 first, as the artifacts are listed that way.
WINDOWS_ARCHES: tuple[Arch, ...] = (Arch.ARM64, Arch.X64)
MACOS_ARCHES: tuple[Arch, ...] = (Arch.ARM64, Arch.X64)


@dataclass(frozen=True, slots=True)
class RuntimeTarget:
    """One architecture of one OS.

    Attributes:
        arch: CPU architecture.
        rid: .NET runtime identifier (``linux-x64``).
        suffix: Arch part of artifact file names (``x64``, ``x86_64``).
    """

    arch: Arch
    rid: str
    suffix: str

    @property
    def label(self) -> str:
        return self.arch.label

    @property
    def deb_arch(self) -> str:
        return "arm64" if self.arch == Arch.ARM64 else "amd64"

    @property
    def rpm_arch(self) -> str:
        return "aarch64" if self.arch == Arch.ARM64 else "x86_64"

    @property
    def appimage_arch(self) -> str:
        return "aarch64" if self.arch == Arch.ARM64 else "x86_64"

    @property
    def msix_arch(self) -> str:
        return "arm64" if self.arch == Arch.ARM64 else "x64"


_WINDOWS = {
    Arch.ARM64: RuntimeTarget(Arch.ARM64, "win-arm64", "arm64"),
    Arch.X64: RuntimeTarget(Arch.X64, "win-x64", "x64"),
}

_LINUX = {
    Arch.ARM64: RuntimeTarget(Arch.ARM64, "linux-arm64", "arm64"),
    Arch.X64: RuntimeTarget(Arch.X64, "linux-x64", "x86_64"),
}

_MACOS = {
    Arch.ARM64: RuntimeTarget(Arch.ARM64, "osx-arm64", "arm64"),
    Arch.X64: RuntimeTarget(Arch.X64, "osx-x64", "x64"),
}


def windows_target(arch: Arch) -> RuntimeTarget:
    return _WINDOWS[arch]


def linux_target(arch: Arch) -> RuntimeTarget:
    return _LINUX[arch]


def macos_target(arch: Arch) -> RuntimeTarget:
    return _MACOS[arch]


def host_linux_target() -> RuntimeTarget:
    """ARM64 on ARM64 hosts, X64 everywhere else."""
    return _LINUX[Arch.ARM64 if detect_arch() == Arch.ARM64 else Arch.X64]
