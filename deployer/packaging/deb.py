"""Debian package builder (``dpkg-deb``)."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from deployer.core.errors import DeployError
from deployer.core.result import Err, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.files import directory_size
from deployer.platform.process import Runner, run
from deployer.resources.byte_source import NamedByteSource
from deployer.resources.container import DirectoryContainer

from .base import icon_png, process_failure, spool_output, staging, write_script, write_text
from .desktop import render_desktop_entry
from .metadata import PackageMetadata

__all__ = ["DebBuilder", "DpkgDeb", "render_control", "deb_version"]


class DebBuilder(Protocol):
    def build(
        self, container: DirectoryContainer, metadata: PackageMetadata
    ) -> Result[NamedByteSource, DeployError]: ...


def deb_version(version: str) -> str:
    """Debian versions must start with a digit; ``-`` would split off a revision."""
    cleaned = version.strip().lstrip("vV").replace("-", "~")
    if not cleaned or not cleaned[0].isdigit():
        return f"0~{cleaned}" if cleaned else "0"
    return cleaned


def _package_name(name: str) -> str:
    lowered = "".join(ch for ch in name.lower() if ch.isalnum() or ch in "+-.")
    return lowered or "app"


def render_control(metadata: PackageMetadata, *, installed_size_kb: int = 0) -> str:
    lines = [
        f"Package: {_package_name(metadata.package_name)}",
        f"Version: {deb_version(metadata.version)}",
        "Section: utils",
        "Priority: optional",
        f"Architecture: {metadata.target.deb_arch}",
        f"Maintainer: {metadata.app_name} <noreply@localhost>",
    ]
    if installed_size_kb:
        lines.append(f"Installed-Size: {installed_size_kb}")
    if metadata.homepage:
        lines.append(f"Homepage: {metadata.homepage}")
    lines.append(f"Description: {metadata.summary}")
    if metadata.description.strip() != metadata.summary.strip():
        # Extended description: one leading space per line, "." for blanks.
        for line in metadata.description.strip().splitlines():
            lines.append(f" {line.strip() or '.'}")
    return "\n".join(lines) + "\n"


class DpkgDeb:
    """Stages ``/opt/<package>`` plus launcher and desktop entry."""

    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        runner: Runner = run,
        tool: str = "dpkg-deb",
        keep_staging: bool = False,
    ) -> None:
        self._console = console
        self._runner = runner
        self._tool = tool
        self._keep = keep_staging

    def build(
        self, container: DirectoryContainer, metadata: PackageMetadata
    ) -> Result[NamedByteSource, DeployError]:
        package = metadata.package_name
        with staging("dp-deb", self._console, keep=self._keep) as work:
            root = work / "root"
            copied = container.write_to(root / "opt" / package)
            if isinstance(copied, Err):
                return copied
            try:
                self._stage(container, metadata, root)
            except OSError as e:
                return Err(DeployError("io", f"Failed to stage Debian package: {e}"))

            output = work / f"{package}.deb"
            cmd = [self._tool, "--build", "--root-owner-group", str(root), str(output)]
            result = self._runner(cmd, work)
            if isinstance(result, Err):
                return process_failure(self._tool, result.error)
            return spool_output(output)

    def _stage(
        self, container: DirectoryContainer, metadata: PackageMetadata, root: Path
    ) -> None:
        package = metadata.package_name
        write_script(
            root / "usr" / "bin" / package,
            f'#!/bin/sh\nexec /opt/{package}/{metadata.executable} "$@"\n',
        )
        write_text(
            root / "usr" / "share" / "applications" / f"{package}.desktop",
            render_desktop_entry(metadata, exec_path=f"/usr/bin/{package}", icon=package),
        )
        icon = root / "usr" / "share" / "icons" / "hicolor" / "256x256" / "apps" / f"{package}.png"
        icon.parent.mkdir(parents=True, exist_ok=True)
        icon.write_bytes(icon_png(container.top_level_files()))

        size_kb = (directory_size(root) + 1023) // 1024
        write_text(root / "DEBIAN" / "control", render_control(metadata, installed_size_kb=size_kb))
