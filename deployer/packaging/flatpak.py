"""Flatpak bundle builder (OSTree repo + ``flatpak build-bundle``)."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from deployer.core.errors import DeployError
from deployer.core.result import Err, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.process import Runner, run
from deployer.resources.byte_source import NamedByteSource
from deployer.resources.container import DirectoryContainer

from .base import icon_png, process_failure, spool_output, staging, write_script, write_text
from .desktop import render_desktop_entry
from .metadata import PackageMetadata

__all__ = ["FlatpakBuilder", "FlatpakTool", "flatpak_commands"]

RUNTIME = "org.freedesktop.Platform"
SDK = "org.freedesktop.Sdk"
RUNTIME_VERSION = "23.08"


class FlatpakBuilder(Protocol):
    def build(
        self, container: DirectoryContainer, metadata: PackageMetadata
    ) -> Result[NamedByteSource, DeployError]: ...


def flatpak_commands(
    flatpak: str, metadata: PackageMetadata, build_dir: Path, repo: Path, bundle: Path
) -> list[list[str]]:
    """The four ``flatpak`` invocations, in order, after staging."""
    return [
        [
            flatpak, "build-init", str(build_dir), metadata.app_id,
            SDK, RUNTIME, RUNTIME_VERSION,
        ],
        [
            flatpak, "build-finish", str(build_dir),
            f"--command={metadata.package_name}",
            "--share=network", "--share=ipc",
            "--socket=x11", "--socket=wayland", "--device=dri",
        ],
        [flatpak, "build-export", str(repo), str(build_dir)],
        [flatpak, "build-bundle", str(repo), str(bundle), metadata.app_id],
    ]


class FlatpakTool:
    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        runner: Runner = run,
        tool: str = "flatpak",
        keep_staging: bool = False,
    ) -> None:
        self._console = console
        self._runner = runner
        self._tool = tool
        self._keep = keep_staging

    def build(
        self, container: DirectoryContainer, metadata: PackageMetadata
    ) -> Result[NamedByteSource, DeployError]:
        with staging("dp-flatpak", self._console, keep=self._keep) as work:
            build_dir = work / "build"
            repo = work / "repo"
            bundle = work / f"{metadata.package_name}.flatpak"
            init, *rest = flatpak_commands(self._tool, metadata, build_dir, repo, bundle)

            result = self._runner(init, work)
            if isinstance(result, Err):
                return process_failure("flatpak build-init", result.error)

            files = build_dir / "files"
            copied = container.write_to(files / metadata.package_name)
            if isinstance(copied, Err):
                return copied
            try:
                self._stage(container, metadata, files)
            except OSError as e:
                return Err(DeployError("io", f"Failed to stage Flatpak files: {e}"))

            for cmd in rest:
                result = self._runner(cmd, work)
                if isinstance(result, Err):
                    return process_failure(f"flatpak {cmd[1]}", result.error)
            return spool_output(bundle)

    def _stage(
        self, container: DirectoryContainer, metadata: PackageMetadata, files: Path
    ) -> None:
        app_id = metadata.app_id
        package = metadata.package_name
        write_script(
            files / "bin" / package,
            f'#!/bin/sh\nexec /app/{package}/{metadata.executable} "$@"\n',
        )
        write_text(
            files / "share" / "applications" / f"{app_id}.desktop",
            render_desktop_entry(metadata, exec_path=package, icon=app_id),
        )
        icon = files / "share" / "icons" / "hicolor" / "256x256" / "apps" / f"{app_id}.png"
        icon.parent.mkdir(parents=True, exist_ok=True)
        icon.write_bytes(icon_png(container.top_level_files()))
