"""AppImage builder (``appimagetool``)."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from deployer.core.errors import DeployError
from deployer.core.result import Err, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.process import Runner, merged_env, run
from deployer.resources.byte_source import NamedByteSource
from deployer.resources.container import DirectoryContainer

from .base import icon_png, process_failure, spool_output, staging, write_script, write_text
from .desktop import render_desktop_entry
from .metadata import PackageMetadata

__all__ = ["AppImageBuilder", "AppImageTool", "render_apprun"]


class AppImageBuilder(Protocol):
    def build(
        self, container: DirectoryContainer, metadata: PackageMetadata
    ) -> Result[NamedByteSource, DeployError]: ...


def render_apprun(metadata: PackageMetadata) -> str:
    return (
        "#!/bin/sh\n"
        'HERE="$(dirname "$(readlink -f "$0")")"\n'
        f'exec "$HERE/usr/bin/{metadata.package_name}/{metadata.executable}" "$@"\n'
    )


class AppImageTool:
    """Stages an AppDir and packs it with ``appimagetool``."""

    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        runner: Runner = run,
        tool: str = "appimagetool",
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
        with staging("dp-appimage", self._console, keep=self._keep) as work:
            appdir = work / "AppDir"
            try:
                self._stage(container, metadata, appdir)
            except OSError as e:
                return Err(DeployError("io", f"Failed to stage AppDir: {e}"))

            copied = container.write_to(appdir / "usr" / "bin" / package)
            if isinstance(copied, Err):
                return copied

            output = work / f"{package}.AppImage"
            env = merged_env({"ARCH": metadata.target.appimage_arch})
            result = self._runner([self._tool, str(appdir), str(output)], work, env)
            if isinstance(result, Err):
                return process_failure(self._tool, result.error)
            return spool_output(output)

    def _stage(
        self, container: DirectoryContainer, metadata: PackageMetadata, appdir: Path
    ) -> None:
        package = metadata.package_name
        write_script(appdir / "AppRun", render_apprun(metadata))
        write_text(
            appdir / f"{package}.desktop",
            render_desktop_entry(metadata, exec_path=package, icon=package),
        )
        (appdir / f"{package}.png").write_bytes(icon_png(container.top_level_files()))
