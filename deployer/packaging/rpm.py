"""RPM builder (``rpmbuild -bb`` under a private ``_topdir``).

Unlike the other Linux builders this one returns the path of the produced
``.rpm``, moved out of the build tree. The caller reads it and deletes it.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Protocol

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.files import new_temp_path
from deployer.platform.process import Runner, run
from deployer.resources.container import DirectoryContainer

from .base import process_failure, staging, write_text
from .desktop import render_desktop_entry
from .metadata import PackageMetadata

__all__ = ["RpmBuilder", "RpmBuild", "render_spec", "rpm_version"]

_TOPDIR_LAYOUT = ("BUILD", "BUILDROOT", "RPMS", "SOURCES", "SPECS", "SRPMS")


class RpmBuilder(Protocol):
    def build(
        self, container: DirectoryContainer, metadata: PackageMetadata
    ) -> Result[Path, DeployError]: ...


def rpm_version(version: str) -> str:
    # '-' is reserved for the release field.
    return version.strip().lstrip("vV").replace("-", "~") or "0"


def render_spec(metadata: PackageMetadata) -> str:
    package = metadata.package_name
    header = [
        f"Name: {package}",
        f"Version: {rpm_version(metadata.version)}",
        "Release: 1",
        f"Summary: {metadata.summary}",
        f"License: {metadata.license or 'Proprietary'}",
    ]
    if metadata.homepage:
        header.append(f"URL: {metadata.homepage}")
    header += [
        "AutoReqProv: no",
        # Self-contained .NET output must not be stripped or post-processed.
        "%define __os_install_post %{nil}",
        "%define debug_package %{nil}",
        "",
        "%description",
        metadata.description,
        "",
        "%install",
        f"mkdir -p %{{buildroot}}/opt/{package}",
        f"cp -a %{{_sourcedir}}/{package}/. %{{buildroot}}/opt/{package}/",
        "mkdir -p %{buildroot}/usr/bin",
        f"ln -s /opt/{package}/{metadata.executable} %{{buildroot}}/usr/bin/{package}",
        f"install -Dm644 %{{_sourcedir}}/{package}.desktop "
        f"%{{buildroot}}/usr/share/applications/{package}.desktop",
        "",
        "%files",
        f"/opt/{package}",
        f"/usr/bin/{package}",
        f"/usr/share/applications/{package}.desktop",
    ]
    return "\n".join(header) + "\n"


class RpmBuild:
    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        runner: Runner = run,
        tool: str = "rpmbuild",
        keep_staging: bool = False,
    ) -> None:
        self._console = console
        self._runner = runner
        self._tool = tool
        self._keep = keep_staging

    def build(
        self, container: DirectoryContainer, metadata: PackageMetadata
    ) -> Result[Path, DeployError]:
        package = metadata.package_name
        with staging("dp-rpm", self._console, keep=self._keep) as top:
            try:
                for name in _TOPDIR_LAYOUT:
                    (top / name).mkdir(parents=True, exist_ok=True)
                write_text(
                    top / "SOURCES" / f"{package}.desktop",
                    render_desktop_entry(metadata, exec_path=f"/usr/bin/{package}", icon=package),
                )
                spec = top / "SPECS" / f"{package}.spec"
                write_text(spec, render_spec(metadata))
            except OSError as e:
                return Err(DeployError("io", f"Failed to prepare rpmbuild tree: {e}"))

            copied = container.write_to(top / "SOURCES" / package)
            if isinstance(copied, Err):
                return copied

            cmd = [
                self._tool, "-bb", str(spec),
                "--define", f"_topdir {top}",
                "--target", metadata.target.rpm_arch,
            ]
            result = self._runner(cmd, top)
            if isinstance(result, Err):
                return process_failure(self._tool, result.error)

            produced = sorted((top / "RPMS").rglob("*.rpm"))
            if not produced:
                return Err(DeployError("artifact", f"rpmbuild produced no .rpm under {top / 'RPMS'}"))

            target = new_temp_path("dp-rpm", ".rpm")
            try:
                shutil.move(produced[0], target)
            except OSError as e:
                return Err(DeployError("io", f"Failed to move {produced[0]}: {e}"))
            return Ok(target)
