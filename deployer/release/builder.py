"""Fluent construction of a ``ReleaseConfiguration``.

Example:
    result = (
        ReleaseBuilder(console)
        .with_version("1.2.0")
        .with_application_info("notepad", "io.example.Notepad", "Notepad")
        .for_desktop("src/Notepad.Desktop/Notepad.Desktop.csproj")
        .build()
    )
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol, ScopedConsole
from deployer.packaging.metadata import LinuxMetadata
from deployer.platforms.android.options import AndroidDeploymentOptions
from deployer.platforms.windows.options import WindowsDeploymentOptions

from .configuration import (
    AndroidPlatformConfig,
    ApplicationInfo,
    LinuxPlatformConfig,
    MacOsPlatformConfig,
    ReleaseConfiguration,
    TargetPlatform,
    WebAssemblyPlatformConfig,
    WindowsPlatformConfig,
)
from .solution import find_by_suffix, parse_solution_projects

__all__ = ["ReleaseBuilder"]

type ProjectPath = str | Path


class ReleaseBuilder:
    """Accumulates platforms; every ``for_*`` call overwrites its slot."""

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console
        self._version = ""
        self._application = ApplicationInfo()
        self._platforms = TargetPlatform.NONE
        self._windows: WindowsPlatformConfig | None = None
        self._linux: LinuxPlatformConfig | None = None
        self._macos: MacOsPlatformConfig | None = None
        self._android: AndroidPlatformConfig | None = None
        self._webassembly: WebAssemblyPlatformConfig | None = None
        self._error: DeployError | None = None

    def with_version(self, version: str) -> ReleaseBuilder:
        self._version = version
        return self

    def with_application_info(self, package_name: str, app_id: str, app_name: str) -> ReleaseBuilder:
        self._application = ApplicationInfo(package_name, app_id, app_name)
        return self

    def for_windows(
        self,
        project: ProjectPath,
        options: WindowsDeploymentOptions | None = None,
        *,
        package_name: str | None = None,
        version: str | None = None,
    ) -> ReleaseBuilder:
        if options is None:
            options = WindowsDeploymentOptions(
                package_name=package_name or self._application.package_name,
                version=version or self._version,
            )
        self._windows = WindowsPlatformConfig(Path(project), options)
        self._platforms |= TargetPlatform.WINDOWS
        return self

    def for_linux(
        self, project: ProjectPath, metadata: LinuxMetadata | None = None
    ) -> ReleaseBuilder:
        if metadata is None:
            app = self._application
            metadata = LinuxMetadata(
                app_id=app.app_id,
                app_name=app.app_name,
                package_name=app.package_name,
                version=self._version or None,
            )
        self._linux = LinuxPlatformConfig(Path(project), metadata)
        self._platforms |= TargetPlatform.LINUX
        return self

    def for_macos(self, project: ProjectPath) -> ReleaseBuilder:
        self._macos = MacOsPlatformConfig(Path(project))
        self._platforms |= TargetPlatform.MACOS
        return self

    def for_android(self, project: ProjectPath, options: AndroidDeploymentOptions) -> ReleaseBuilder:
        if not options.package_name.strip():
            options = dataclasses.replace(options, package_name=self._application.package_name)
        self._android = AndroidPlatformConfig(Path(project), options)
        self._platforms |= TargetPlatform.ANDROID
        return self

    def for_webassembly(self, project: ProjectPath) -> ReleaseBuilder:
        self._webassembly = WebAssemblyPlatformConfig(Path(project))
        self._platforms |= TargetPlatform.WEBASSEMBLY
        return self

    def for_desktop(self, project: ProjectPath) -> ReleaseBuilder:
        return self.for_windows(project).for_linux(project).for_macos(project)

    def for_avalonia_projects(
        self,
        base_name: str,
        version: str,
        android: AndroidDeploymentOptions | None = None,
    ) -> ReleaseBuilder:
        """Use the ``<base>.Desktop``, ``<base>.Browser`` and
        ``<base>.Android`` naming convention."""
        builder = (
            self.with_version(version)
            .for_desktop(f"{base_name}.Desktop")
            .for_webassembly(f"{base_name}.Browser")
        )
        if android is not None:
            builder = builder.for_android(f"{base_name}.Android", android)
        return builder

    def for_avalonia_projects_from_solution(
        self,
        solution: ProjectPath,
        version: str,
        android: AndroidDeploymentOptions | None = None,
    ) -> ReleaseBuilder:
        """Pick Desktop, Browser and Android projects out of a ``.sln``."""
        console = ScopedConsole(self._console, "Discovery")
        console.info(f"Starting project discovery from solution: {solution}")

        parsed = parse_solution_projects(Path(solution))
        if isinstance(parsed, Err):
            # Reported by build().
            self._error = parsed.error
            return self
        projects = parsed.value
        console.debug(f"Parsed {len(projects)} projects from solution")

        builder = self.with_version(version)

        desktop = find_by_suffix(projects, ".Desktop")
        if desktop is not None:
            console.debug(f"Found Desktop project: {desktop.path}")
            builder = builder.for_desktop(desktop.path)
        else:
            console.debug("Desktop project not found in solution")

        browser = find_by_suffix(projects, ".Browser")
        if browser is not None:
            console.debug(f"Found Browser project: {browser.path}")
            builder = builder.for_webassembly(browser.path)
        else:
            console.debug("Browser project not found in solution")

        project = find_by_suffix(projects, ".Android")
        if project is not None and android is not None:
            console.debug(f"Found Android project: {project.path}")
            builder = builder.for_android(project.path, android)
        elif project is not None:
            console.debug(f"Android project found but no Android options provided: {project.path}")
        else:
            console.debug("Android project not found in solution")

        return builder

    def build(self) -> Result[ReleaseConfiguration, DeployError]:
        if self._error is not None:
            return Err(self._error)

        if not self._version.strip():
            self._console.warning("Release build failed: Version is missing. Use WithVersion() first.")
            return Err(DeployError("configuration", "Version is required. Use WithVersion() first."))

        if self._platforms == TargetPlatform.NONE:
            self._console.warning("Release build failed: No platforms specified.")
            return Err(DeployError("configuration", "At least one platform must be specified."))

        return Ok(
            ReleaseConfiguration(
                version=self._version,
                application=self._application,
                platforms=self._platforms,
                windows=self._windows,
                linux=self._linux,
                macos=self._macos,
                android=self._android,
                webassembly=self._webassembly,
            )
        )
