"""One entry point per platform, each forwarding to its deployment."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from deployer.core.errors import DeployError
from deployer.core.result import Result
from deployer.output.console import ConsoleProtocol, for_platform
from deployer.packaging.metadata import LinuxMetadata
from deployer.platforms.android import AndroidDeployment, AndroidDeploymentOptions, AndroidWorkloadGuard
from deployer.platforms.linux import LinuxDeployment
from deployer.platforms.macos import MacOsDeployment, MacOsDeploymentOptions
from deployer.platforms.wasm import WasmDeployment, WasmSite
from deployer.platforms.windows import WindowsDeployment, WindowsDeploymentOptions
from deployer.publish.publisher import Publisher
from deployer.resources.byte_source import NamedByteSource

__all__ = ["Packager", "PlatformPackager"]

type Artifacts = Result[list[NamedByteSource], DeployError]


class PlatformPackager(Protocol):
    """What the release strategy needs from a packager."""

    def create_windows_packages(self, project: Path, options: WindowsDeploymentOptions) -> Artifacts: ...

    def create_linux_packages(self, project: Path, metadata: LinuxMetadata) -> Artifacts: ...

    def create_mac_packages(self, project: Path, app_name: str, version: str) -> list[Artifacts]: ...

    def create_android_packages(self, project: Path, options: AndroidDeploymentOptions) -> Artifacts: ...

    def create_wasm_site(self, project: Path) -> Result[WasmSite, DeployError]: ...


class Packager:
    def __init__(
        self,
        publisher: Publisher,
        console: ConsoleProtocol,
        *,
        keep_staging: bool = False,
        ensure_android_workload: bool = True,
    ) -> None:
        self.publisher = publisher
        self.console = console
        self.keep_staging = keep_staging
        self.ensure_android_workload = ensure_android_workload

    def windows(self, project: Path, options: WindowsDeploymentOptions) -> WindowsDeployment:
        console = for_platform(self.console, "Windows")
        return WindowsDeployment(
            self.publisher, project, options, console, keep_staging=self.keep_staging
        )

    def linux(self, project: Path, metadata: LinuxMetadata) -> LinuxDeployment:
        console = for_platform(self.console, "Linux")
        return LinuxDeployment(
            self.publisher, project, metadata, console, keep_staging=self.keep_staging
        )

    def macos(self, project: Path, app_name: str, version: str) -> MacOsDeployment:
        console = for_platform(self.console, "macOS")
        options = MacOsDeploymentOptions(app_name=app_name, version=version)
        return MacOsDeployment(
            self.publisher, project, options, console, keep_staging=self.keep_staging
        )

    def android(self, project: Path, options: AndroidDeploymentOptions) -> AndroidDeployment:
        console = for_platform(self.console, "Android")
        workload = AndroidWorkloadGuard(console) if self.ensure_android_workload else None
        return AndroidDeployment(self.publisher, project, options, console, workload=workload)

    def create_windows_packages(self, project: Path, options: WindowsDeploymentOptions) -> Artifacts:
        return self.windows(project, options).create()

    def create_linux_packages(self, project: Path, metadata: LinuxMetadata) -> Artifacts:
        return self.linux(project, metadata).create()

    def create_mac_packages(self, project: Path, app_name: str, version: str) -> list[Artifacts]:
        return self.macos(project, app_name, version).create()

    def create_android_packages(self, project: Path, options: AndroidDeploymentOptions) -> Artifacts:
        return self.android(project, options).create()

    def create_wasm_site(self, project: Path) -> Result[WasmSite, DeployError]:
        return WasmDeployment(self.publisher, project, self.console).create()
