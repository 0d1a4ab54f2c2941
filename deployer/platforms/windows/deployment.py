"""Windows packages: SFX executable, MSIX and setup installer per architecture.

ARM64 is built before X64. A failure on one architecture stops the other.
Setup installer failures are logged and the installer is left out.
"""

from __future__ import annotations

from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol, for_packaging
from deployer.packaging.executable import find_windows_executable
from deployer.packaging.installer import InnoSetup, SetupBuilder, SetupOptions
from deployer.packaging.msix import MakeAppx, MsixBuilder
from deployer.platform.runtime import WINDOWS_ARCHES, RuntimeTarget, windows_target
from deployer.publish.plan import PlatformPackagePlan, PreparedPublish, PublishLocation, PublishRequest
from deployer.publish.publisher import Publisher
from deployer.resources.byte_source import DetachStrategy, NamedByteSource, detach, renamed

from ..common import run_plans
from .icon import WindowsIcon, WindowsIconResolver
from .identity import build_manifest, sanitize
from .options import WindowsDeploymentOptions

__all__ = ["WindowsDeployment", "publish_properties"]


def publish_properties(version: str, icon: WindowsIcon | None) -> dict[str, str]:
    properties = {
        "Version": version,
        "IncludeNativeLibrariesForSelfExtract": "true",
        "IncludeAllContentForSelfExtract": "true",
        "DebugType": "embedded",
    }
    if icon is not None:
        properties["ApplicationIcon"] = str(icon.path)
    return properties


class _ArchitecturePlan:
    """State shared between the prepare and package steps of one arch."""

    def __init__(self, deployment: WindowsDeployment, target: RuntimeTarget) -> None:
        self._deployment = deployment
        self.target = target
        self.icon: WindowsIcon | None = None

    def prepare(self) -> Result[PreparedPublish, DeployError]:
        d = self._deployment
        console = for_packaging(d.console, "Windows", "Publish", self.target.label)
        console.debug(f"Publishing packages for Windows {self.target.label}")

        self.icon = d.icons.resolve(d.project)
        if self.icon is not None:
            console.debug(f"Using icon '{self.icon.path}' for Windows packaging")

        request = PublishRequest(
            project=d.project,
            runtime_identifier=self.target.rid,
            self_contained=True,
            single_file=True,
            properties=publish_properties(d.options.version, self.icon),
        )
        return Ok(PreparedPublish(request, cleanup=self._cleanup))

    def _cleanup(self) -> None:
        if self.icon is not None:
            self.icon.cleanup(self._deployment.console)

    def build(self, location: PublishLocation) -> Result[list[NamedByteSource], DeployError]:
        return self._deployment.package(location, self.target, self.icon)


class WindowsDeployment:
    def __init__(
        self,
        publisher: Publisher,
        project: Path,
        options: WindowsDeploymentOptions,
        console: ConsoleProtocol,
        *,
        msix: MsixBuilder | None = None,
        setup: SetupBuilder | None = None,
        icons: WindowsIconResolver | None = None,
        keep_staging: bool = False,
    ) -> None:
        self.publisher = publisher
        self.project = project
        self.options = options
        self.console = console
        self.msix = msix or MakeAppx(console, keep_staging=keep_staging)
        self.setup = setup or InnoSetup(console, keep_staging=keep_staging)
        self.icons = icons or WindowsIconResolver(console)

    def base_name(self, target: RuntimeTarget) -> str:
        return f"{self.options.package_name}-{self.options.version}-windows-{target.suffix}"

    def plans(self) -> list[PlatformPackagePlan]:
        plans: list[PlatformPackagePlan] = []
        for arch in WINDOWS_ARCHES:
            state = _ArchitecturePlan(self, windows_target(arch))
            plans.append(
                PlatformPackagePlan(
                    platform="Windows",
                    runtime_identifier=state.target.rid,
                    runtime_label=state.target.label,
                    prepare=state.prepare,
                    build_artifacts=state.build,
                )
            )
        return plans

    def create(self) -> Result[list[NamedByteSource], DeployError]:
        return run_plans(self.plans(), self.publisher, self.console)

    def package(
        self, location: PublishLocation, target: RuntimeTarget, icon: WindowsIcon | None
    ) -> Result[list[NamedByteSource], DeployError]:
        container = location.container
        base = self.base_name(target)

        executable = find_windows_executable(container)
        if isinstance(executable, Err):
            return executable
        exe = executable.value

        sfx_console = for_packaging(self.console, "Windows", "SFX", target.label)
        sfx_console.info("Creating SFX executable")
        sfx = detach(renamed(exe, f"{base}-sfx.exe"), DetachStrategy.TEMP_FILE)
        if isinstance(sfx, Err):
            return sfx
        sfx_console.info(f"Created SFX executable {sfx.value.name}")

        msix_console = for_packaging(self.console, "Windows", "MSIX", target.label)
        msix_console.info(f"Creating MSIX for Windows {target.label}")
        manifest = build_manifest(self.options, exe.name, target.msix_arch)
        msix = self.msix.build(container, manifest)
        if isinstance(msix, Err):
            return msix
        msix_artifact = renamed(msix.value, f"{base}.msix")
        msix_console.info(f"Created {msix_artifact.name}")

        artifacts = [sfx.value, msix_artifact]
        setup = self._setup(location, target, exe.name, icon)
        if setup is not None:
            artifacts.append(setup)
        return Ok(artifacts)

    def _setup(
        self,
        location: PublishLocation,
        target: RuntimeTarget,
        executable: str,
        icon: WindowsIcon | None,
    ) -> NamedByteSource | None:
        console = for_packaging(self.console, "Windows", "Installer", target.label)
        console.info("Creating Installer")
        package_name = self.options.package_name
        options = SetupOptions(
            app_id=f"com.{sanitize(package_name)}",
            app_name=package_name,
            version=self.options.version,
            executable=executable,
            publisher=self.options.msix.publisher_display_name or package_name,
            architecture=target.msix_arch,
            icon=icon.path if icon is not None else None,
        )
        result = self.setup.build(location.container, options)
        if isinstance(result, Err):
            console.warning(
                f"Windows Setup installer generation failed for {target.suffix}: "
                f"{result.error.pretty()}. Continuing without setup.exe."
            )
            return None
        artifact = renamed(result.value, f"{self.base_name(target)}-setup.exe")
        console.info(f"Created Installer {artifact.name}")
        return artifact
