"""Linux packages for the host architecture: AppImage, Flatpak, Deb, RPM.

AppImage, Flatpak and Deb failures abort the remaining formats. An RPM
failure is logged and the RPM is left out.
"""

from __future__ import annotations

from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol, for_packaging
from deployer.packaging.appimage import AppImageBuilder, AppImageTool
from deployer.packaging.deb import DebBuilder, DpkgDeb
from deployer.packaging.executable import find_native_executable
from deployer.packaging.flatpak import FlatpakBuilder, FlatpakTool
from deployer.packaging.metadata import LinuxMetadata, PackageMetadata, resolve_metadata
from deployer.packaging.rpm import RpmBuild, RpmBuilder
from deployer.platform.files import discard
from deployer.platform.runtime import RuntimeTarget, host_linux_target
from deployer.publish.plan import PlatformPackagePlan, PreparedPublish, PublishLocation, PublishRequest
from deployer.publish.publisher import Publisher
from deployer.resources.byte_source import BytesResource, NamedByteSource, renamed
from deployer.resources.container import DirectoryContainer

from ..common import run_plans

__all__ = ["LinuxDeployment"]


class LinuxDeployment:
    def __init__(
        self,
        publisher: Publisher,
        project: Path,
        metadata: LinuxMetadata,
        console: ConsoleProtocol,
        *,
        appimage: AppImageBuilder | None = None,
        flatpak: FlatpakBuilder | None = None,
        deb: DebBuilder | None = None,
        rpm: RpmBuilder | None = None,
        targets: list[RuntimeTarget] | None = None,
        keep_staging: bool = False,
    ) -> None:
        self.publisher = publisher
        self.project = project
        self.metadata = metadata
        self.console = console
        self.appimage = appimage or AppImageTool(console, keep_staging=keep_staging)
        self.flatpak = flatpak or FlatpakTool(console, keep_staging=keep_staging)
        self.deb = deb or DpkgDeb(console, keep_staging=keep_staging)
        self.rpm = rpm or RpmBuild(console, keep_staging=keep_staging)
        # Cross-publishing Linux binaries is unreliable; build for the host only.
        self.targets = targets if targets is not None else [host_linux_target()]

    def base_name(self, target: RuntimeTarget) -> str:
        version = self.metadata.version or "1.0.0"
        return f"{self.metadata.package_name}-{version}-linux-{target.suffix}"

    def plans(self) -> list[PlatformPackagePlan]:
        return [self._plan(target) for target in self.targets]

    def _plan(self, target: RuntimeTarget) -> PlatformPackagePlan:
        def prepare() -> Result[PreparedPublish, DeployError]:
            console = for_packaging(self.console, "Linux", "Publish", target.label)
            console.debug(f"Publishing Linux packages for {target.label}")
            request = PublishRequest(
                project=self.project,
                runtime_identifier=target.rid,
                self_contained=True,
            )
            return Ok(PreparedPublish(request))

        def build(location: PublishLocation) -> Result[list[NamedByteSource], DeployError]:
            return self.package(location.container, target)

        return PlatformPackagePlan(
            platform="Linux",
            runtime_identifier=target.rid,
            runtime_label=target.label,
            prepare=prepare,
            build_artifacts=build,
        )

    def create(self) -> Result[list[NamedByteSource], DeployError]:
        return run_plans(self.plans(), self.publisher, self.console)

    def package(
        self, container: DirectoryContainer, target: RuntimeTarget
    ) -> Result[list[NamedByteSource], DeployError]:
        executable = find_native_executable(
            container, [self.metadata.package_name, self.metadata.app_name]
        )
        if isinstance(executable, Err):
            return executable
        metadata = resolve_metadata(self.metadata, target, executable.value.name)
        base = self.base_name(target)

        artifacts: list[NamedByteSource] = []
        steps: list[tuple[str, str, AppImageBuilder | FlatpakBuilder | DebBuilder]] = [
            ("AppImage", "appimage", self.appimage),
            ("Flatpak", "flatpak", self.flatpak),
            ("DEB", "deb", self.deb),
        ]
        for kind, extension, builder in steps:
            console = for_packaging(self.console, "Linux", kind, target.label)
            console.info(f"Creating {kind}")
            result = builder.build(container, metadata)
            if isinstance(result, Err):
                return result
            artifact = renamed(result.value, f"{base}.{extension}")
            artifacts.append(artifact)
            console.info(f"Created {artifact.name}")

        rpm = self._rpm(container, metadata, f"{base}.rpm")
        if rpm is not None:
            artifacts.append(rpm)
        return Ok(artifacts)

    def _rpm(
        self, container: DirectoryContainer, metadata: PackageMetadata, name: str
    ) -> NamedByteSource | None:
        console = for_packaging(self.console, "Linux", "RPM", metadata.target.label)
        console.info("Creating RPM")
        built = self.rpm.build(container, metadata)
        if isinstance(built, Err):
            console.error(f"RPM packaging failed: {built.error.pretty()}")
            return None

        path = built.value
        try:
            data = path.read_bytes()
        except OSError as e:
            console.error(f"RPM packaging failed: Failed to read RPM artifact '{path}': {e}")
            return None
        finally:
            discard(path, console=console)

        console.info(f"Created {name}")
        return BytesResource(name, data)
