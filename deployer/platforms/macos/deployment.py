"""DMG images for macOS, ARM64 then X64.

Both architectures are always attempted; each one gets its own result.
"""

from __future__ import annotations

from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol, for_packaging
from deployer.packaging.dmg import DmgBuilder, DmgRequest, DmgTool
from deployer.packaging.executable import MACHO_MAGICS, find_native_executable
from deployer.platform.files import discard, new_temp_dir, new_temp_path
from deployer.platform.runtime import MACOS_ARCHES, RuntimeTarget, macos_target
from deployer.publish.plan import PlatformPackagePlan, PreparedPublish, PublishLocation, PublishRequest
from deployer.publish.publisher import Publisher
from deployer.resources.byte_source import BytesResource, NamedByteSource
from deployer.resources.container import DirectoryContainer

from ..common import run_plan
from .options import MacOsDeploymentOptions, sanitize_app_name

__all__ = ["MacOsDeployment"]


class MacOsDeployment:
    def __init__(
        self,
        publisher: Publisher,
        project: Path,
        options: MacOsDeploymentOptions,
        console: ConsoleProtocol,
        *,
        dmg: DmgBuilder | None = None,
        keep_staging: bool = False,
    ) -> None:
        self.publisher = publisher
        self.project = project
        self.options = options
        self.console = console
        self.dmg = dmg or DmgTool(console, keep_staging=keep_staging)

    def artifact_name(self, target: RuntimeTarget) -> str:
        return f"{self.options.file_stem}-{target.suffix}.dmg"

    def plans(self) -> list[PlatformPackagePlan]:
        return [self._plan(macos_target(arch)) for arch in MACOS_ARCHES]

    def _plan(self, target: RuntimeTarget) -> PlatformPackagePlan:
        def prepare() -> Result[PreparedPublish, DeployError]:
            request = PublishRequest(
                project=self.project,
                runtime_identifier=target.rid,
                self_contained=True,
            )
            return Ok(PreparedPublish(request))

        def build(location: PublishLocation) -> Result[list[NamedByteSource], DeployError]:
            return self.package(location.container, target).map(lambda dmg: [dmg])

        return PlatformPackagePlan(
            platform="macOS",
            runtime_identifier=target.rid,
            runtime_label=target.label,
            prepare=prepare,
            build_artifacts=build,
        )

    def create(self) -> list[Result[list[NamedByteSource], DeployError]]:
        results: list[Result[list[NamedByteSource], DeployError]] = []
        for plan in self.plans():
            console = for_packaging(self.console, "macOS", "DMG", plan.runtime_label)
            result = run_plan(plan, self.publisher, console)
            if isinstance(result, Err):
                console.error(f"macOS packaging failed: {result.error.pretty()}")
            results.append(result)
        return results

    def package(
        self, container: DirectoryContainer, target: RuntimeTarget
    ) -> Result[NamedByteSource, DeployError]:
        console = for_packaging(self.console, "macOS", "DMG", target.label)
        console.info("Creating DMG")

        executable = find_native_executable(
            container, [self.options.app_name], magics=MACHO_MAGICS
        )
        if isinstance(executable, Err):
            return executable

        try:
            copy = new_temp_dir("dp-macpub")
            dmg_path = new_temp_path("dp-macos", ".dmg")
        except OSError as e:
            return Err(DeployError("io", f"Failed to create a staging directory: {e}"))
        try:
            written = container.write_to(copy)
            if isinstance(written, Err):
                return written

            request = DmgRequest(
                source_dir=copy,
                output=dmg_path,
                app_name=sanitize_app_name(self.options.app_name),
                executable=executable.value.name,
                version=self.options.version,
                bundle_id=self.options.bundle_id
                or f"com.example.{sanitize_app_name(self.options.app_name).lower()}",
            )
            built = self.dmg.build(request)
            if isinstance(built, Err):
                return built

            try:
                data = built.value.read_bytes()
            except OSError as e:
                return Err(DeployError("io", f"Failed to read DMG '{built.value}': {e}"))
        finally:
            discard(copy, console=console)
            discard(dmg_path, console=console)

        name = self.artifact_name(target)
        console.info(f"Created {name}")
        return Ok(BytesResource(name, data))
