"""Signed APK / AAB packages for Android (``android-arm64``)."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol, for_packaging
from deployer.platform.runtime import ANDROID_RID
from deployer.publish.plan import PlatformPackagePlan, PreparedPublish, PublishLocation, PublishRequest
from deployer.publish.publisher import Publisher
from deployer.resources.byte_source import (
    DetachStrategy,
    FileResource,
    NamedByteSource,
    detach_all,
    renamed,
)
from deployer.resources.container import DirectoryContainer

from ..common import run_plan
from .keystore import TempKeystore
from .options import AndroidDeploymentOptions
from .sdk import AndroidSdk
from .workload import AndroidWorkloadGuard

__all__ = [
    "AndroidDeployment",
    "publish_properties",
    "select_packages",
    "package_file_name",
]

_SIGNED_SUFFIX = "-Signed"


def publish_properties(
    options: AndroidDeploymentOptions, keystore: Path, sdk: str
) -> dict[str, str]:
    return {
        "ApplicationVersion": str(options.application_version),
        "ApplicationDisplayVersion": options.display_version,
        "AndroidKeyStore": "true",
        "AndroidSigningKeyStore": str(keystore),
        "AndroidSigningKeyAlias": options.key_alias,
        "AndroidSigningStorePass": options.store_pass,
        "AndroidSigningKeyPass": options.key_pass,
        "AndroidSdkDirectory": sdk,
        "AndroidSignV1": "true",
        "AndroidSignV2": "true",
        "AndroidPackageFormats": options.package_format.msbuild_value,
    }


def package_file_name(source_name: str, package_name: str, display_version: str) -> str:
    """``<package>-<version>-android[-<qualifier>].<ext>``.

    The qualifier is whatever followed the last hyphen of the original
    name once ``-Signed`` is removed.
    """
    path = PurePosixPath(source_name)
    stem = path.stem
    if stem.endswith(_SIGNED_SUFFIX):
        stem = stem[: -len(_SIGNED_SUFFIX)]
    hyphen = stem.rfind("-")
    qualifier = f"-{stem[hyphen + 1:]}" if hyphen >= 0 else ""
    return f"{package_name}-{display_version}-android{qualifier}{path.suffix.lower()}"


def _is_candidate(resource: FileResource, application_id: str) -> bool:
    path = PurePosixPath(resource.name)
    suffix = path.suffix.lower()
    if application_id not in resource.name:
        return False
    if suffix == ".aab":
        return True
    if suffix == ".apk":
        return path.stem.endswith(_SIGNED_SUFFIX)
    return False


def select_packages(
    container: DirectoryContainer, options: AndroidDeploymentOptions
) -> list[NamedByteSource]:
    """Signed APKs and AABs, renamed, first occurrence of each name kept."""
    selected: dict[str, NamedByteSource] = {}
    for _, resource in container.files():
        if not _is_candidate(resource, options.application_id):
            continue
        name = package_file_name(resource.name, options.package_name, options.display_version)
        selected.setdefault(name, renamed(resource, name))
    return list(selected.values())


class _AndroidPlan:
    def __init__(self, deployment: AndroidDeployment) -> None:
        self._deployment = deployment
        self._keystore: TempKeystore | None = None

    def prepare(self) -> Result[PreparedPublish, DeployError]:
        d = self._deployment
        if d.workload is not None:
            ensured = d.workload.ensure_workload()
            if isinstance(ensured, Err):
                return ensured

        keystore = TempKeystore.create(d.options.keystore, d.console)
        if isinstance(keystore, Err):
            return keystore
        self._keystore = keystore.value

        sdk = d.sdk.resolve(d.options.sdk_path)
        if isinstance(sdk, Err):
            self._keystore.delete()
            return sdk

        request = PublishRequest(
            project=d.project,
            runtime_identifier=ANDROID_RID,
            self_contained=False,
            properties=publish_properties(d.options, self._keystore.path, sdk.value),
        )
        return Ok(PreparedPublish(request, cleanup=self._keystore.delete))

    def build(self, location: PublishLocation) -> Result[list[NamedByteSource], DeployError]:
        return self._deployment.package(location.container)


class AndroidDeployment:
    def __init__(
        self,
        publisher: Publisher,
        project: Path,
        options: AndroidDeploymentOptions,
        console: ConsoleProtocol,
        *,
        sdk: AndroidSdk | None = None,
        workload: AndroidWorkloadGuard | None = None,
    ) -> None:
        self.publisher = publisher
        self.project = project
        self.options = options
        self.console = for_packaging(console, "Android", "Publish", "ARM64")
        self.sdk = sdk or AndroidSdk(self.console)
        self.workload = workload

    def plan(self) -> PlatformPackagePlan:
        state = _AndroidPlan(self)
        return PlatformPackagePlan(
            platform="Android",
            runtime_identifier=ANDROID_RID,
            runtime_label="ARM64",
            prepare=state.prepare,
            build_artifacts=state.build,
        )

    def create(self) -> Result[list[NamedByteSource], DeployError]:
        return run_plan(self.plan(), self.publisher, self.console)

    def package(self, container: DirectoryContainer) -> Result[list[NamedByteSource], DeployError]:
        names = [resource.name for _, resource in container.files()]
        self.console.debug(f"Found {len(names)} files in publish output: {', '.join(names)}")

        packages = select_packages(container, self.options)
        if not packages:
            return Err(
                DeployError(
                    "artifact",
                    "No signed APKs were produced",
                    hint="Check the signing key alias and passwords",
                )
            )

        detached = detach_all(packages, DetachStrategy.TEMP_FILE)
        if isinstance(detached, Ok):
            for package in detached.value:
                self.console.info(f"Created {package.name}")
        return detached
