"""Turn a release into publish pipeline plans."""

from __future__ import annotations

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.publish.pipeline import PublishPipeline
from deployer.publish.plan import PlatformPackagePlan
from deployer.publish.policy import PublishingOptions
from deployer.resources.byte_source import NamedByteSource

from .configuration import ReleaseConfiguration, TargetPlatform
from .packager import Packager

__all__ = ["build_plans", "missing_config", "publish_release"]


def missing_config(platform: TargetPlatform) -> Err[DeployError]:
    return Err(
        DeployError(
            "configuration",
            f"{platform.display_name} configuration is required for {platform.display_name} packaging",
        )
    )


def build_plans(
    configuration: ReleaseConfiguration, packager: Packager
) -> Result[list[PlatformPackagePlan], DeployError]:
    """One plan per platform/runtime, in packaging order. WebAssembly is
    published separately as a site and has no plan."""
    plans: list[PlatformPackagePlan] = []
    enabled = configuration.enabled()

    if TargetPlatform.WINDOWS in enabled:
        if configuration.windows is None:
            return missing_config(TargetPlatform.WINDOWS)
        windows = configuration.windows
        plans.extend(packager.windows(windows.project, windows.options).plans())

    if TargetPlatform.LINUX in enabled:
        if configuration.linux is None:
            return missing_config(TargetPlatform.LINUX)
        plans.extend(packager.linux(configuration.linux.project, configuration.linux.metadata).plans())

    if TargetPlatform.MACOS in enabled:
        if configuration.macos is None:
            return missing_config(TargetPlatform.MACOS)
        deployment = packager.macos(
            configuration.macos.project,
            configuration.application.app_name,
            configuration.version,
        )
        plans.extend(deployment.plans())

    if TargetPlatform.ANDROID in enabled:
        if configuration.android is None:
            return missing_config(TargetPlatform.ANDROID)
        android = configuration.android
        plans.append(packager.android(android.project, android.options).plan())

    return Ok(plans)


def publish_release(
    configuration: ReleaseConfiguration,
    packager: Packager,
    options: PublishingOptions,
    console: ConsoleProtocol,
) -> Result[list[NamedByteSource], DeployError]:
    """Run every non-WebAssembly platform through the publish pipeline,
    then build the WebAssembly site if requested."""
    names = ", ".join(p.display_name for p in configuration.enabled())
    console.info(f"Packaging release for platforms {names}")

    plans = build_plans(configuration, packager)
    if isinstance(plans, Err):
        return plans

    pipeline = PublishPipeline(packager.publisher, options, console)
    artifacts = pipeline.execute(plans.value)
    if isinstance(artifacts, Err):
        return artifacts

    if TargetPlatform.WEBASSEMBLY in configuration.platforms:
        if configuration.webassembly is None:
            return missing_config(TargetPlatform.WEBASSEMBLY)
        console.info(f"Building WebAssembly site for {configuration.webassembly.project}")
        site = packager.create_wasm_site(configuration.webassembly.project)
        if isinstance(site, Err):
            return site
        site.value.close()

    console.info(f"Packaging completed. {len(artifacts.value)} artifact(s) ready")
    return Ok(artifacts.value)
