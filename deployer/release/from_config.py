"""Build a ``ReleaseConfiguration`` and ``PublishingOptions`` from deployer.toml."""

from __future__ import annotations

import os
from collections.abc import Mapping

from deployer.core.config import AndroidSection, DeployerConfig, LinuxSection, WindowsSection
from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.packaging.metadata import LinuxMetadata
from deployer.platforms.android.options import AndroidDeploymentOptions, AndroidPackageFormat
from deployer.platforms.windows.options import MsixOptions, WindowsDeploymentOptions
from deployer.publish.policy import PublishingCleanupPolicy, PublishingMode, PublishingOptions

from .builder import ReleaseBuilder
from .configuration import ReleaseConfiguration

__all__ = ["release_from_config", "publishing_options", "android_options"]


def _secret(env: Mapping[str, str], name: str | None, what: str) -> Result[str, DeployError]:
    if not name:
        return Err(DeployError("configuration", f"[android] {what}_env is not set"))
    value = env.get(name)
    if value is None:
        return Err(
            DeployError(
                "configuration",
                f"Environment variable {name} is not set",
                hint=f"Export {name} with the Android {what.replace('_', ' ')}",
            )
        )
    return Ok(value)


def android_options(
    config: DeployerConfig,
    section: AndroidSection,
    env: Mapping[str, str] | None = None,
) -> Result[AndroidDeploymentOptions, DeployError]:
    env = os.environ if env is None else env

    if section.keystore is None:
        return Err(DeployError("configuration", "[android] requires 'keystore'"))
    keystore_path = config.resolve(section.keystore)
    try:
        keystore = keystore_path.read_bytes()
    except OSError as e:
        return Err(DeployError("configuration", f"Cannot read keystore {keystore_path}: {e}"))

    key_pass = _secret(env, section.key_pass_env, "key_pass")
    if isinstance(key_pass, Err):
        return key_pass
    store_pass = _secret(env, section.store_pass_env, "store_pass")
    if isinstance(store_pass, Err):
        return store_pass

    release = config.release
    return Ok(
        AndroidDeploymentOptions(
            package_name=release.package_name or "",
            application_id=section.application_id,
            application_version=section.version_code,
            display_version=section.display_version or release.version or "",
            keystore=keystore,
            key_alias=section.key_alias,
            key_pass=key_pass.value,
            store_pass=store_pass.value,
            package_format=AndroidPackageFormat.parse(section.format),
            sdk_path=section.sdk_path,
        )
    )


def _windows_options(config: DeployerConfig, section: WindowsSection) -> WindowsDeploymentOptions:
    msix = section.msix
    return WindowsDeploymentOptions(
        package_name=section.package_name or config.release.package_name or "",
        version=config.release.version or "",
        msix=MsixOptions(
            identity_name=msix.identity_name,
            publisher=msix.publisher,
            publisher_display_name=msix.publisher_display_name,
            display_name=msix.display_name,
            description=msix.description,
            app_id=msix.app_id,
        ),
    )


def _linux_metadata(config: DeployerConfig, section: LinuxSection) -> LinuxMetadata:
    release = config.release
    return LinuxMetadata(
        app_id=release.app_id or release.package_name or "",
        app_name=release.app_name or release.package_name or "",
        package_name=release.package_name or "",
        version=release.version,
        comment=section.comment,
        description=section.description,
        summary=section.summary,
        homepage=section.homepage,
        license=section.license,
        startup_wm_class=section.startup_wm_class,
        is_terminal=section.is_terminal,
        keywords=section.keywords,
        categories=section.categories,
        screenshots=section.screenshots,
    )


def release_from_config(
    config: DeployerConfig,
    console: ConsoleProtocol,
    *,
    env: Mapping[str, str] | None = None,
) -> Result[ReleaseConfiguration, DeployError]:
    """Projects come from the ``.sln`` (when given) and are overridden by
    the explicit platform tables."""
    release = config.release
    builder = ReleaseBuilder(console).with_version(release.version or "")
    builder.with_application_info(
        release.package_name or "",
        release.app_id or "",
        release.app_name or "",
    )

    android: AndroidDeploymentOptions | None = None
    if config.android is not None:
        options = android_options(config, config.android, env)
        if isinstance(options, Err):
            return options
        android = options.value

    if release.solution is not None:
        builder.for_avalonia_projects_from_solution(
            config.resolve(release.solution), release.version or "", android
        )

    if config.windows is not None:
        builder.for_windows(
            config.resolve(config.windows.project), _windows_options(config, config.windows)
        )
    if config.linux is not None:
        builder.for_linux(config.resolve(config.linux.project), _linux_metadata(config, config.linux))
    if config.macos is not None:
        builder.for_macos(config.resolve(config.macos.project))
    if config.android is not None and android is not None:
        builder.for_android(config.resolve(config.android.project), android)
    if config.webassembly is not None:
        builder.for_webassembly(config.resolve(config.webassembly.project))

    return builder.build()


def publishing_options(config: DeployerConfig, *, local: bool | None = None) -> PublishingOptions:
    """``local`` overrides the mode from the config file."""
    section = config.publishing
    mode = PublishingMode(section.mode)
    if local is not None:
        mode = PublishingMode.LOCAL if local else PublishingMode.CI

    persist = section.persist_artifacts
    if persist is None:
        persist = mode == PublishingMode.CI

    return PublishingOptions(
        cleanup_policy=PublishingCleanupPolicy(mode, section.low_disk_threshold),
        artifacts_root=config.resolve(section.artifacts_root),
        persist_artifacts=persist,
    )
