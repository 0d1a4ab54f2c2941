"""Package every requested platform of a release, one after the other."""

from __future__ import annotations

from collections.abc import Iterator

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.resources.byte_source import NamedByteSource

from .configuration import ReleaseConfiguration, TargetPlatform
from .packager import PlatformPackager
from .plans import missing_config

__all__ = ["ReleasePackagingStrategy"]

type ArtifactResult = Result[NamedByteSource, DeployError]


class ReleasePackagingStrategy:
    def __init__(
        self,
        packager: PlatformPackager,
        console: ConsoleProtocol,
    ) -> None:
        self._packager = packager
        self._console = console

    def package_stream(self, configuration: ReleaseConfiguration) -> Iterator[ArtifactResult]:
        """Lazily yield artifacts platform by platform.

        Order is Windows, Linux, macOS, Android, WebAssembly. The first
        failure is yielded once and ends the stream. The WebAssembly site
        is built and closed but never yielded.
        """
        names = ", ".join(p.display_name for p in configuration.enabled())
        self._console.info(f"Packaging release {configuration.version} for {names}")

        for platform in configuration.enabled():
            failed = False
            for result in self._platform_stream(configuration, platform):
                yield result
                if isinstance(result, Err):
                    failed = True
                    break
            if failed:
                return

    def _platform_stream(
        self, configuration: ReleaseConfiguration, platform: TargetPlatform
    ) -> Iterator[ArtifactResult]:
        packager = self._packager
        match platform:
            case TargetPlatform.WINDOWS:
                if configuration.windows is None:
                    yield missing_config(platform)
                    return
                windows = configuration.windows
                yield from _flatten(packager.create_windows_packages(windows.project, windows.options))
            case TargetPlatform.LINUX:
                if configuration.linux is None:
                    yield missing_config(platform)
                    return
                linux = configuration.linux
                yield from _flatten(packager.create_linux_packages(linux.project, linux.metadata))
            case TargetPlatform.MACOS:
                if configuration.macos is None:
                    yield missing_config(platform)
                    return
                results = packager.create_mac_packages(
                    configuration.macos.project,
                    configuration.application.app_name,
                    configuration.version,
                )
                yield from _flatten_all(results)
            case TargetPlatform.ANDROID:
                if configuration.android is None:
                    yield missing_config(platform)
                    return
                android = configuration.android
                yield from _flatten(packager.create_android_packages(android.project, android.options))
            case TargetPlatform.WEBASSEMBLY:
                if configuration.webassembly is None:
                    yield missing_config(platform)
                    return
                site = packager.create_wasm_site(configuration.webassembly.project)
                if isinstance(site, Err):
                    yield site
                    return
                site.value.close()
                self._console.info("WebAssembly site built")
            case _:
                return


def _flatten(result: Result[list[NamedByteSource], DeployError]) -> Iterator[ArtifactResult]:
    if isinstance(result, Err):
        yield result
        return
    for artifact in result.value:
        yield Ok(artifact)


def _flatten_all(
    results: list[Result[list[NamedByteSource], DeployError]],
) -> Iterator[ArtifactResult]:
    """Each architecture's results in order; the caller stops at the first failure."""
    for result in results:
        yield from _flatten(result)
