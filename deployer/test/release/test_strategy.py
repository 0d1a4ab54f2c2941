"""Tests for deployer.release.strategy module."""

from __future__ import annotations

from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import MockConsole
from deployer.packaging.metadata import LinuxMetadata
from deployer.platforms.android import AndroidDeploymentOptions
from deployer.platforms.wasm import WasmSite
from deployer.platforms.windows import WindowsDeploymentOptions
from deployer.release import ReleaseBuilder, ReleaseConfiguration, ReleasePackagingStrategy, TargetPlatform
from deployer.resources.byte_source import BytesResource, NamedByteSource
from deployer.resources.container import DirectoryContainer, PublishedDirectory
from deployer.test.release.helpers import android_options

type Artifacts = Result[list[NamedByteSource], DeployError]


def _artifacts(*names: str) -> Artifacts:
    return Ok([BytesResource(n, n.encode()) for n in names])


class _FakePackager:
    def __init__(self, tmp_path: Path) -> None:
        self.tmp_path = tmp_path
        self.calls: list[str] = []
        self.windows: Artifacts = _artifacts("win-arm64.msix", "win-x64.msix")
        self.linux: Artifacts = _artifacts("linux.deb")
        self.mac: list[Artifacts] = [_artifacts("arm64.dmg"), _artifacts("x64.dmg")]
        self.android: Artifacts = _artifacts("app.apk")
        self.sites: list[WasmSite] = []

    def create_windows_packages(self, project: Path, options: WindowsDeploymentOptions) -> Artifacts:
        self.calls.append("windows")
        return self.windows

    def create_linux_packages(self, project: Path, metadata: LinuxMetadata) -> Artifacts:
        self.calls.append("linux")
        return self.linux

    def create_mac_packages(self, project: Path, app_name: str, version: str) -> list[Artifacts]:
        self.calls.append(f"macos {app_name} {version}")
        return self.mac

    def create_android_packages(self, project: Path, options: AndroidDeploymentOptions) -> Artifacts:
        self.calls.append("android")
        return self.android

    def create_wasm_site(self, project: Path) -> Result[WasmSite, DeployError]:
        self.calls.append("wasm")
        root = self.tmp_path / "site"
        (root / "wwwroot").mkdir(parents=True)
        site = WasmSite(DirectoryContainer(root / "wwwroot"), PublishedDirectory(root))
        self.sites.append(site)
        return Ok(site)


def _release() -> ReleaseConfiguration:
    result = (
        ReleaseBuilder(MockConsole())
        .with_application_info("notes", "io.example.Notes", "Notes")
        .for_avalonia_projects("Notes", "1.0.0", android_options())
        .build()
    )
    assert isinstance(result, Ok)
    return result.value


def _names(results: list[Result[NamedByteSource, DeployError]]) -> list[str]:
    return [r.value.name for r in results if isinstance(r, Ok)]


class TestReleasePackagingStrategy:
    def test_platform_order(self, tmp_path: Path) -> None:
        packager = _FakePackager(tmp_path)
        console = MockConsole()

        results = list(ReleasePackagingStrategy(packager, console).package_stream(_release()))

        assert _names(results) == [
            "win-arm64.msix", "win-x64.msix", "linux.deb", "arm64.dmg", "x64.dmg", "app.apk",
        ]
        assert packager.calls == ["windows", "linux", "macos Notes 1.0.0", "android", "wasm"]
        assert console.find("WebAssembly site built")

    def test_wasm_site_closed_and_not_emitted(self, tmp_path: Path) -> None:
        packager = _FakePackager(tmp_path)

        results = list(ReleasePackagingStrategy(packager, MockConsole()).package_stream(_release()))

        assert len(results) == 6
        assert packager.sites[0].closed
        assert not (tmp_path / "site").exists()

    def test_stops_after_first_failure(self, tmp_path: Path) -> None:
        packager = _FakePackager(tmp_path)
        packager.linux = Err(DeployError("process", "dpkg-deb: failed"))

        results = list(ReleasePackagingStrategy(packager, MockConsole()).package_stream(_release()))

        assert _names(results) == ["win-arm64.msix", "win-x64.msix"]
        assert results[-1] == Err(DeployError("process", "dpkg-deb: failed"))
        assert packager.calls == ["windows", "linux"]

    def test_macos_failure_ends_stream_in_architecture_order(self, tmp_path: Path) -> None:
        packager = _FakePackager(tmp_path)
        packager.mac = [Err(DeployError("process", "arm64 failed")), _artifacts("x64.dmg")]

        results = list(ReleasePackagingStrategy(packager, MockConsole()).package_stream(_release()))

        assert "x64.dmg" not in _names(results)
        assert results[-1] == Err(DeployError("process", "arm64 failed"))
        assert "android" not in packager.calls

    def test_macos_success_before_failure_is_kept(self, tmp_path: Path) -> None:
        packager = _FakePackager(tmp_path)
        packager.mac = [_artifacts("arm64.dmg"), Err(DeployError("process", "x64 failed"))]

        results = list(ReleasePackagingStrategy(packager, MockConsole()).package_stream(_release()))

        assert _names(results)[-1] == "arm64.dmg"
        assert results[-1] == Err(DeployError("process", "x64 failed"))

    def test_stream_is_lazy(self, tmp_path: Path) -> None:
        packager = _FakePackager(tmp_path)
        stream = ReleasePackagingStrategy(packager, MockConsole()).package_stream(_release())

        assert packager.calls == []
        first = next(stream)
        assert isinstance(first, Ok)
        assert packager.calls == ["windows"]

    def test_missing_platform_config(self, tmp_path: Path) -> None:
        release = ReleaseConfiguration(version="1.0.0", platforms=TargetPlatform.LINUX)

        results = list(
            ReleasePackagingStrategy(_FakePackager(tmp_path), MockConsole()).package_stream(release)
        )

        assert len(results) == 1
        first = results[0]
        assert isinstance(first, Err)
        assert first.error.message == "Linux configuration is required for Linux packaging"
