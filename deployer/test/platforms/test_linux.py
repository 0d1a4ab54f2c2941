"""Tests for deployer.platforms.linux module."""

from __future__ import annotations

from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import MockConsole
from deployer.packaging.metadata import LinuxMetadata, PackageMetadata
from deployer.platform.detection import Arch
from deployer.platform.runtime import linux_target
from deployer.platforms.linux import LinuxDeployment
from deployer.resources.byte_source import BytesResource, NamedByteSource
from deployer.resources.container import DirectoryContainer
from deployer.test.fakes import ELF_BINARY, FakePublisher


class _FakeBuilder:
    def __init__(self, name: str, *, fail: bool = False) -> None:
        self.name = name
        self.fail = fail
        self.metadata: list[PackageMetadata] = []

    def build(
        self, container: DirectoryContainer, metadata: PackageMetadata
    ) -> Result[NamedByteSource, DeployError]:
        self.metadata.append(metadata)
        if self.fail:
            return Err(DeployError("process", f"{self.name} failed"))
        return Ok(BytesResource(f"out.{self.name}", self.name.encode()))


class _FakeRpm:
    def __init__(self, tmp_path: Path, *, fail: bool = False) -> None:
        self.tmp_path = tmp_path
        self.fail = fail
        self.produced: list[Path] = []

    def build(
        self, container: DirectoryContainer, metadata: PackageMetadata
    ) -> Result[Path, DeployError]:
        if self.fail:
            return Err(DeployError("process", "rpmbuild: exit 1"))
        path = self.tmp_path / f"built-{len(self.produced)}.rpm"
        path.write_bytes(b"rpm")
        self.produced.append(path)
        return Ok(path)


def _deployment(
    tmp_path: Path,
    console: MockConsole,
    *,
    appimage: _FakeBuilder | None = None,
    flatpak: _FakeBuilder | None = None,
    rpm: _FakeRpm | None = None,
    version: str | None = "2.0.0",
) -> tuple[LinuxDeployment, FakePublisher]:
    publisher = FakePublisher(tmp_path / "pub", {"Notes": ELF_BINARY, "libSkia.so": ELF_BINARY})
    metadata = LinuxMetadata(
        app_id="io.example.Notes", app_name="Notes", package_name="notes", version=version
    )
    deployment = LinuxDeployment(
        publisher,
        tmp_path / "Notes.Desktop.csproj",
        metadata,
        console,
        appimage=appimage or _FakeBuilder("appimage"),
        flatpak=flatpak or _FakeBuilder("flatpak"),
        deb=_FakeBuilder("deb"),
        rpm=rpm or _FakeRpm(tmp_path),
        targets=[linux_target(Arch.X64)],
    )
    return deployment, publisher


class TestLinuxDeployment:
    def test_four_formats(self, tmp_path: Path) -> None:
        deployment, publisher = _deployment(tmp_path, MockConsole())

        result = deployment.create()

        assert isinstance(result, Ok)
        assert [a.name for a in result.value] == [
            "notes-2.0.0-linux-x86_64.appimage",
            "notes-2.0.0-linux-x86_64.flatpak",
            "notes-2.0.0-linux-x86_64.deb",
            "notes-2.0.0-linux-x86_64.rpm",
        ]
        assert publisher.rids == ["linux-x64"]
        assert publisher.requests[0].self_contained

    def test_default_version_in_names(self, tmp_path: Path) -> None:
        deployment, _ = _deployment(tmp_path, MockConsole(), version=None)
        assert deployment.base_name(linux_target(Arch.ARM64)) == "notes-1.0.0-linux-arm64"

    def test_executable_and_metadata(self, tmp_path: Path) -> None:
        appimage = _FakeBuilder("appimage")
        deployment, _ = _deployment(tmp_path, MockConsole(), appimage=appimage)

        deployment.create()

        metadata = appimage.metadata[0]
        assert metadata.executable == "Notes"
        assert metadata.version == "2.0.0"
        assert metadata.target.rid == "linux-x64"

    def test_appimage_failure_aborts(self, tmp_path: Path) -> None:
        flatpak = _FakeBuilder("flatpak")
        deployment, _ = _deployment(
            tmp_path, MockConsole(), appimage=_FakeBuilder("appimage", fail=True), flatpak=flatpak
        )

        result = deployment.create()

        assert result == Err(DeployError("process", "appimage failed"))
        assert flatpak.metadata == []

    def test_rpm_failure_is_soft(self, tmp_path: Path) -> None:
        console = MockConsole()
        deployment, _ = _deployment(tmp_path, console, rpm=_FakeRpm(tmp_path, fail=True))

        result = deployment.create()

        assert isinstance(result, Ok)
        assert [a.name.rsplit(".", 1)[1] for a in result.value] == ["appimage", "flatpak", "deb"]
        assert console.has_error()
        assert console.find("[Linux RPM X64] RPM packaging failed: rpmbuild: exit 1")

    def test_rpm_file_removed_after_read(self, tmp_path: Path) -> None:
        rpm = _FakeRpm(tmp_path)
        deployment, _ = _deployment(tmp_path, MockConsole(), rpm=rpm)

        result = deployment.create()

        assert isinstance(result, Ok)
        assert result.value[-1].read_bytes() == Ok(b"rpm")
        assert not rpm.produced[0].exists()

    def test_no_executable(self, tmp_path: Path) -> None:
        publisher = FakePublisher(tmp_path / "pub", {"readme.txt": b"hi"})
        deployment = LinuxDeployment(
            publisher,
            tmp_path / "App.csproj",
            LinuxMetadata(app_id="a", app_name="A", package_name="a"),
            MockConsole(),
            appimage=_FakeBuilder("appimage"),
            flatpak=_FakeBuilder("flatpak"),
            deb=_FakeBuilder("deb"),
            rpm=_FakeRpm(tmp_path),
            targets=[linux_target(Arch.X64)],
        )

        result = deployment.create()

        assert isinstance(result, Err)
        assert result.error.kind == "artifact"
