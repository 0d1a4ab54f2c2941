"""Tests for Linux metadata resolution and the text the Linux builders render."""

from __future__ import annotations

from pathlib import Path

import pytest

from deployer.core.result import Err, Ok, Result
from deployer.output.console import MockConsole
from deployer.packaging.deb import DpkgDeb, deb_version, render_control
from deployer.packaging.desktop import render_desktop_entry
from deployer.packaging.metadata import LinuxMetadata, PackageMetadata, resolve_metadata
from deployer.packaging.rpm import render_spec, rpm_version
from deployer.platform.detection import Arch
from deployer.platform.process import ProcessError
from deployer.platform.runtime import linux_target
from deployer.resources.container import DirectoryContainer
from deployer.test.fakes import FakeRunner, process_error


def _metadata(**overrides: object) -> PackageMetadata:
    values: dict[str, object] = {
        "app_id": "io.example.Notepad",
        "app_name": "Notepad",
        "package_name": "notepad",
    }
    values.update(overrides)
    linux = LinuxMetadata(**values)  # type: ignore[arg-type]
    return resolve_metadata(linux, linux_target(Arch.X64), "Notepad")


class TestResolveMetadata:
    def test_defaults(self) -> None:
        metadata = _metadata()
        assert metadata.version == "1.0.0"
        assert metadata.comment == "Notepad"
        assert metadata.summary == "Notepad"
        assert metadata.description == "Notepad"
        assert metadata.categories is None

    def test_summary_feeds_comment_and_description(self) -> None:
        metadata = _metadata(summary="Edit text")
        assert metadata.comment == "Edit text"
        assert metadata.description == "Edit text"

    def test_relative_urls_dropped(self) -> None:
        metadata = _metadata(
            homepage="example.com",
            screenshots=("https://example.com/a.png", "shots/b.png"),
        )
        assert metadata.homepage is None
        assert metadata.screenshots == ("https://example.com/a.png",)


class TestDesktopEntry:
    def test_fallback_category(self) -> None:
        entry = render_desktop_entry(_metadata(), exec_path="/usr/bin/notepad", icon="notepad")
        assert entry.startswith("[Desktop Entry]\n")
        assert "Exec=/usr/bin/notepad\n" in entry
        assert "Categories=Utility;\n" in entry
        assert "Terminal=false\n" in entry

    def test_optional_keys(self) -> None:
        metadata = _metadata(
            categories=("Office", "WordProcessor"),
            keywords=("text", "editor"),
            startup_wm_class="notepad",
            is_terminal=True,
        )
        entry = render_desktop_entry(metadata, exec_path="notepad", icon="notepad")
        assert "Categories=Office;WordProcessor;\n" in entry
        assert "Keywords=text;editor;\n" in entry
        assert "StartupWMClass=notepad\n" in entry
        assert "Terminal=true\n" in entry


class TestDebian:
    @pytest.mark.parametrize(
        ("version", "expected"),
        [
            ("1.2.3", "1.2.3"),
            ("v2.0.0-beta.1", "2.0.0~beta.1"),
            ("next", "0~next"),
            ("", "0"),
        ],
    )
    def test_deb_version(self, version: str, expected: str) -> None:
        assert deb_version(version) == expected

    def test_control(self) -> None:
        metadata = _metadata(
            version="1.2.0",
            summary="Edit text",
            description="Edit text\n\nQuickly.",
            homepage="https://example.com",
        )
        control = render_control(metadata, installed_size_kb=42)
        assert "Package: notepad\n" in control
        assert "Version: 1.2.0\n" in control
        assert "Architecture: amd64\n" in control
        assert "Installed-Size: 42\n" in control
        assert "Homepage: https://example.com\n" in control
        assert control.endswith("Description: Edit text\n Edit text\n .\n Quickly.\n")

    def test_build_failure_is_reported(self, tmp_path: Path) -> None:
        (tmp_path / "Notepad").write_bytes(b"\x7fELF")
        runner = FakeRunner({"dpkg-deb --build": process_error(["dpkg-deb"], 2, "bad control")})
        builder = DpkgDeb(MockConsole(), runner=runner)

        result = builder.build(DirectoryContainer(tmp_path), _metadata())

        assert isinstance(result, Err)
        assert result.error.message.startswith("dpkg-deb: ")
        assert "bad control" in result.error.message

    def test_stages_launcher_and_control(self, tmp_path: Path) -> None:
        publish = tmp_path / "publish"
        publish.mkdir()
        (publish / "Notepad").write_bytes(b"\x7fELF")
        seen: dict[str, str] = {}

        def runner(
            cmd: list[str], cwd: Path, env: dict[str, str] | None = None, *, timeout: float | None = None
        ) -> Result[str, ProcessError]:
            root, output = Path(cmd[-2]), Path(cmd[-1])
            seen["control"] = (root / "DEBIAN" / "control").read_text()
            seen["launcher"] = (root / "usr" / "bin" / "notepad").read_text()
            assert (root / "opt" / "notepad" / "Notepad").is_file()
            output.write_bytes(b"deb")
            return Ok("")

        result = DpkgDeb(MockConsole(), runner=runner).build(DirectoryContainer(publish), _metadata())

        assert isinstance(result, Ok)
        assert result.value.name == "notepad.deb"
        assert result.value.read_bytes() == Ok(b"deb")
        assert "Package: notepad" in seen["control"]
        assert 'exec /opt/notepad/Notepad "$@"' in seen["launcher"]


class TestRpm:
    def test_rpm_version(self) -> None:
        assert rpm_version("v1.0.0-rc1") == "1.0.0~rc1"
        assert rpm_version("") == "0"

    def test_spec(self) -> None:
        spec = render_spec(_metadata(version="2.1.0", license="MIT"))
        assert "Name: notepad\n" in spec
        assert "Version: 2.1.0\n" in spec
        assert "License: MIT\n" in spec
        assert "ln -s /opt/notepad/Notepad %{buildroot}/usr/bin/notepad" in spec
        assert "%files\n/opt/notepad\n" in spec

    def test_spec_default_license(self) -> None:
        assert "License: Proprietary\n" in render_spec(_metadata())
