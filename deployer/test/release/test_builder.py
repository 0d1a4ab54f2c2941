"""Tests for deployer.release.builder and deployer.release.configuration."""

from __future__ import annotations

from pathlib import Path

from deployer.core.result import Err, Ok
from deployer.output.console import MockConsole
from deployer.platforms.windows import WindowsDeploymentOptions
from deployer.release import ReleaseBuilder, ReleaseConfiguration, TargetPlatform
from deployer.test.release.helpers import android_options


def _ok(result: object) -> ReleaseConfiguration:
    assert isinstance(result, Ok)
    value = result.value
    assert isinstance(value, ReleaseConfiguration)
    return value


class TestValidation:
    def test_version_required(self) -> None:
        console = MockConsole()
        result = ReleaseBuilder(console).for_macos("App.csproj").build()

        assert isinstance(result, Err)
        assert result.error.message == "Version is required. Use WithVersion() first."
        assert result.error.kind == "configuration"
        assert console.has_warning()

    def test_blank_version_rejected(self) -> None:
        result = ReleaseBuilder(MockConsole()).with_version("  ").for_macos("App.csproj").build()
        assert isinstance(result, Err)

    def test_platform_required(self) -> None:
        result = ReleaseBuilder(MockConsole()).with_version("1.0.0").build()

        assert isinstance(result, Err)
        assert result.error.message == "At least one platform must be specified."


class TestReleaseBuilder:
    def test_desktop_sets_three_platforms(self) -> None:
        config = _ok(
            ReleaseBuilder(MockConsole())
            .with_version("1.0.0")
            .with_application_info("notes", "io.example.Notes", "Notes")
            .for_desktop("Notes.Desktop.csproj")
            .build()
        )

        assert config.enabled() == [TargetPlatform.WINDOWS, TargetPlatform.LINUX, TargetPlatform.MACOS]
        assert config.windows is not None
        assert config.windows.options.package_name == "notes"
        assert config.windows.options.version == "1.0.0"
        assert config.linux is not None
        assert config.linux.metadata.app_id == "io.example.Notes"
        assert config.linux.metadata.version == "1.0.0"

    def test_last_write_wins(self) -> None:
        config = _ok(
            ReleaseBuilder(MockConsole())
            .with_version("1.0.0")
            .for_windows("First.csproj")
            .for_windows("Second.csproj", WindowsDeploymentOptions(package_name="p", version="2"))
            .build()
        )

        assert config.windows is not None
        assert config.windows.project == Path("Second.csproj")
        assert config.windows.options.version == "2"

    def test_android_package_name_filled_from_app_info(self) -> None:
        config = _ok(
            ReleaseBuilder(MockConsole())
            .with_version("1.0.0")
            .with_application_info("notes", "io.example.Notes", "Notes")
            .for_android("Notes.Android.csproj", android_options(package_name=" "))
            .build()
        )

        assert config.android is not None
        assert config.android.options.package_name == "notes"

    def test_android_package_name_kept(self) -> None:
        config = _ok(
            ReleaseBuilder(MockConsole())
            .with_version("1.0.0")
            .with_application_info("notes", "", "")
            .for_android("A.csproj", android_options(package_name="custom"))
            .build()
        )

        assert config.android is not None
        assert config.android.options.package_name == "custom"

    def test_avalonia_convention(self) -> None:
        config = _ok(
            ReleaseBuilder(MockConsole())
            .for_avalonia_projects("Notes", "3.0.0", android_options("notes"))
            .build()
        )

        assert config.version == "3.0.0"
        assert config.platforms == (
            TargetPlatform.WINDOWS
            | TargetPlatform.LINUX
            | TargetPlatform.MACOS
            | TargetPlatform.ANDROID
            | TargetPlatform.WEBASSEMBLY
        )
        assert config.project_for(TargetPlatform.WEBASSEMBLY) == Path("Notes.Browser")
        assert config.project_for(TargetPlatform.ANDROID) == Path("Notes.Android")


class TestSolutionDiscovery:
    def _solution(self, tmp_path: Path, *names: str) -> Path:
        lines = [
            f'Project("{{FAE04EC0}}") = "{name}", "{name}\\{name}.csproj", "{{{i}}}"'
            for i, name in enumerate(names)
        ]
        solution = tmp_path / "Notes.sln"
        solution.write_text("\n".join(lines) + "\n")
        return solution

    def test_discovers_projects(self, tmp_path: Path) -> None:
        solution = self._solution(tmp_path, "Notes", "Notes.Desktop", "Notes.Browser", "Notes.Android")
        console = MockConsole()

        config = _ok(
            ReleaseBuilder(console)
            .for_avalonia_projects_from_solution(solution, "1.0.0", android_options("notes"))
            .build()
        )

        desktop = (tmp_path / "Notes.Desktop" / "Notes.Desktop.csproj").resolve()
        assert config.project_for(TargetPlatform.WINDOWS) == desktop
        assert config.project_for(TargetPlatform.MACOS) == desktop
        assert config.project_for(TargetPlatform.ANDROID) is not None
        assert console.find("[Discovery] Found Desktop project")

    def test_android_needs_options(self, tmp_path: Path) -> None:
        solution = self._solution(tmp_path, "Notes.Desktop", "Notes.Android")
        console = MockConsole()

        config = _ok(
            ReleaseBuilder(console).for_avalonia_projects_from_solution(solution, "1.0.0").build()
        )

        assert TargetPlatform.ANDROID not in config.platforms
        assert TargetPlatform.WEBASSEMBLY not in config.platforms
        assert console.find("Android project found but no Android options provided")
        assert console.find("Browser project not found in solution")

    def test_unreadable_solution_fails_build(self, tmp_path: Path) -> None:
        result = (
            ReleaseBuilder(MockConsole())
            .for_avalonia_projects_from_solution(tmp_path / "missing.sln", "1.0.0")
            .build()
        )

        assert isinstance(result, Err)
        assert "missing.sln" in result.error.message


class TestTargetPlatform:
    def test_display_names(self) -> None:
        assert TargetPlatform.MACOS.display_name == "macOS"
        assert TargetPlatform.WEBASSEMBLY.display_name == "WebAssembly"

    def test_enabled_uses_packaging_order(self) -> None:
        config = ReleaseConfiguration(
            version="1",
            platforms=TargetPlatform.WEBASSEMBLY | TargetPlatform.ANDROID | TargetPlatform.WINDOWS,
        )
        assert config.enabled() == [
            TargetPlatform.WINDOWS,
            TargetPlatform.ANDROID,
            TargetPlatform.WEBASSEMBLY,
        ]
        assert config.project_for(TargetPlatform.WINDOWS) is None
