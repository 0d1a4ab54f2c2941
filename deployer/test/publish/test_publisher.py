"""Tests for deployer.publish.publisher module."""

from __future__ import annotations

from pathlib import Path

from deployer.core.result import Err, Ok
from deployer.output.console import MockConsole
from deployer.publish.plan import PublishRequest
from deployer.publish.publisher import DotnetPublisher, publish_command
from deployer.test.fakes import FakeRunner, process_error


class TestPublishCommand:
    def test_full_command(self, tmp_path: Path) -> None:
        request = PublishRequest(
            project=Path("App.csproj"),
            runtime_identifier="win-x64",
            single_file=True,
            properties={"Version": "1.0.0"},
        )
        cmd = publish_command("dotnet", request, tmp_path)

        assert cmd[:5] == ["dotnet", "publish", "App.csproj", "-c", "Release"]
        assert ["-r", "win-x64"] == cmd[cmd.index("-r") : cmd.index("-r") + 2]
        assert "-p:PublishSingleFile=true" in cmd
        assert "-p:Version=1.0.0" in cmd
        assert cmd[-2:] == ["-o", str(tmp_path)]

    def test_portable_framework_dependent(self, tmp_path: Path) -> None:
        request = PublishRequest(project=Path("App.csproj"), self_contained=False)
        cmd = publish_command("dotnet", request, tmp_path)

        assert "-r" not in cmd
        assert "-p:PublishSingleFile=true" not in cmd
        assert ["--self-contained", "false"] == cmd[cmd.index("--self-contained") :][:2]


class TestDotnetPublisher:
    def test_missing_project(self, tmp_path: Path) -> None:
        publisher = DotnetPublisher(MockConsole(), runner=FakeRunner())
        result = publisher.publish(PublishRequest(project=tmp_path / "Nope.csproj"))

        assert isinstance(result, Err)
        assert result.error.kind == "configuration"

    def test_success_returns_owned_directory(self, tmp_path: Path) -> None:
        project = tmp_path / "App.csproj"
        project.write_text("<Project/>")
        runner = FakeRunner()
        publisher = DotnetPublisher(MockConsole(), runner=runner)

        result = publisher.publish(PublishRequest(project=project, runtime_identifier="linux-x64"))

        assert isinstance(result, Ok)
        output = result.value
        assert output.path.is_dir()
        assert runner.calls[0][-1] == str(output.path)
        output.container.close()
        assert not output.path.exists()

    def test_failure_discards_output_and_hides_secrets(self, tmp_path: Path) -> None:
        project = tmp_path / "App.csproj"
        project.write_text("<Project/>")
        runner = FakeRunner({"dotnet publish": process_error(["dotnet", "publish"], 1, "CS1002")})
        console = MockConsole()
        publisher = DotnetPublisher(console, runner=runner)

        result = publisher.publish(
            PublishRequest(project=project, properties={"AndroidSigningKeyPass": "hunter2"})
        )

        assert isinstance(result, Err)
        assert result.error.kind == "process"
        assert "CS1002" in result.error.message
        output = Path(runner.calls[0][-1])
        assert not output.exists()
        assert "hunter2" not in console.text
        assert "AndroidSigningKeyPass" in console.text
