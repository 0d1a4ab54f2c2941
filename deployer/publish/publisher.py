"""Publish collaborator: ``dotnet publish`` into a temporary directory."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.files import discard, new_temp_dir
from deployer.platform.process import Runner, run, to_deploy_error
from deployer.resources.container import PublishedDirectory

from .plan import PublishOutput, PublishRequest

__all__ = ["Publisher", "DotnetPublisher", "publish_command"]


class Publisher(Protocol):
    def publish(self, request: PublishRequest) -> Result[PublishOutput, DeployError]: ...


def _flag(value: bool) -> str:
    return "true" if value else "false"


def publish_command(dotnet: str, request: PublishRequest, output: Path) -> list[str]:
    cmd = [dotnet, "publish", str(request.project), "-c", request.configuration]
    if request.runtime_identifier:
        cmd += ["-r", request.runtime_identifier]
    cmd += ["--self-contained", _flag(request.self_contained)]
    if request.single_file:
        cmd.append("-p:PublishSingleFile=true")
    for key, value in request.properties.items():
        cmd.append(f"-p:{key}={value}")
    cmd += ["-o", str(output)]
    return cmd


class DotnetPublisher:
    """Runs ``dotnet publish`` and hands back a self-deleting directory."""

    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        runner: Runner = run,
        dotnet: str = "dotnet",
    ) -> None:
        self._console = console
        self._runner = runner
        self._dotnet = dotnet

    def publish(self, request: PublishRequest) -> Result[PublishOutput, DeployError]:
        project = request.project
        if not project.exists():
            return Err(
                DeployError("configuration", f"Project not found: {project}")
            )

        try:
            output = new_temp_dir("dp-publish")
        except OSError as e:
            return Err(DeployError("io", f"Failed to create publish directory: {e}"))

        rid = request.runtime_identifier or "portable"
        # Properties may carry signing passwords; log names only.
        props = ", ".join(sorted(request.properties)) or "none"
        self._console.info(f"Publishing {project.name} ({rid})")
        self._console.debug(f"Build properties: {props}")

        cwd = project.parent if project.is_file() else project
        result = self._runner(publish_command(self._dotnet, request, output), cwd)
        if isinstance(result, Err):
            discard(output, console=self._console)
            return Err(to_deploy_error(result.error))

        container = PublishedDirectory(output, console=self._console)
        size = container.size_bytes()
        self._console.debug(f"Published {size} bytes to {output}")
        return Ok(PublishOutput(container=container, path=output, size_bytes=size))
