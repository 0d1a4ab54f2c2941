"""Make sure the ``android`` .NET workload is installed."""

from __future__ import annotations

from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.process import Runner, run, to_deploy_error

__all__ = ["AndroidWorkloadGuard"]

_WORKLOAD_ID = "android"


class AndroidWorkloadGuard:
    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        runner: Runner = run,
        dotnet: str = "dotnet",
        cwd: Path | None = None,
    ) -> None:
        self._console = console
        self._runner = runner
        self._dotnet = dotnet
        self._cwd = cwd or Path.cwd()

    def ensure_workload(self) -> Result[None, DeployError]:
        listed = self._runner([self._dotnet, "workload", "list"], self._cwd)
        if isinstance(listed, Err):
            self._console.error(f"Failed to list workloads: {listed.error}")
            return Err(to_deploy_error(listed.error))

        if _WORKLOAD_ID in listed.value.lower():
            self._console.debug("Android workload already installed.")
            return Ok(None)

        self._console.info("Android workload not found. Installing...")
        installed = self._runner(
            [self._dotnet, "workload", "install", _WORKLOAD_ID, "--skip-manifest-update"],
            self._cwd,
        )
        if isinstance(installed, Err):
            self._console.error(f"Android workload installation failed: {installed.error}")
            return Err(to_deploy_error(installed.error))
        return Ok(None)
