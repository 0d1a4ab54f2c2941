"""Signing keystore materialized to a temp file for the publish step."""

from __future__ import annotations

from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.files import discard, new_temp_path

__all__ = ["TempKeystore"]


class TempKeystore:
    def __init__(self, path: Path, console: ConsoleProtocol) -> None:
        self.path = path
        self._console = console
        self._deleted = False

    @classmethod
    def create(cls, data: bytes, console: ConsoleProtocol) -> Result[TempKeystore, DeployError]:
        path = new_temp_path("dp-keystore", ".keystore")
        try:
            path.write_bytes(data)
            path.chmod(0o600)
        except OSError as e:
            discard(path, console=console)
            return Err(DeployError("io", f"Failed to write temporary keystore: {e}"))
        return Ok(cls(path, console))

    def delete(self) -> None:
        if self._deleted:
            return
        self._deleted = True
        self._console.debug(f"Deleting temporary keystore {self.path}")
        discard(self.path, console=self._console)
