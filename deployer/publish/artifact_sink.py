"""Persist produced artifacts under ``<root>/<platform>/<rid>/``."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.resources.byte_source import NamedByteSource

__all__ = ["ArtifactSink"]


class ArtifactSink:
    def __init__(self, root: Path, console: ConsoleProtocol) -> None:
        self._root = root
        self._console = console

    @property
    def root(self) -> Path:
        return self._root

    def target_dir(self, platform: str, runtime_identifier: str) -> Path:
        return self._root / platform.lower() / runtime_identifier

    def persist(
        self,
        platform: str,
        runtime_identifier: str,
        artifacts: Sequence[NamedByteSource],
    ) -> Result[list[Path], DeployError]:
        """Write every artifact in order; stop at the first failure."""
        target = self.target_dir(platform, runtime_identifier)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(DeployError("io", f"Failed to create {target}: {e}"))

        written: list[Path] = []
        for artifact in artifacts:
            result = artifact.write_to(target / artifact.name)
            if isinstance(result, Err):
                return result
            self._console.info(f"Stored artifact {result.value}")
            written.append(result.value)
        return Ok(written)
