"""Fake collaborators shared by the test suite."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.platform.process import ProcessError
from deployer.publish.plan import PublishOutput, PublishRequest
from deployer.resources.container import PublishedDirectory

ELF_BINARY = b"\x7fELF" + b"\x00" * 60
MACHO_BINARY = b"\xcf\xfa\xed\xfe" + b"\x00" * 60


class FakePublisher:
    """Writes ``files`` into a fresh directory under ``root`` per publish."""

    def __init__(
        self,
        root: Path,
        files: Mapping[str, bytes],
        *,
        fail_rids: tuple[str, ...] = (),
    ) -> None:
        self.root = root
        self.files = dict(files)
        self.fail_rids = fail_rids
        self.requests: list[PublishRequest] = []
        self.outputs: list[Path] = []

    def publish(self, request: PublishRequest) -> Result[PublishOutput, DeployError]:
        self.requests.append(request)
        if request.runtime_identifier in self.fail_rids:
            return Err(DeployError("process", f"publish failed for {request.runtime_identifier}"))

        output = self.root / f"publish-{len(self.requests)}"
        for name, data in self.files.items():
            path = output / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        output.mkdir(parents=True, exist_ok=True)
        self.outputs.append(output)
        container = PublishedDirectory(output)
        return Ok(PublishOutput(container=container, path=output, size_bytes=container.size_bytes()))

    @property
    def rids(self) -> list[str | None]:
        return [r.runtime_identifier for r in self.requests]


@dataclass
class FakeRunner:
    """Records commands; answers from ``responses`` keyed by the first two words."""

    responses: dict[str, Result[str, ProcessError]] = field(default_factory=dict)
    calls: list[list[str]] = field(default_factory=list)

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        self.calls.append(cmd)
        return self.responses.get(" ".join(cmd[:3]), self.responses.get(" ".join(cmd[:2]), Ok("")))


def process_error(cmd: list[str], code: int = 1, stderr: str = "boom") -> Err[ProcessError]:
    return Err(ProcessError(tuple(cmd), code, "", stderr))
