"""Static site bundle for the browser (``browser-wasm``).

The site is handed to the page-publishing flow, not the artifact stream.
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol, for_platform
from deployer.platform.runtime import WASM_RID
from deployer.publish.plan import PublishOutput, PublishRequest
from deployer.publish.publisher import Publisher
from deployer.resources.container import DirectoryContainer, PublishedDirectory

__all__ = ["WasmSite", "WasmDeployment"]

_WWWROOT = "wwwroot"


class WasmSite:
    """The ``wwwroot`` content of a publish output; closing it removes the
    whole publish directory."""

    def __init__(self, content: DirectoryContainer, owner: PublishedDirectory) -> None:
        self.content = content
        self._owner = owner

    @property
    def closed(self) -> bool:
        return self._owner.closed

    def close(self) -> None:
        self._owner.close()

    def __enter__(self) -> WasmSite:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class WasmDeployment:
    def __init__(self, publisher: Publisher, project: Path, console: ConsoleProtocol) -> None:
        self.publisher = publisher
        self.project = project
        self.console = for_platform(console, "WebAssembly")

    def create(self) -> Result[WasmSite, DeployError]:
        request = PublishRequest(project=self.project, runtime_identifier=WASM_RID)
        published = self.publisher.publish(request)
        if isinstance(published, Err):
            return published
        return self.site(published.value)

    def site(self, output: PublishOutput) -> Result[WasmSite, DeployError]:
        wwwroot = output.container.subcontainer(_WWWROOT)
        if wwwroot is None:
            output.container.close()
            return Err(
                DeployError("artifact", f"Cannot find {_WWWROOT} folder in {output.path}")
            )
        self.console.info(f"Site content ready at {wwwroot.path}")
        return Ok(WasmSite(wwwroot, output.container))
