"""Locate the application binary inside a publish output."""

from __future__ import annotations

from collections.abc import Sequence

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.resources.byte_source import FileResource
from deployer.resources.container import DirectoryContainer

__all__ = ["ELF_MAGIC", "MACHO_MAGICS", "find_native_executable", "find_windows_executable"]

ELF_MAGIC = b"\x7fELF"
MACHO_MAGICS = (
    b"\xcf\xfa\xed\xfe",
    b"\xce\xfa\xed\xfe",
    b"\xfe\xed\xfa\xcf",
    b"\xca\xfe\xba\xbe",
)


def _has_magic(resource: FileResource, magics: Sequence[bytes]) -> bool:
    try:
        with resource.path.open("rb") as f:
            head = f.read(4)
    except OSError:
        return False
    return any(head.startswith(m) for m in magics)


def find_native_executable(
    container: DirectoryContainer,
    preferred_names: Sequence[str],
    magics: Sequence[bytes] = (ELF_MAGIC,),
) -> Result[FileResource, DeployError]:
    """Prefer a top-level file named after the package or app, else the
    first top-level file whose header matches ``magics``."""
    files = container.top_level_files()
    wanted = [n.lower() for n in preferred_names if n]
    for name in wanted:
        for resource in files:
            if resource.name.lower() == name:
                return Ok(resource)

    for resource in files:
        if _has_magic(resource, magics):
            return Ok(resource)

    return Err(
        DeployError(
            "artifact",
            f"No executable found in publish output {container.path}",
            hint="Check that the project produces an application, not a library",
        )
    )


def find_windows_executable(container: DirectoryContainer) -> Result[FileResource, DeployError]:
    for _, resource in container.files():
        if resource.name.lower().endswith(".exe"):
            return Ok(resource)
    return Err(DeployError("artifact", f"No .exe found in publish output {container.path}"))
