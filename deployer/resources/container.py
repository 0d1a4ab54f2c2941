"""Directory containers for publish output."""

from __future__ import annotations

import shutil
from collections.abc import Iterator
from pathlib import Path, PurePosixPath
from types import TracebackType

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.files import directory_size, discard

from .byte_source import FileResource

__all__ = ["DirectoryContainer", "PublishedDirectory"]


class DirectoryContainer:
    """Read-only view over a directory tree."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def path(self) -> Path:
        return self._root

    def files(self) -> Iterator[tuple[PurePosixPath, FileResource]]:
        """Yield ``(relative_path, resource)`` for every file, sorted."""
        if not self._root.is_dir():
            return
        for p in sorted(self._root.rglob("*")):
            if p.is_file():
                rel = PurePosixPath(p.relative_to(self._root).as_posix())
                yield rel, FileResource(p.name, p)

    def top_level_files(self) -> list[FileResource]:
        if not self._root.is_dir():
            return []
        return [FileResource(p.name, p) for p in sorted(self._root.iterdir()) if p.is_file()]

    def subcontainer(self, name: str) -> DirectoryContainer | None:
        """Find a direct child directory by name, case-insensitively."""
        if not self._root.is_dir():
            return None
        exact = self._root / name
        if exact.is_dir():
            return DirectoryContainer(exact)
        wanted = name.lower()
        for child in sorted(self._root.iterdir()):
            if child.is_dir() and child.name.lower() == wanted:
                return DirectoryContainer(child)
        return None

    def write_to(self, destination: Path) -> Result[Path, DeployError]:
        """Copy the whole tree into ``destination``."""
        try:
            shutil.copytree(self._root, destination, dirs_exist_ok=True)
        except OSError as e:
            return Err(DeployError("io", f"Failed to copy {self._root} to {destination}: {e}"))
        return Ok(destination)

    def size_bytes(self) -> int:
        if not self._root.is_dir():
            return 0
        return directory_size(self._root)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._root)!r})"


class PublishedDirectory(DirectoryContainer):
    """A container that owns its directory and removes it on ``close()``."""

    def __init__(self, root: Path, *, console: ConsoleProtocol | None = None) -> None:
        super().__init__(root)
        self._console = console
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> bool:
        """Delete the directory (best effort). Later calls do nothing."""
        if self._closed:
            return True
        self._closed = True
        return discard(self._root, console=self._console)

    def __enter__(self) -> PublishedDirectory:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
