"""Named byte sources: the unit every platform module hands back.

A source may be fully in memory, lazily backed by a file, or backed by an
anonymous temporary file that the OS removes when it is closed. Consumers
only rely on ``read_bytes()`` and ``write_to()``.

Sources backed by a path inside a temporary publish directory must be
passed through ``detach()`` before that directory is removed.
"""

from __future__ import annotations

import shutil
import tempfile
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import IO, Protocol

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result

__all__ = [
    "NamedByteSource",
    "BytesResource",
    "FileResource",
    "SpooledResource",
    "RenamedResource",
    "DetachStrategy",
    "renamed",
    "detach",
    "detach_all",
]

_CHUNK = 1024 * 1024


class NamedByteSource(Protocol):
    """A named, possibly lazy, binary resource."""

    @property
    def name(self) -> str: ...

    def read_bytes(self) -> Result[bytes, DeployError]: ...

    def write_to(self, path: Path) -> Result[Path, DeployError]:
        """Write the content to ``path`` (a file path) and return it."""
        ...


def _io_error(action: str, name: str, e: OSError) -> Err[DeployError]:
    return Err(DeployError("io", f"Failed to {action} {name}: {e}"))


def _write_bytes(path: Path, data: bytes, name: str) -> Result[Path, DeployError]:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        return _io_error("write", name, e)
    return Ok(path)


@dataclass(frozen=True, slots=True)
class BytesResource:
    """Content held in memory."""

    name: str
    data: bytes

    def read_bytes(self) -> Result[bytes, DeployError]:
        return Ok(self.data)

    def write_to(self, path: Path) -> Result[Path, DeployError]:
        return _write_bytes(path, self.data, self.name)

    def __repr__(self) -> str:
        return f"BytesResource({self.name!r}, {len(self.data)} bytes)"


@dataclass(frozen=True, slots=True)
class FileResource:
    """Content read lazily from a file on disk."""

    name: str
    path: Path

    def read_bytes(self) -> Result[bytes, DeployError]:
        try:
            return Ok(self.path.read_bytes())
        except OSError as e:
            return _io_error("read", self.name, e)

    def write_to(self, path: Path) -> Result[Path, DeployError]:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.path, path)
        except OSError as e:
            return _io_error("copy", self.name, e)
        return Ok(path)


class SpooledResource:
    """Content held in an anonymous temporary file.

    The file has no directory entry (or is removed on close where the OS
    cannot unlink open files), so it survives the removal of whatever
    directory it was copied from and never leaks onto disk.
    """

    def __init__(self, name: str, handle: IO[bytes]) -> None:
        self._name = name
        self._handle = handle

    @property
    def name(self) -> str:
        return self._name

    @classmethod
    def from_file(cls, name: str, path: Path) -> Result[SpooledResource, DeployError]:
        handle = tempfile.TemporaryFile()
        try:
            with path.open("rb") as src:
                shutil.copyfileobj(src, handle, _CHUNK)
        except OSError as e:
            handle.close()
            return _io_error("spool", name, e)
        return Ok(cls(name, handle))

    @classmethod
    def from_bytes(cls, name: str, data: bytes) -> SpooledResource:
        handle = tempfile.TemporaryFile()
        handle.write(data)
        return cls(name, handle)

    def read_bytes(self) -> Result[bytes, DeployError]:
        try:
            self._handle.seek(0)
            return Ok(self._handle.read())
        except (OSError, ValueError) as e:
            return Err(DeployError("io", f"Failed to read {self._name}: {e}"))

    def write_to(self, path: Path) -> Result[Path, DeployError]:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._handle.seek(0)
            with path.open("wb") as dst:
                shutil.copyfileobj(self._handle, dst, _CHUNK)
        except (OSError, ValueError) as e:
            return Err(DeployError("io", f"Failed to write {self._name}: {e}"))
        return Ok(path)

    def close(self) -> None:
        self._handle.close()

    def __repr__(self) -> str:
        return f"SpooledResource({self._name!r})"


@dataclass(frozen=True, slots=True)
class RenamedResource:
    """Another source exposed under a different name."""

    inner: NamedByteSource
    name: str

    def read_bytes(self) -> Result[bytes, DeployError]:
        return self.inner.read_bytes()

    def write_to(self, path: Path) -> Result[Path, DeployError]:
        return self.inner.write_to(path)


def renamed(source: NamedByteSource, name: str) -> NamedByteSource:
    if source.name == name:
        return source
    if isinstance(source, RenamedResource):
        return RenamedResource(source.inner, name)
    return RenamedResource(source, name)


class DetachStrategy(Enum):
    """How ``detach`` keeps content alive once its directory is gone."""

    MEMORY = auto()
    TEMP_FILE = auto()


def detach(
    source: NamedByteSource,
    strategy: DetachStrategy = DetachStrategy.MEMORY,
) -> Result[NamedByteSource, DeployError]:
    """Return a source that no longer depends on the file system path
    backing ``source``.

    In-memory and spooled sources are already detached and returned as is.
    """
    if isinstance(source, RenamedResource):
        inner = detach(source.inner, strategy)
        if isinstance(inner, Err):
            return inner
        return Ok(renamed(inner.value, source.name))

    if isinstance(source, (BytesResource, SpooledResource)):
        return Ok(source)

    match strategy:
        case DetachStrategy.MEMORY:
            data = source.read_bytes()
            if isinstance(data, Err):
                return data
            return Ok(BytesResource(source.name, data.value))
        case DetachStrategy.TEMP_FILE:
            if isinstance(source, FileResource):
                spooled = SpooledResource.from_file(source.name, source.path)
                if isinstance(spooled, Err):
                    return spooled
                return Ok(spooled.value)
            data = source.read_bytes()
            if isinstance(data, Err):
                return data
            return Ok(SpooledResource.from_bytes(source.name, data.value))


def detach_all(
    sources: list[NamedByteSource],
    strategy: DetachStrategy = DetachStrategy.MEMORY,
) -> Result[list[NamedByteSource], DeployError]:
    detached: list[NamedByteSource] = []
    for source in sources:
        result = detach(source, strategy)
        if isinstance(result, Err):
            return result
        detached.append(result.value)
    return Ok(detached)
