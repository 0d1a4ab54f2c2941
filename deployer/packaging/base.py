"""Shared plumbing for the shell-out package builders."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.files import discard, new_temp_dir
from deployer.platform.process import ProcessError, to_deploy_error
from deployer.resources.byte_source import NamedByteSource, SpooledResource

__all__ = [
    "PLACEHOLDER_PNG",
    "icon_png",
    "staging",
    "spool_output",
    "write_script",
    "write_text",
    "process_failure",
]

# 1x1 transparent PNG for formats that refuse to build without an icon.
PLACEHOLDER_PNG = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000a49444154789c63000100000500010d0a2db40000000049454e44ae426082"
)


@contextmanager
def staging(
    prefix: str, console: ConsoleProtocol, *, keep: bool = False
) -> Iterator[Path]:
    """Yield a fresh working directory, removed on exit unless ``keep``."""
    path = new_temp_dir(prefix)
    try:
        yield path
    finally:
        if keep:
            console.debug(f"Keeping staging directory {path}")
        else:
            discard(path, console=console)


def spool_output(path: Path, name: str | None = None) -> Result[NamedByteSource, DeployError]:
    """Detach a produced package from the staging directory it lives in."""
    if not path.is_file():
        return Err(DeployError("artifact", f"Expected package was not produced: {path}"))
    spooled = SpooledResource.from_file(name or path.name, path)
    if isinstance(spooled, Err):
        return spooled
    return Ok(spooled.value)


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def write_script(path: Path, content: str) -> None:
    write_text(path, content)
    mode = path.stat().st_mode
    os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def process_failure(tool: str, error: ProcessError) -> Err[DeployError]:
    converted = to_deploy_error(error)
    return Err(DeployError(converted.kind, f"{tool}: {converted.message}", converted.hint))


def icon_png(files: Sequence[NamedByteSource]) -> bytes:
    """Bytes of the first PNG whose name mentions icon or logo."""
    for resource in files:
        lower = resource.name.lower()
        if lower.endswith(".png") and ("icon" in lower or "logo" in lower):
            data = resource.read_bytes()
            if isinstance(data, Ok):
                return data.value
    return PLACEHOLDER_PNG
