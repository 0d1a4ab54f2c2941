"""Filesystem helpers for scratch locations and best-effort cleanup."""

from __future__ import annotations

import shutil
import tempfile
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from deployer.output.console import ConsoleProtocol

__all__ = [
    "discard",
    "temp_root",
    "new_temp_dir",
    "new_temp_path",
    "directory_size",
]

_TEMP_DIR_NAME = "deployer"


def temp_root() -> Path:
    """Process-wide scratch directory, created on first use."""
    root = Path(tempfile.gettempdir()) / _TEMP_DIR_NAME
    root.mkdir(parents=True, exist_ok=True)
    return root


def new_temp_dir(prefix: str) -> Path:
    """Create a uniquely named directory under ``temp_root()``."""
    path = temp_root() / f"{prefix}-{uuid.uuid4().hex}"
    path.mkdir(parents=True)
    return path


def new_temp_path(prefix: str, suffix: str = "") -> Path:
    """Return a unique, not yet created file path under ``temp_root()``."""
    return temp_root() / f"{prefix}-{uuid.uuid4().hex}{suffix}"


def discard(path: Path | None, *, console: ConsoleProtocol | None = None) -> bool:
    """Delete a file or directory tree, logging instead of raising.

    Returns True when the path no longer exists afterwards.
    """
    if path is None:
        return True
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
        else:
            return True
    except OSError as e:
        if console is not None:
            console.warning(f"Failed to clean up {path}: {e}")
        return False
    if console is not None:
        console.debug(f"Cleaned up {path}")
    return True


def directory_size(path: Path) -> int:
    """Total size in bytes of the regular files under ``path``."""
    total = 0
    for p in path.rglob("*"):
        if p.is_file() and not p.is_symlink():
            total += p.stat().st_size
    return total
