"""Subprocess execution with Result-based error handling.

All external tools (``dotnet``, ``dpkg-deb``, ``rpmbuild``, ``makeappx`` ...)
are spawned through ``run``. Collaborators take a ``Runner`` so tests can
substitute a fake.

Usage:
    result = run(["dotnet", "--version"], cwd=Path("."))
    match result:
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result

__all__ = ["ProcessError", "Runner", "merged_env", "run", "to_deploy_error"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never ran).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


class Runner(Protocol):
    """Callable signature of ``run``."""

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]: ...


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def merged_env(extra: Mapping[str, str] | None) -> dict[str, str] | None:
    """Current environment overlaid with ``extra`` (None when nothing to add)."""
    if not extra:
        return None
    env = dict(os.environ)
    env.update(extra)
    return env


def to_deploy_error(error: ProcessError, *, tail_lines: int = 20) -> DeployError:
    """Convert a process failure into a ``process`` DeployError.

    The last lines of stderr (or stdout when stderr is empty, as dotnet
    reports build errors on stdout) are appended to the message.
    """
    output = error.stderr.strip() or error.stdout.strip()
    lines = output.splitlines()[-tail_lines:]
    detail = "\n".join(lines)
    message = f"{error}\n{detail}" if detail else str(error)
    hint = None
    if error.returncode == -1 and error.command:
        hint = f"Is '{error.command[0]}' installed and on PATH?"
    return DeployError("process", message, hint)
