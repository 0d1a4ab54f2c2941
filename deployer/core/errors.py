"""Error payload and exit codes.

``DeployError`` is the single failure payload carried by every ``Err`` in
the project. ``ErrorCode`` maps its kind to a stable process exit status.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal

__all__ = ["DeployError", "ErrorCode", "ErrorKind", "exit_code_for"]


ErrorKind = Literal["configuration", "environment", "process", "artifact", "io"]


@dataclass(frozen=True, slots=True)
class DeployError:
    """Canonical failure payload.

    Attributes:
        kind: Coarse category (configuration, environment, process, artifact, io).
        message: Human-readable description.
        hint: Optional suggestion for the user.
    """

    kind: ErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message

    def __str__(self) -> str:
        return self.message


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable.
    - 0: Success
    - 1: User error (bad configuration, invalid arguments)
    - 2: Environment error (missing SDK or tool, low disk space)
    - 3: Build error (publish/package command failed, output missing)
    - 4: Network error
    - 5: I/O error (file not writable, permission denied)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK


def exit_code_for(error: DeployError) -> ErrorCode:
    """Map an error kind to its exit code."""
    match error.kind:
        case "configuration":
            return ErrorCode.USER_ERROR
        case "environment":
            return ErrorCode.ENV_ERROR
        case "process" | "artifact":
            return ErrorCode.BUILD_ERROR
        case "io":
            return ErrorCode.IO_ERROR
    return ErrorCode.BUILD_ERROR
