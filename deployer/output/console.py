"""Console output abstraction.

Services never print directly: they receive a ``ConsoleProtocol``. The
production implementation renders with Rich; ``MockConsole`` captures
output for tests. ``ScopedConsole`` tags every message with the platform
or packaging step that produced it, e.g. ``[Windows MSIX ARM64]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
    "ScopedConsole",
    "for_platform",
    "for_packaging",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def debug(self, message: str) -> None:
        """Print a diagnostic message (only shown when verbose)."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def newline(self) -> None: ...


class RichConsole:
    """Console implementation using Rich."""

    def __init__(self, *, verbose: bool = False, stderr: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)
        self._verbose = verbose
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.BOLD: "bold",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._console.print(message, style="dim", markup=False)

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {_escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {_escape(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {_escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {_escape(message)}")

    def header(self, message: str) -> None:
        self._console.print(f"\n[blue bold]{_escape(message)}[/blue bold]")

    def newline(self) -> None:
        self._console.print()


def _escape(message: str) -> str:
    from rich.markup import escape

    return escape(message)


class ScopedConsole:
    """Console wrapper that prefixes messages with ``[scope]``."""

    def __init__(self, inner: ConsoleProtocol, scope: str) -> None:
        self._inner = inner
        self.scope = scope

    def _tag(self, message: str) -> str:
        return f"[{self.scope}] {message}"

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._inner.print(self._tag(message), style)

    def debug(self, message: str) -> None:
        self._inner.debug(self._tag(message))

    def success(self, message: str) -> None:
        self._inner.success(self._tag(message))

    def error(self, message: str) -> None:
        self._inner.error(self._tag(message))

    def warning(self, message: str) -> None:
        self._inner.warning(self._tag(message))

    def info(self, message: str) -> None:
        self._inner.info(self._tag(message))

    def header(self, message: str) -> None:
        self._inner.header(self._tag(message))

    def newline(self) -> None:
        self._inner.newline()


def for_platform(console: ConsoleProtocol, platform: str) -> ConsoleProtocol:
    """Scope a console to a platform, e.g. ``[Linux]``."""
    if isinstance(console, ScopedConsole):
        console = console._inner  # pyright: ignore[reportPrivateUsage]
    return ScopedConsole(console, platform)


def for_packaging(console: ConsoleProtocol, os_name: str, kind: str, arch: str) -> ConsoleProtocol:
    """Scope a console to one packaging step, e.g. ``[Windows MSIX ARM64]``."""
    scope = f"{os_name} {kind}" if not arch.strip() else f"{os_name} {kind} {arch.upper()}"
    return for_platform(console, scope)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def debug(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.DIM))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    # Test helper methods

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
