"""Output abstraction (console, scoped logging)."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    ScopedConsole,
    Style,
    for_packaging,
    for_platform,
)

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "ScopedConsole",
    "Style",
    "for_packaging",
    "for_platform",
]
