"""macOS deployment options."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["MacOsDeploymentOptions", "sanitize_app_name"]

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_app_name(name: str) -> str:
    """Keep letters, digits, ``_`` and ``-``; fall back to ``App``."""
    cleaned = _UNSAFE.sub("", name)
    return cleaned or "App"


@dataclass(frozen=True, slots=True)
class MacOsDeploymentOptions:
    app_name: str
    version: str
    bundle_id: str | None = None

    @property
    def file_stem(self) -> str:
        return f"{sanitize_app_name(self.app_name)}-{self.version}-macos"
