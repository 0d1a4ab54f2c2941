"""Free-space admission check before a publish starts."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path
from typing import NamedTuple

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol

from .policy import PublishingCleanupPolicy

__all__ = ["DiskUsage", "DiskGuard"]


class DiskUsage(NamedTuple):
    total: int
    used: int
    free: int


UsageProbe = Callable[[Path], DiskUsage]


def _probe(path: Path) -> DiskUsage:
    usage = shutil.disk_usage(path)
    return DiskUsage(usage.total, usage.used, usage.free)


def _volume_root(path: Path) -> Path | None:
    resolved = path.resolve()
    anchor = resolved.anchor
    if not anchor:
        return None
    # disk_usage needs an existing path; walk up to the closest one.
    candidate = resolved
    while not candidate.exists():
        if candidate.parent == candidate:
            return Path(anchor)
        candidate = candidate.parent
    return candidate


class DiskGuard:
    """Refuse to publish when the target volume is nearly full.

    Fails when the free fraction is at or below half the policy threshold
    and warns when it is at or below the threshold. If the volume cannot be
    inspected the publish is allowed.
    """

    def __init__(
        self,
        policy: PublishingCleanupPolicy,
        console: ConsoleProtocol,
        *,
        probe: UsageProbe = _probe,
    ) -> None:
        self._policy = policy
        self._console = console
        self._probe = probe

    def ensure_has_space(
        self, target: Path, platform: str, runtime_identifier: str
    ) -> Result[None, DeployError]:
        try:
            root = _volume_root(target)
            if root is None:
                return Ok(None)

            usage = self._probe(root)
            if usage.total <= 0:
                return Ok(None)

            free_ratio = usage.free / usage.total
            threshold = self._policy.low_disk_threshold
            percent = f"{free_ratio:.2%}"

            if free_ratio <= threshold / 2:
                return Err(
                    DeployError(
                        "environment",
                        f"Insufficient disk space to publish for {platform} "
                        f"({runtime_identifier}). Free space: {percent}",
                        hint="Free up space or point artifacts_root at another volume",
                    )
                )

            if free_ratio <= threshold:
                self._console.warning(
                    f"Low disk space detected before publishing {platform} "
                    f"({runtime_identifier}). Free space: {percent}"
                )
        except (OSError, ValueError) as e:
            self._console.warning(f"Unable to verify disk space for {platform}: {e}")

        return Ok(None)
