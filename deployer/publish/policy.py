"""Cleanup policy and publishing options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from deployer.core.config import DEFAULT_ARTIFACTS_ROOT, DEFAULT_LOW_DISK_THRESHOLD

__all__ = ["PublishingMode", "PublishingCleanupPolicy", "PublishingOptions"]


class PublishingMode(Enum):
    CI = "ci"
    LOCAL = "local"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PublishingCleanupPolicy:
    """What to delete once a publish directory has served its purpose.

    CI runs remove publish output and packager staging; local runs keep
    everything around for inspection.
    """

    mode: PublishingMode
    low_disk_threshold: float = DEFAULT_LOW_DISK_THRESHOLD

    @property
    def remove_publish_directory(self) -> bool:
        return self.mode == PublishingMode.CI

    @property
    def remove_packager_staging(self) -> bool:
        return self.mode == PublishingMode.CI

    @classmethod
    def ci(cls, low_disk_threshold: float = DEFAULT_LOW_DISK_THRESHOLD) -> PublishingCleanupPolicy:
        return cls(PublishingMode.CI, low_disk_threshold)

    @classmethod
    def local(
        cls, low_disk_threshold: float = DEFAULT_LOW_DISK_THRESHOLD
    ) -> PublishingCleanupPolicy:
        return cls(PublishingMode.LOCAL, low_disk_threshold)


@dataclass(frozen=True, slots=True)
class PublishingOptions:
    cleanup_policy: PublishingCleanupPolicy
    artifacts_root: Path
    persist_artifacts: bool

    @classmethod
    def for_ci(cls, artifacts_root: Path | None = None) -> PublishingOptions:
        root = artifacts_root or Path.cwd() / DEFAULT_ARTIFACTS_ROOT
        return cls(PublishingCleanupPolicy.ci(), root, persist_artifacts=True)

    @classmethod
    def for_local(
        cls, artifacts_root: Path | None = None, *, persist_artifacts: bool = False
    ) -> PublishingOptions:
        root = artifacts_root or Path.cwd() / DEFAULT_ARTIFACTS_ROOT
        return cls(PublishingCleanupPolicy.local(), root, persist_artifacts)
