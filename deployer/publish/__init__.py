"""Publish pipeline: disk guard, sessions, artifact sink."""

from .artifact_sink import ArtifactSink
from .disk_guard import DiskGuard, DiskUsage
from .pipeline import PublishPipeline
from .plan import (
    PlatformPackagePlan,
    PreparedPublish,
    PublishLocation,
    PublishOutput,
    PublishRequest,
)
from .policy import PublishingCleanupPolicy, PublishingMode, PublishingOptions
from .publisher import DotnetPublisher, Publisher
from .session import PublishSession, SessionState

__all__ = [
    "ArtifactSink",
    "DiskGuard",
    "DiskUsage",
    "PublishPipeline",
    "PlatformPackagePlan",
    "PreparedPublish",
    "PublishLocation",
    "PublishOutput",
    "PublishRequest",
    "PublishingCleanupPolicy",
    "PublishingMode",
    "PublishingOptions",
    "DotnetPublisher",
    "Publisher",
    "PublishSession",
    "SessionState",
]
