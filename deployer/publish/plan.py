"""Value types passed between the publish pipeline and its plans."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Result
from deployer.resources.byte_source import NamedByteSource
from deployer.resources.container import DirectoryContainer, PublishedDirectory

__all__ = [
    "PublishRequest",
    "PublishOutput",
    "PublishLocation",
    "PreparedPublish",
    "PlatformPackagePlan",
    "CleanupAction",
]

CleanupAction = Callable[[], None]


def _no_properties() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class PublishRequest:
    """Inputs for one ``dotnet publish`` invocation."""

    project: Path
    runtime_identifier: str | None = None
    self_contained: bool = True
    single_file: bool = False
    configuration: str = "Release"
    properties: Mapping[str, str] = field(default_factory=_no_properties)


@dataclass(frozen=True, slots=True)
class PublishOutput:
    container: PublishedDirectory
    path: Path
    size_bytes: int


@dataclass(frozen=True, slots=True)
class PublishLocation:
    """Where a successful publish landed."""

    platform: str
    runtime_identifier: str
    path: Path
    container: DirectoryContainer
    size_bytes: int


@dataclass(frozen=True, slots=True)
class PreparedPublish:
    request: PublishRequest
    # Runs once the artifacts have been built (or the plan aborted).
    cleanup: CleanupAction | None = None


@dataclass(frozen=True, slots=True)
class PlatformPackagePlan:
    """One platform/runtime to publish and package."""

    platform: str
    runtime_identifier: str
    runtime_label: str
    prepare: Callable[[], Result[PreparedPublish, DeployError]]
    build_artifacts: Callable[[PublishLocation], Result[list[NamedByteSource], DeployError]]
