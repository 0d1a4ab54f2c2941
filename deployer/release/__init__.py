"""Release description, packaging strategy and plan construction."""

from .builder import ReleaseBuilder
from .configuration import (
    PACKAGING_ORDER,
    AndroidPlatformConfig,
    ApplicationInfo,
    LinuxPlatformConfig,
    MacOsPlatformConfig,
    ReleaseConfiguration,
    TargetPlatform,
    WebAssemblyPlatformConfig,
    WindowsPlatformConfig,
)
from .fanout import stream_bounded
from .from_config import publishing_options, release_from_config
from .packager import Packager, PlatformPackager
from .plans import build_plans, publish_release
from .solution import SolutionProject, parse_solution_projects
from .strategy import ReleasePackagingStrategy

__all__ = [
    "ReleaseBuilder",
    "PACKAGING_ORDER",
    "AndroidPlatformConfig",
    "ApplicationInfo",
    "LinuxPlatformConfig",
    "MacOsPlatformConfig",
    "ReleaseConfiguration",
    "TargetPlatform",
    "WebAssemblyPlatformConfig",
    "WindowsPlatformConfig",
    "stream_bounded",
    "publishing_options",
    "release_from_config",
    "Packager",
    "PlatformPackager",
    "build_plans",
    "publish_release",
    "SolutionProject",
    "parse_solution_projects",
    "ReleasePackagingStrategy",
]
