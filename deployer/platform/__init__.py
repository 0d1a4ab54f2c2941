"""Platform abstraction layer."""

from .detection import (
    Arch,
    Platform,
    detect_arch,
    detect_platform,
    is_macos,
)
from .files import discard, new_temp_dir, new_temp_path, temp_root
from .process import ProcessError, Runner, run, to_deploy_error

__all__ = [
    # detection
    "Arch",
    "Platform",
    "detect_arch",
    "detect_platform",
    "is_macos",
    # files
    "discard",
    "new_temp_dir",
    "new_temp_path",
    "temp_root",
    # process
    "ProcessError",
    "Runner",
    "run",
    "to_deploy_error",
]
