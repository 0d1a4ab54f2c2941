"""Android SDK location."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.detection import Platform, detect_platform

__all__ = ["AndroidSdk", "conventional_sdk_paths"]

_ENV_VARS = ("ANDROID_HOME", "ANDROID_SDK_ROOT")


def conventional_sdk_paths(platform: Platform, home: Path, env: Mapping[str, str]) -> list[Path]:
    match platform:
        case Platform.WINDOWS:
            local = env.get("LOCALAPPDATA")
            paths = [Path(local) / "Android" / "Sdk"] if local else []
            return paths + [home / "AppData" / "Local" / "Android" / "Sdk"]
        case Platform.MACOS:
            return [home / "Library" / "Android" / "sdk"]
        case _:
            return [
                home / "Android" / "Sdk",
                Path("/usr/lib/android-sdk"),
                Path("/opt/android-sdk"),
            ]


class AndroidSdk:
    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        env: Mapping[str, str] | None = None,
        home: Path | None = None,
        platform: Platform | None = None,
    ) -> None:
        self._console = console
        self._env = os.environ if env is None else env
        self._home = home or Path.home()
        self._platform = platform or detect_platform()

    def check(self, path: str) -> Result[str, DeployError]:
        """Validate an explicitly configured SDK path."""
        if Path(path).expanduser().is_dir():
            return Ok(path)
        return Err(
            DeployError(
                "environment",
                f"Android SDK not found at {path}",
                hint="Fix sdk_path in [android] or remove it to auto-detect",
            )
        )

    def find_path(self) -> Result[str, DeployError]:
        candidates: list[Path] = []
        for var in _ENV_VARS:
            value = self._env.get(var)
            if value:
                candidates.append(Path(value).expanduser())
        candidates += conventional_sdk_paths(self._platform, self._home, self._env)

        for candidate in candidates:
            if candidate.is_dir():
                self._console.debug(f"Using Android SDK at {candidate}")
                return Ok(str(candidate))

        return Err(
            DeployError(
                "environment",
                "Android SDK not found",
                hint="Set ANDROID_HOME or sdk_path in [android]",
            )
        )

    def resolve(self, explicit: str | None) -> Result[str, DeployError]:
        if explicit:
            return self.check(explicit)
        return self.find_path()
