"""DMG builder.

Wraps a published directory in a minimal ``.app`` bundle next to an
``Applications`` link and images it with ``hdiutil`` on macOS hosts or
``genisoimage`` (HFS hybrid) elsewhere.
"""

from __future__ import annotations

import os
import plistlib
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.detection import is_macos
from deployer.platform.process import Runner, run

from .base import process_failure, staging

__all__ = ["DmgRequest", "DmgBuilder", "DmgTool", "info_plist", "dmg_command"]


@dataclass(frozen=True, slots=True)
class DmgRequest:
    source_dir: Path
    output: Path
    app_name: str
    executable: str
    version: str
    bundle_id: str


class DmgBuilder(Protocol):
    def build(self, request: DmgRequest) -> Result[Path, DeployError]: ...


def info_plist(request: DmgRequest) -> bytes:
    return plistlib.dumps(
        {
            "CFBundleName": request.app_name,
            "CFBundleDisplayName": request.app_name,
            "CFBundleExecutable": request.executable,
            "CFBundleIdentifier": request.bundle_id,
            "CFBundlePackageType": "APPL",
            "CFBundleShortVersionString": request.version,
            "CFBundleVersion": request.version,
            "NSHighResolutionCapable": True,
        }
    )


def dmg_command(volume_dir: Path, output: Path, volume_name: str, *, macos: bool) -> list[str]:
    if macos:
        return [
            "hdiutil", "create",
            "-volname", volume_name,
            "-srcfolder", str(volume_dir),
            "-ov",
            "-format", "UDZO",
            str(output),
        ]
    return [
        "genisoimage",
        "-V", volume_name,
        "-D", "-R", "-apple", "-no-pad",
        "-o", str(output),
        str(volume_dir),
    ]


class DmgTool:
    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        runner: Runner = run,
        macos: bool | None = None,
        keep_staging: bool = False,
    ) -> None:
        self._console = console
        self._runner = runner
        self._macos = is_macos() if macos is None else macos
        self._keep = keep_staging

    def build(self, request: DmgRequest) -> Result[Path, DeployError]:
        with staging("dp-dmg", self._console, keep=self._keep) as work:
            volume = work / request.app_name
            bundle = volume / f"{request.app_name}.app" / "Contents"
            try:
                shutil.copytree(request.source_dir, bundle / "MacOS")
                (bundle / "Info.plist").write_bytes(info_plist(request))
                if self._macos:
                    os.symlink("/Applications", volume / "Applications")
            except OSError as e:
                return Err(DeployError("io", f"Failed to stage DMG volume: {e}"))

            cmd = dmg_command(volume, request.output, request.app_name, macos=self._macos)
            result = self._runner(cmd, work)
            if isinstance(result, Err):
                return process_failure(cmd[0], result.error)
            if not request.output.is_file():
                return Err(DeployError("artifact", f"DMG was not produced: {request.output}"))
            return Ok(request.output)
