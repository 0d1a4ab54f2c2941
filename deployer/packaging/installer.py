"""Windows setup installer (Inno Setup ``iscc``)."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from deployer.core.errors import DeployError
from deployer.core.result import Err, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.process import Runner, run
from deployer.resources.byte_source import NamedByteSource
from deployer.resources.container import DirectoryContainer

from .base import process_failure, spool_output, staging, write_text

__all__ = ["SetupOptions", "SetupBuilder", "InnoSetup", "render_inno_script", "find_iscc"]

_DEFAULT_ISCC = Path(r"C:\Program Files (x86)\Inno Setup 6\ISCC.exe")


@dataclass(frozen=True, slots=True)
class SetupOptions:
    app_id: str
    app_name: str
    version: str
    executable: str
    publisher: str
    architecture: str = "x64"
    icon: Path | None = None


class SetupBuilder(Protocol):
    def build(
        self, container: DirectoryContainer, options: SetupOptions
    ) -> Result[NamedByteSource, DeployError]: ...


def render_inno_script(options: SetupOptions, source_dir: Path, output_dir: Path) -> str:
    arch = "arm64" if options.architecture == "arm64" else "x64compatible"
    name = options.app_name
    lines = [
        "[Setup]",
        f"AppId={options.app_id}",
        f"AppName={name}",
        f"AppVersion={options.version}",
        f"AppPublisher={options.publisher}",
        f"DefaultDirName={{autopf}}\\{name}",
        "DisableProgramGroupPage=yes",
        f"OutputDir={output_dir}",
        "OutputBaseFilename=setup",
        "Compression=lzma2",
        "SolidCompression=yes",
        "WizardStyle=modern",
        "PrivilegesRequired=lowest",
        f"ArchitecturesAllowed={arch}",
        f"ArchitecturesInstallIn64BitMode={arch}",
    ]
    if options.icon is not None:
        lines.append(f"SetupIconFile={options.icon}")
    lines += [
        "",
        "[Tasks]",
        'Name: "desktopicon"; Description: "Create a desktop shortcut"; '
        'GroupDescription: "Additional icons:"',
        "",
        "[Files]",
        f'Source: "{source_dir}\\*"; DestDir: "{{app}}"; Flags: ignoreversion recursesubdirs',
        "",
        "[Icons]",
        f'Name: "{{autoprograms}}\\{name}"; Filename: "{{app}}\\{options.executable}"',
        f'Name: "{{autodesktop}}\\{name}"; Filename: "{{app}}\\{options.executable}"; '
        "Tasks: desktopicon",
        "",
        "[Run]",
        f'Filename: "{{app}}\\{options.executable}"; Description: "Launch {name}"; '
        "Flags: nowait postinstall skipifsilent",
    ]
    return "\n".join(lines) + "\n"


def find_iscc() -> str | None:
    found = shutil.which("ISCC") or shutil.which("iscc")
    if found:
        return found
    if _DEFAULT_ISCC.exists():
        return str(_DEFAULT_ISCC)
    return None


class InnoSetup:
    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        runner: Runner = run,
        tool: str | None = None,
        keep_staging: bool = False,
    ) -> None:
        self._console = console
        self._runner = runner
        self._tool = tool
        self._keep = keep_staging

    def build(
        self, container: DirectoryContainer, options: SetupOptions
    ) -> Result[NamedByteSource, DeployError]:
        tool = self._tool or find_iscc()
        if tool is None:
            return Err(
                DeployError(
                    "environment",
                    "Inno Setup compiler (ISCC) not found",
                    hint="Install Inno Setup 6 or put ISCC on PATH",
                )
            )

        with staging("dp-setup", self._console, keep=self._keep) as work:
            source = work / "app"
            copied = container.write_to(source)
            if isinstance(copied, Err):
                return copied
            script = work / "setup.iss"
            output_dir = work / "out"
            try:
                write_text(script, render_inno_script(options, source, output_dir))
            except OSError as e:
                return Err(DeployError("io", f"Failed to write installer script: {e}"))

            result = self._runner([tool, str(script)], work)
            if isinstance(result, Err):
                return process_failure("iscc", result.error)
            return spool_output(output_dir / "setup.exe")
