"""MSIX packaging: manifest rendering and ``makeappx pack``."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import Protocol
from xml.sax.saxutils import quoteattr

from deployer.core.errors import DeployError
from deployer.core.result import Err, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.process import Runner, run
from deployer.resources.byte_source import NamedByteSource
from deployer.resources.container import DirectoryContainer

from .base import PLACEHOLDER_PNG, process_failure, spool_output, staging, write_text

__all__ = [
    "MsixManifest",
    "MsixBuilder",
    "MakeAppx",
    "normalize_msix_version",
    "render_manifest",
]

DEFAULT_MSIX_VERSION = "1.0.0.0"
DEFAULT_LOGO = "Assets\\StoreLogo.png"
DEFAULT_SQUARE150_LOGO = "Assets\\Square150x150Logo.png"
DEFAULT_SQUARE44_LOGO = "Assets\\Square44x44Logo.png"
DEFAULT_BACKGROUND = "transparent"


def normalize_msix_version(version: str | None) -> str:
    """Four non-negative integer segments; pre-release and build suffixes dropped.

    ``"1.2.3-beta+5"`` becomes ``"1.2.3.0"``.
    """
    if not version or not version.strip():
        return DEFAULT_MSIX_VERSION

    core = version.replace("+", "-").split("-")
    head = next((part.strip() for part in core if part.strip()), "")
    if not head:
        return DEFAULT_MSIX_VERSION

    segments = [s.strip() for s in head.split(".") if s.strip()]
    values: list[int] = []
    for i in range(4):
        try:
            values.append(max(int(segments[i]), 0) if i < len(segments) else 0)
        except ValueError:
            values.append(0)
    return ".".join(str(v) for v in values)


@dataclass(frozen=True, slots=True)
class MsixManifest:
    identity_name: str
    publisher: str
    version: str
    display_name: str
    publisher_display_name: str
    app_id: str
    executable: str
    description: str
    architecture: str = "x64"
    logo: str = DEFAULT_LOGO
    square150x150_logo: str = DEFAULT_SQUARE150_LOGO
    square44x44_logo: str = DEFAULT_SQUARE44_LOGO
    background_color: str = DEFAULT_BACKGROUND
    internet_client: bool = True
    run_full_trust: bool = True

    @property
    def logo_paths(self) -> tuple[str, ...]:
        return (self.logo, self.square150x150_logo, self.square44x44_logo)


def render_manifest(manifest: MsixManifest) -> str:
    capabilities: list[str] = []
    if manifest.internet_client:
        capabilities.append('    <Capability Name="internetClient" />')
    if manifest.run_full_trust:
        capabilities.append('    <rescap:Capability Name="runFullTrust" />')

    a = quoteattr
    lines = [
        '<?xml version="1.0" encoding="utf-8"?>',
        "<Package",
        '  xmlns="http://schemas.microsoft.com/appx/manifest/foundation/windows10"',
        '  xmlns:uap="http://schemas.microsoft.com/appx/manifest/uap/windows10"',
        '  xmlns:rescap="http://schemas.microsoft.com/appx/manifest/foundation/windows10/restrictedcapabilities"',
        '  IgnorableNamespaces="uap rescap">',
        f"  <Identity Name={a(manifest.identity_name)} Publisher={a(manifest.publisher)}"
        f" Version={a(manifest.version)} ProcessorArchitecture={a(manifest.architecture)} />",
        "  <Properties>",
        f"    <DisplayName>{_text(manifest.display_name)}</DisplayName>",
        f"    <PublisherDisplayName>{_text(manifest.publisher_display_name)}</PublisherDisplayName>",
        f"    <Logo>{_text(manifest.logo)}</Logo>",
        "  </Properties>",
        "  <Dependencies>",
        '    <TargetDeviceFamily Name="Windows.Desktop" MinVersion="10.0.17763.0"'
        ' MaxVersionTested="10.0.22621.0" />',
        "  </Dependencies>",
        "  <Resources>",
        '    <Resource Language="en-us" />',
        "  </Resources>",
        "  <Applications>",
        f"    <Application Id={a(manifest.app_id)} Executable={a(manifest.executable)}"
        ' EntryPoint="Windows.FullTrustApplication">',
        f"      <uap:VisualElements DisplayName={a(manifest.display_name)}"
        f" Description={a(manifest.description)}"
        f" BackgroundColor={a(manifest.background_color)}"
        f" Square150x150Logo={a(manifest.square150x150_logo)}"
        f" Square44x44Logo={a(manifest.square44x44_logo)} />",
        "    </Application>",
        "  </Applications>",
        "  <Capabilities>",
        *capabilities,
        "  </Capabilities>",
        "</Package>",
    ]
    return "\n".join(lines) + "\n"


def _text(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class MsixBuilder(Protocol):
    def build(
        self, container: DirectoryContainer, manifest: MsixManifest
    ) -> Result[NamedByteSource, DeployError]: ...


class MakeAppx:
    """Stages publish output with ``AppxManifest.xml`` and runs ``makeappx pack``."""

    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        runner: Runner = run,
        tool: str = "makeappx",
        keep_staging: bool = False,
    ) -> None:
        self._console = console
        self._runner = runner
        self._tool = tool
        self._keep = keep_staging

    def build(
        self, container: DirectoryContainer, manifest: MsixManifest
    ) -> Result[NamedByteSource, DeployError]:
        with staging("dp-msix", self._console, keep=self._keep) as work:
            content = work / "content"
            copied = container.write_to(content)
            if isinstance(copied, Err):
                return copied
            try:
                write_text(content / "AppxManifest.xml", render_manifest(manifest))
                _ensure_logos(content, manifest)
            except OSError as e:
                return Err(DeployError("io", f"Failed to stage MSIX content: {e}"))

            output = work / "package.msix"
            cmd = [self._tool, "pack", "/d", str(content), "/p", str(output), "/o"]
            result = self._runner(cmd, work)
            if isinstance(result, Err):
                return process_failure(self._tool, result.error)
            return spool_output(output)


def _ensure_logos(content: Path, manifest: MsixManifest) -> None:
    # makeappx refuses manifests that reference missing images.
    for relative in manifest.logo_paths:
        path = content.joinpath(*PureWindowsPath(relative).parts)
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(PLACEHOLDER_PNG)
