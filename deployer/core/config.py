"""Typed loading of deployer.toml.

The file describes one release: identity and version, publishing policy,
and one optional table per target platform. Paths are kept as written and
resolved against ``DeployerConfig.base_dir`` by the caller.

Example:
    [release]
    version = "1.4.0"
    package_name = "notepad"
    app_id = "io.example.Notepad"
    app_name = "Notepad"

    [publishing]
    mode = "ci"

    [linux]
    project = "src/Notepad.Desktop/Notepad.Desktop.csproj"
    categories = ["Utility", "TextEditor"]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_float,
    get_int,
    get_str,
    get_str_list,
    get_table,
)

__all__ = [
    "AndroidSection",
    "ConfigError",
    "DEFAULT_ARTIFACTS_ROOT",
    "DEFAULT_LOW_DISK_THRESHOLD",
    "DEFAULT_MAX_CONCURRENCY",
    "DeployerConfig",
    "LinuxSection",
    "MacOsSection",
    "MsixSection",
    "PublishingSection",
    "ReleaseSection",
    "WebAssemblySection",
    "WindowsSection",
    "load_config",
]

DEFAULT_ARTIFACTS_ROOT = "artifacts"
DEFAULT_LOW_DISK_THRESHOLD = 0.1
DEFAULT_MAX_CONCURRENCY = 4

PublishingModeName = Literal["ci", "local"]
AndroidFormatName = Literal["apk", "aab"]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseSection:
    version: str | None = None
    package_name: str | None = None
    app_id: str | None = None
    app_name: str | None = None
    # Optional .sln used to discover Desktop/Browser/Android projects.
    solution: str | None = None


@dataclass(frozen=True, slots=True)
class PublishingSection:
    mode: PublishingModeName = "ci"
    artifacts_root: str = DEFAULT_ARTIFACTS_ROOT
    # None means "use the mode default" (CI persists, Local does not).
    persist_artifacts: bool | None = None
    low_disk_threshold: float = DEFAULT_LOW_DISK_THRESHOLD
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY


@dataclass(frozen=True, slots=True)
class MsixSection:
    identity_name: str | None = None
    publisher: str | None = None
    publisher_display_name: str | None = None
    display_name: str | None = None
    description: str | None = None
    app_id: str | None = None


@dataclass(frozen=True, slots=True)
class WindowsSection:
    project: str
    package_name: str | None = None
    msix: MsixSection = field(default_factory=MsixSection)


@dataclass(frozen=True, slots=True)
class LinuxSection:
    project: str
    comment: str | None = None
    description: str | None = None
    summary: str | None = None
    homepage: str | None = None
    license: str | None = None
    startup_wm_class: str | None = None
    is_terminal: bool = False
    keywords: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    screenshots: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class MacOsSection:
    project: str


@dataclass(frozen=True, slots=True)
class AndroidSection:
    project: str
    application_id: str
    version_code: int
    display_version: str | None = None
    keystore: str | None = None
    key_alias: str = ""
    # Names of environment variables holding the secrets.
    key_pass_env: str | None = None
    store_pass_env: str | None = None
    format: AndroidFormatName = "apk"
    sdk_path: str | None = None


@dataclass(frozen=True, slots=True)
class WebAssemblySection:
    project: str


@dataclass(frozen=True, slots=True)
class DeployerConfig:
    """Parsed deployer.toml."""

    base_dir: Path
    release: ReleaseSection = field(default_factory=ReleaseSection)
    publishing: PublishingSection = field(default_factory=PublishingSection)
    windows: WindowsSection | None = None
    linux: LinuxSection | None = None
    macos: MacOsSection | None = None
    android: AndroidSection | None = None
    webassembly: WebAssemblySection | None = None

    def resolve(self, relative: str) -> Path:
        """Resolve a path from the config against its directory."""
        path = Path(relative).expanduser()
        if path.is_absolute():
            return path
        return (self.base_dir / path).resolve()

    @classmethod
    def from_dict(cls, data: Mapping[str, object], base_dir: Path) -> DeployerConfig:
        """Create a config from parsed TOML.

        Raises:
            ValueError: A platform table is present but misses required keys.
        """
        release: StrDict = get_table(data, "release") or {}
        publishing: StrDict = get_table(data, "publishing") or {}

        mode = get_str(publishing, "mode") or "ci"
        if mode not in ("ci", "local"):
            raise ValueError(f"publishing.mode must be 'ci' or 'local', got {mode!r}")

        threshold = get_float(publishing, "low_disk_threshold")
        if threshold is not None and not 0 < threshold < 1:
            raise ValueError("publishing.low_disk_threshold must be between 0 and 1")

        concurrency = get_int(publishing, "max_concurrency")
        if concurrency is not None and concurrency < 1:
            raise ValueError("publishing.max_concurrency must be >= 1")

        return cls(
            base_dir=base_dir,
            release=ReleaseSection(
                version=get_str(release, "version"),
                package_name=get_str(release, "package_name"),
                app_id=get_str(release, "app_id"),
                app_name=get_str(release, "app_name"),
                solution=get_str(release, "solution"),
            ),
            publishing=PublishingSection(
                mode="local" if mode == "local" else "ci",
                artifacts_root=get_str(publishing, "artifacts_root") or DEFAULT_ARTIFACTS_ROOT,
                persist_artifacts=get_bool(publishing, "persist_artifacts"),
                low_disk_threshold=threshold or DEFAULT_LOW_DISK_THRESHOLD,
                max_concurrency=concurrency or DEFAULT_MAX_CONCURRENCY,
            ),
            windows=_windows(get_table(data, "windows")),
            linux=_linux(get_table(data, "linux")),
            macos=_macos(get_table(data, "macos")),
            android=_android(get_table(data, "android")),
            webassembly=_webassembly(get_table(data, "webassembly")),
        )


def _require_project(table: StrDict, section: str) -> str:
    project = get_str(table, "project")
    if project is None:
        raise ValueError(f"[{section}] requires 'project'")
    return project


def _windows(table: StrDict | None) -> WindowsSection | None:
    if table is None:
        return None
    msix: StrDict = get_table(table, "msix") or {}
    return WindowsSection(
        project=_require_project(table, "windows"),
        package_name=get_str(table, "package_name"),
        msix=MsixSection(
            identity_name=get_str(msix, "identity_name"),
            publisher=get_str(msix, "publisher"),
            publisher_display_name=get_str(msix, "publisher_display_name"),
            display_name=get_str(msix, "display_name"),
            description=get_str(msix, "description"),
            app_id=get_str(msix, "app_id"),
        ),
    )


def _linux(table: StrDict | None) -> LinuxSection | None:
    if table is None:
        return None
    return LinuxSection(
        project=_require_project(table, "linux"),
        comment=get_str(table, "comment"),
        description=get_str(table, "description"),
        summary=get_str(table, "summary"),
        homepage=get_str(table, "homepage"),
        license=get_str(table, "license"),
        startup_wm_class=get_str(table, "startup_wm_class"),
        is_terminal=bool(get_bool(table, "is_terminal")),
        keywords=get_str_list(table, "keywords") or (),
        categories=get_str_list(table, "categories") or (),
        screenshots=get_str_list(table, "screenshots") or (),
    )


def _macos(table: StrDict | None) -> MacOsSection | None:
    if table is None:
        return None
    return MacOsSection(project=_require_project(table, "macos"))


def _android(table: StrDict | None) -> AndroidSection | None:
    if table is None:
        return None
    application_id = get_str(table, "application_id")
    if application_id is None:
        raise ValueError("[android] requires 'application_id'")
    fmt = (get_str(table, "format") or "apk").lower()
    if fmt not in ("apk", "aab"):
        raise ValueError(f"android.format must be 'apk' or 'aab', got {fmt!r}")
    return AndroidSection(
        project=_require_project(table, "android"),
        application_id=application_id,
        version_code=get_int(table, "version_code") or 1,
        display_version=get_str(table, "display_version"),
        keystore=get_str(table, "keystore"),
        key_alias=get_str(table, "key_alias") or "",
        key_pass_env=get_str(table, "key_pass_env"),
        store_pass_env=get_str(table, "store_pass_env"),
        format="aab" if fmt == "aab" else "apk",
        sdk_path=get_str(table, "sdk_path"),
    )


def _webassembly(table: StrDict | None) -> WebAssemblySection | None:
    if table is None:
        return None
    return WebAssemblySection(project=_require_project(table, "webassembly"))


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[DeployerConfig, ConfigError]:
    """Load and parse deployer.toml.

    Args:
        path: Path to the config file.

    Returns:
        Ok(DeployerConfig) on success, Err(ConfigError) on failure.
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        config = DeployerConfig.from_dict(result.value, base_dir=path.parent.resolve())
        return Ok(config)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
