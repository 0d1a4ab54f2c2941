"""Linux package metadata.

``LinuxMetadata`` is what the release describes (one record for AppImage,
Flatpak, Deb and RPM). ``PackageMetadata`` is the resolved form handed to
the format builders once the publish output is known.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from deployer.platform.runtime import RuntimeTarget

from .categories import Categories, parse_categories

__all__ = ["LinuxMetadata", "PackageMetadata", "resolve_metadata", "DEFAULT_VERSION"]

DEFAULT_VERSION = "1.0.0"


@dataclass(frozen=True, slots=True)
class LinuxMetadata:
    app_id: str
    app_name: str
    package_name: str
    version: str | None = None
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
class PackageMetadata:
    app_id: str
    app_name: str
    package_name: str
    version: str
    target: RuntimeTarget
    executable: str
    comment: str
    description: str
    summary: str
    homepage: str | None
    license: str | None
    startup_wm_class: str | None
    is_terminal: bool
    keywords: tuple[str, ...]
    categories: Categories | None
    screenshots: tuple[str, ...]


def _absolute_url(value: str | None) -> str | None:
    if not value:
        return None
    parsed = urlparse(value)
    if parsed.scheme and parsed.netloc:
        return value
    return None


def resolve_metadata(
    metadata: LinuxMetadata, target: RuntimeTarget, executable: str
) -> PackageMetadata:
    """Fill in defaults and drop values that cannot be used."""
    comment = metadata.comment or metadata.summary or metadata.app_name
    summary = metadata.summary or comment
    description = metadata.description or summary
    screenshots = tuple(
        url for s in metadata.screenshots if (url := _absolute_url(s)) is not None
    )
    return PackageMetadata(
        app_id=metadata.app_id,
        app_name=metadata.app_name,
        package_name=metadata.package_name,
        version=metadata.version or DEFAULT_VERSION,
        target=target,
        executable=executable,
        comment=comment,
        description=description,
        summary=summary,
        homepage=_absolute_url(metadata.homepage),
        license=metadata.license,
        startup_wm_class=metadata.startup_wm_class,
        is_terminal=metadata.is_terminal,
        keywords=metadata.keywords,
        categories=parse_categories(metadata.categories),
        screenshots=screenshots,
    )
