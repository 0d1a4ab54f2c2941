"""Package-format builders (AppImage, Flatpak, Deb, RPM, MSIX, DMG, setup)."""

from .appimage import AppImageBuilder, AppImageTool
from .categories import AdditionalCategory, Categories, MainCategory, parse_categories
from .deb import DebBuilder, DpkgDeb
from .dmg import DmgBuilder, DmgRequest, DmgTool
from .flatpak import FlatpakBuilder, FlatpakTool
from .installer import InnoSetup, SetupBuilder, SetupOptions
from .metadata import LinuxMetadata, PackageMetadata, resolve_metadata
from .msix import MakeAppx, MsixBuilder, MsixManifest, normalize_msix_version
from .rpm import RpmBuild, RpmBuilder

__all__ = [
    "AppImageBuilder",
    "AppImageTool",
    "AdditionalCategory",
    "Categories",
    "MainCategory",
    "parse_categories",
    "DebBuilder",
    "DpkgDeb",
    "DmgBuilder",
    "DmgRequest",
    "DmgTool",
    "FlatpakBuilder",
    "FlatpakTool",
    "InnoSetup",
    "SetupBuilder",
    "SetupOptions",
    "LinuxMetadata",
    "PackageMetadata",
    "resolve_metadata",
    "MakeAppx",
    "MsixBuilder",
    "MsixManifest",
    "normalize_msix_version",
    "RpmBuild",
    "RpmBuilder",
]
