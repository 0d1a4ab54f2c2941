"""Application icon discovery for Windows executables.

Looks, in order, at the project's ``ApplicationIcon``, an ``Icon="..."``
attribute in ``.axaml`` markup, a ``WindowIcon("...")`` call in C# code and
finally at image files whose name suggests an icon. PNG images are wrapped
into a single-entry ``.ico`` without decoding them. Any failure means "no
icon": the build continues without one.
"""

from __future__ import annotations

import re
import struct
import uuid
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result
from deployer.output.console import ConsoleProtocol
from deployer.platform.files import discard, temp_root

__all__ = [
    "WindowsIcon",
    "IconReference",
    "WindowsIconResolver",
    "interpret_resource_reference",
    "png_dimensions",
    "png_to_ico",
]

_ICON_ATTRIBUTE = re.compile(r'Icon="(?P<path>[^"]+)"', re.IGNORECASE)
_WINDOW_ICON_CALL = re.compile(r'WindowIcon\((?:@)?"(?P<path>[^"\r\n]+)"', re.IGNORECASE)
_PREFERRED_EXTENSIONS = (".ico", ".png", ".svg")
_PREFERRED_NAMES = ("appicon", "icon", "logo")
_SKIPPED_DIRS = frozenset({"bin", "obj"})
_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_SCAN_DIRS = (
    (),
    ("Assets",),
    ("Assets", "Icons"),
    ("Assets", "Images"),
    ("Resources",),
    ("Resources", "Icons"),
    ("Images",),
    ("Icons",),
)


@dataclass(frozen=True, slots=True)
class WindowsIcon:
    """An ``.ico`` ready to pass as ``ApplicationIcon``."""

    path: Path
    should_cleanup: bool

    def cleanup(self, console: ConsoleProtocol | None = None) -> None:
        if self.should_cleanup:
            discard(self.path, console=console)


@dataclass(frozen=True, slots=True)
class IconReference:
    value: str
    is_absolute: bool

    def to_absolute(self, project_dir: Path) -> Path:
        if self.is_absolute:
            return Path(self.value)
        parts = PurePosixPath(self.value.replace("\\", "/")).parts
        return (project_dir.joinpath(*parts)).resolve()


def png_dimensions(data: bytes) -> Result[tuple[int, int], DeployError]:
    """ICO directory width/height bytes read from the PNG IHDR chunk.

    Sizes of 256 and above are encoded as 0, per the ICO format.
    """
    if len(data) < 24:
        return Err(DeployError("artifact", "PNG data is too short to contain dimensions"))
    if data[:8] != _PNG_SIGNATURE:
        return Err(DeployError("artifact", "Invalid PNG signature"))

    width, height = struct.unpack(">II", data[16:24])
    if width == 0 or height == 0:
        return Err(DeployError("artifact", "PNG dimensions cannot be zero"))
    return Ok((0 if width >= 256 else width, 0 if height >= 256 else height))


def png_to_ico(data: bytes, directory: Path | None = None) -> Result[WindowsIcon, DeployError]:
    """Write a one-image ``.ico`` that embeds ``data`` as is."""
    dims = png_dimensions(data)
    if isinstance(dims, Err):
        return dims
    width, height = dims.value

    header = struct.pack("<HHH", 0, 1, 1)
    entry = struct.pack("<BBBBHHII", width, height, 0, 0, 0, 32, len(data), 6 + 16)
    target = (directory or temp_root()) / f"{uuid.uuid4().hex}.ico"
    try:
        target.write_bytes(header + entry + data)
    except OSError as e:
        return Err(DeployError("io", f"Failed to write icon {target}: {e}"))
    return Ok(WindowsIcon(target, should_cleanup=True))


def _is_project_relative_rooted(value: str) -> bool:
    if value.startswith(("//", "\\\\")):
        return False
    if len(value) >= 3 and value[1] == ":" and value[2] in "\\/":
        return False
    return value[0] in "/\\" and not Path(value).exists()


def interpret_resource_reference(value: str) -> IconReference | None:
    """Map ``avares://``, ``resm:`` and plain paths to a file reference."""
    trimmed = value.strip()
    if not trimmed:
        return None

    lowered = trimmed.lower()
    if lowered.startswith("avares://"):
        remaining = trimmed[len("avares://"):]
        slash = remaining.find("/") + 1
        if slash <= 0 or slash >= len(remaining):
            return None
        return IconReference(remaining[slash:], is_absolute=False)

    if lowered.startswith("resm:"):
        resource = trimmed[len("resm:"):].split("?", 1)[0]
        segments = [s for s in resource.split(".") if s]
        if len(segments) < 2:
            return None
        # Drop the assembly name; the last two segments are "file.ext".
        rest = segments[1:]
        if len(rest) >= 2:
            rest = [*rest[:-2], ".".join(rest[-2:])]
        return IconReference("/".join(rest), is_absolute=False)

    is_rooted = trimmed[0] in "/\\" or (len(trimmed) >= 2 and trimmed[1] == ":")
    if is_rooted:
        if _is_project_relative_rooted(trimmed):
            relative = trimmed.lstrip("/\\")
            return IconReference(relative, is_absolute=False) if relative else None
        return IconReference(trimmed, is_absolute=True)

    relative = trimmed.lstrip("/\\")
    return IconReference(relative, is_absolute=False) if relative else None


def _walk(root: Path, suffix: str | None = None) -> Iterator[Path]:
    """Files under ``root``, skipping ``bin`` and ``obj``."""
    stack = [root]
    while stack:
        current = stack.pop()
        try:
            entries = sorted(current.iterdir())
        except OSError:
            continue
        dirs: list[Path] = []
        for entry in entries:
            if entry.is_dir():
                if entry.name.lower() not in _SKIPPED_DIRS:
                    dirs.append(entry)
            elif suffix is None or entry.suffix.lower() == suffix:
                yield entry
        stack.extend(dirs)


def _looks_like_icon(path: Path) -> bool:
    stem = path.stem.lower()
    return any(name in stem for name in _PREFERRED_NAMES) or "icon" in str(path).lower()


class WindowsIconResolver:
    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def resolve(self, project: Path) -> WindowsIcon | None:
        project_dir = project.parent
        reference = self._find_candidate(project, project_dir)
        if reference is None:
            self._console.debug(f"No Windows icon candidate detected for {project}")
            return None

        prepared = self._prepare(reference.to_absolute(project_dir))
        if isinstance(prepared, Err):
            self._console.debug(f"Failed to prepare Windows icon for {project}: {prepared.error}")
            return None
        return prepared.value

    def _find_candidate(self, project: Path, project_dir: Path) -> IconReference | None:
        return (
            self._from_project_file(project)
            or self._from_source(project_dir, ".axaml", _ICON_ATTRIBUTE)
            or self._from_source(project_dir, ".cs", _WINDOW_ICON_CALL)
            or self._from_scan(project_dir)
        )

    def _from_project_file(self, project: Path) -> IconReference | None:
        if not project.is_file():
            return None
        try:
            tree = ET.parse(project)
        except (ET.ParseError, OSError) as e:
            self._console.debug(f"Unable to parse {project} while looking for ApplicationIcon: {e}")
            return None
        for element in tree.iter():
            if element.tag.rsplit("}", 1)[-1] == "ApplicationIcon":
                value = (element.text or "").strip()
                if value:
                    return IconReference(value, is_absolute=False)
        return None

    def _from_source(
        self, project_dir: Path, suffix: str, pattern: re.Pattern[str]
    ) -> IconReference | None:
        for file in _walk(project_dir, suffix):
            try:
                content = file.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                self._console.debug(f"Failed to inspect {file}: {e}")
                continue
            match = pattern.search(content)
            if match:
                value = match.group("path").strip()
                return interpret_resource_reference(value) or IconReference(value, False)
        return None

    def _from_scan(self, project_dir: Path) -> IconReference | None:
        seen: set[str] = set()
        candidates: list[Path] = []
        for parts in _SCAN_DIRS:
            directory = project_dir.joinpath(*parts)
            key = str(directory).lower()
            if key in seen or not directory.is_dir():
                continue
            seen.add(key)
            candidates.extend(
                f for f in _walk(directory)
                if f.suffix.lower() in _PREFERRED_EXTENSIONS and _looks_like_icon(f)
            )
        if not candidates:
            return None

        def rank(path: Path) -> tuple[int, int]:
            try:
                size = path.stat().st_size
            except OSError:
                size = 0
            return (_PREFERRED_EXTENSIONS.index(path.suffix.lower()), -size)

        return IconReference(str(min(candidates, key=rank)), is_absolute=True)

    def _prepare(self, path: Path) -> Result[WindowsIcon, DeployError]:
        if not path.is_file():
            return Err(DeployError("artifact", f"Icon candidate '{path}' does not exist"))

        match path.suffix.lower():
            case ".ico":
                return Ok(WindowsIcon(path, should_cleanup=False))
            case ".png":
                return self._from_png(path)
            case ".svg":
                fallback = _raster_fallback(path)
                if fallback is None:
                    return Err(
                        DeployError(
                            "artifact",
                            "Unable to prepare a Windows icon from SVG without a PNG fallback",
                        )
                    )
                self._console.debug(f"Using raster fallback {fallback} for SVG icon {path}")
                return self._from_png(fallback)
            case other:
                return Err(
                    DeployError("artifact", f"Unsupported icon format '{other}' for Windows packaging")
                )

    def _from_png(self, path: Path) -> Result[WindowsIcon, DeployError]:
        try:
            data = path.read_bytes()
        except OSError as e:
            return Err(DeployError("io", f"Failed to read {path}: {e}"))
        return png_to_ico(data)


def _raster_fallback(svg: Path) -> Path | None:
    direct = svg.with_suffix(".png")
    if direct.is_file():
        return direct
    directory = svg.parent
    if not directory.is_dir():
        return None
    pngs = sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".png")
    for png in pngs:
        if png.stem.lower() == svg.stem.lower():
            return png
    return pngs[0] if pngs else None
