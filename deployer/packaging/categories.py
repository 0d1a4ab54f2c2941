"""freedesktop.org menu categories."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

__all__ = ["MainCategory", "AdditionalCategory", "Categories", "parse_categories"]


class MainCategory(Enum):
    AUDIO_VIDEO = "AudioVideo"
    AUDIO = "Audio"
    VIDEO = "Video"
    DEVELOPMENT = "Development"
    EDUCATION = "Education"
    GAME = "Game"
    GRAPHICS = "Graphics"
    NETWORK = "Network"
    OFFICE = "Office"
    SCIENCE = "Science"
    SETTINGS = "Settings"
    SYSTEM = "System"
    UTILITY = "Utility"


class AdditionalCategory(Enum):
    BUILDING = "Building"
    DEBUGGER = "Debugger"
    IDE = "IDE"
    GUI_DESIGNER = "GUIDesigner"
    PROFILING = "Profiling"
    REVISION_CONTROL = "RevisionControl"
    TRANSLATION = "Translation"
    CALENDAR = "Calendar"
    CONTACT_MANAGEMENT = "ContactManagement"
    DATABASE = "Database"
    DICTIONARY = "Dictionary"
    CHART = "Chart"
    EMAIL = "Email"
    FINANCE = "Finance"
    FLOW_CHART = "FlowChart"
    PROJECT_MANAGEMENT = "ProjectManagement"
    PRESENTATION = "Presentation"
    SPREADSHEET = "Spreadsheet"
    WORD_PROCESSOR = "WordProcessor"
    VECTOR_GRAPHICS = "VectorGraphics"
    RASTER_GRAPHICS = "RasterGraphics"
    VIEWER = "Viewer"
    CHAT = "Chat"
    FILE_TRANSFER = "FileTransfer"
    INSTANT_MESSAGING = "InstantMessaging"
    WEB_BROWSER = "WebBrowser"
    MONITOR = "Monitor"
    SECURITY = "Security"
    PLAYER = "Player"
    RECORDER = "Recorder"
    MUSIC = "Music"
    ARCADE_GAME = "ArcadeGame"
    PUZZLE_GAME = "PuzzleGame"
    STRATEGY_GAME = "StrategyGame"
    MATH = "Math"
    EMULATOR = "Emulator"
    FILE_MANAGER = "FileManager"
    TERMINAL_EMULATOR = "TerminalEmulator"
    FILE_TOOLS = "FileTools"
    TEXT_EDITOR = "TextEditor"
    ARCHIVING = "Archiving"
    COMPRESSION = "Compression"
    CALCULATOR = "Calculator"
    CLOCK = "Clock"
    MAPS = "Maps"
    PHOTOGRAPHY = "Photography"
    PUBLISHING = "Publishing"
    DOCUMENTATION = "Documentation"
    PACKAGE_MANAGER = "PackageManager"


@dataclass(frozen=True, slots=True)
class Categories:
    main: MainCategory
    additional: tuple[AdditionalCategory, ...] = ()

    def desktop_value(self) -> str:
        """Value for the ``Categories=`` key of a desktop entry."""
        names = [self.main.value, *(c.value for c in self.additional)]
        return "".join(f"{name};" for name in names)


def _normalize(candidate: str) -> str:
    return candidate.replace("-", "").replace(" ", "").replace("_", "").lower()


def _lookup[E: Enum](enum_type: type[E], candidate: str) -> E | None:
    wanted = _normalize(candidate)
    for member in enum_type:
        if _normalize(member.name) == wanted or _normalize(str(member.value)) == wanted:
            return member
    return None


def parse_categories(values: Iterable[str]) -> Categories | None:
    """Parse ``"Development;IDE"`` style values.

    The first token must be a main category, otherwise nothing is returned.
    Unknown additional categories are dropped.
    """
    tokens = [
        token.strip()
        for value in values
        for token in value.split(";")
        if token.strip()
    ]
    if not tokens:
        return None

    main = _lookup(MainCategory, tokens[0])
    if main is None:
        return None

    additional = tuple(
        category
        for token in tokens[1:]
        if (category := _lookup(AdditionalCategory, token)) is not None
    )
    return Categories(main, additional)
