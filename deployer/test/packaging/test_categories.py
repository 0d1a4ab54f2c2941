"""Tests for deployer.packaging.categories module."""

from __future__ import annotations

from deployer.packaging.categories import (
    AdditionalCategory,
    Categories,
    MainCategory,
    parse_categories,
)


class TestParseCategories:
    def test_main_and_additional(self) -> None:
        parsed = parse_categories(["Development;IDE"])
        assert parsed == Categories(MainCategory.DEVELOPMENT, (AdditionalCategory.IDE,))

    def test_lenient_spelling(self) -> None:
        parsed = parse_categories(["audio-video", "text_editor"])
        assert parsed is not None
        assert parsed.main == MainCategory.AUDIO_VIDEO
        assert parsed.additional == (AdditionalCategory.TEXT_EDITOR,)

    def test_unknown_additional_dropped(self) -> None:
        parsed = parse_categories(["Office", "Frobnicate", "Spreadsheet"])
        assert parsed == Categories(MainCategory.OFFICE, (AdditionalCategory.SPREADSHEET,))

    def test_unknown_main_rejected(self) -> None:
        assert parse_categories(["IDE;Development"]) is None

    def test_empty(self) -> None:
        assert parse_categories([]) is None
        assert parse_categories([" ; "]) is None


def test_desktop_value() -> None:
    categories = Categories(MainCategory.GRAPHICS, (AdditionalCategory.VIEWER,))
    assert categories.desktop_value() == "Graphics;Viewer;"
