"""Tests for deployer.platform.files module."""

from __future__ import annotations

from pathlib import Path

import pytest

from deployer.output.console import MockConsole
from deployer.platform import files
from deployer.platform.files import (
    directory_size,
    discard,
    new_temp_dir,
    new_temp_path,
    temp_root,
)


class TestTempPaths:
    def test_new_temp_dir_is_unique_and_created(self) -> None:
        a = new_temp_dir("dp-test")
        b = new_temp_dir("dp-test")
        try:
            assert a != b
            assert a.is_dir()
            assert a.parent == temp_root()
            assert a.name.startswith("dp-test-")
        finally:
            discard(a)
            discard(b)

    def test_new_temp_path_is_not_created(self) -> None:
        path = new_temp_path("dp-test", ".bin")
        assert path.suffix == ".bin"
        assert not path.exists()


class TestDiscard:
    def test_removes_file(self, tmp_path: Path) -> None:
        target = tmp_path / "a.txt"
        target.write_text("x")
        assert discard(target) is True
        assert not target.exists()

    def test_removes_tree(self, tmp_path: Path) -> None:
        (tmp_path / "d" / "e").mkdir(parents=True)
        (tmp_path / "d" / "e" / "f").write_text("x")
        assert discard(tmp_path / "d") is True
        assert not (tmp_path / "d").exists()

    def test_missing_and_none_are_fine(self, tmp_path: Path) -> None:
        assert discard(tmp_path / "missing") is True
        assert discard(None) is True

    def test_failure_is_logged_not_raised(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        target = tmp_path / "locked"
        target.mkdir()

        def refuse(*_args: object, **_kwargs: object) -> None:
            raise PermissionError("locked")

        monkeypatch.setattr(files.shutil, "rmtree", refuse)
        console = MockConsole()

        assert discard(target, console=console) is False
        assert console.has_warning()
        assert target.exists()


class TestDirectorySize:
    def test_directory_size(self, tmp_path: Path) -> None:
        (tmp_path / "a").write_bytes(b"12345")
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "c").write_bytes(b"123")
        assert directory_size(tmp_path) == 8
