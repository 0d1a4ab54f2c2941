"""Tests for deployer.packaging.executable module."""

from __future__ import annotations

from pathlib import Path

from deployer.core.result import Err, Ok
from deployer.packaging.executable import MACHO_MAGICS, find_native_executable, find_windows_executable
from deployer.resources.container import DirectoryContainer
from deployer.test.fakes import ELF_BINARY, MACHO_BINARY


class TestFindNativeExecutable:
    def test_preferred_name_case_insensitive(self, tmp_path: Path) -> None:
        (tmp_path / "libSkia.so").write_bytes(ELF_BINARY)
        (tmp_path / "Notepad").write_bytes(b"#!/bin/sh\n")

        result = find_native_executable(DirectoryContainer(tmp_path), ["notepad"])

        assert isinstance(result, Ok)
        assert result.value.name == "Notepad"

    def test_falls_back_to_magic(self, tmp_path: Path) -> None:
        (tmp_path / "readme.txt").write_text("hi")
        (tmp_path / "app").write_bytes(ELF_BINARY)

        result = find_native_executable(DirectoryContainer(tmp_path), ["missing", ""])

        assert isinstance(result, Ok)
        assert result.value.name == "app"

    def test_macho_magic(self, tmp_path: Path) -> None:
        (tmp_path / "linux").write_bytes(ELF_BINARY)
        (tmp_path / "mac").write_bytes(MACHO_BINARY)

        result = find_native_executable(DirectoryContainer(tmp_path), [], magics=MACHO_MAGICS)

        assert isinstance(result, Ok)
        assert result.value.name == "mac"

    def test_nested_files_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "runtimes").mkdir()
        (tmp_path / "runtimes" / "app").write_bytes(ELF_BINARY)

        result = find_native_executable(DirectoryContainer(tmp_path), ["app"])

        assert isinstance(result, Err)
        assert result.error.kind == "artifact"


def test_find_windows_executable(tmp_path: Path) -> None:
    (tmp_path / "Notes.dll").write_bytes(b"MZ")
    (tmp_path / "Notes.EXE").write_bytes(b"MZ")

    result = find_windows_executable(DirectoryContainer(tmp_path))
    assert isinstance(result, Ok)
    assert result.value.name == "Notes.EXE"

    empty = tmp_path / "empty"
    empty.mkdir()
    assert isinstance(find_windows_executable(DirectoryContainer(empty)), Err)
