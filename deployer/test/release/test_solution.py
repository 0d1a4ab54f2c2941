"""Tests for deployer.release.solution module."""

from __future__ import annotations

from pathlib import Path

from deployer.core.result import Err, Ok
from deployer.release.solution import (
    SolutionProject,
    find_by_suffix,
    parse_solution_line,
    parse_solution_projects,
)

CSHARP = "{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}"

SOLUTION = f"""
Microsoft Visual Studio Solution File, Format Version 12.00
# Visual Studio Version 17
Project("{CSHARP}") = "Notes", "Notes\\Notes.csproj", "{{A1}}"
EndProject
Project("{CSHARP}") = "Notes.Desktop", "Notes.Desktop\\Notes.Desktop.csproj", "{{A2}}"
EndProject
Project("{CSHARP}") = "Notes.Browser", "Notes.Browser\\Notes.Browser.csproj", "{{A3}}"
EndProject
Global
EndGlobal
"""


class TestParseSolutionLine:
    def test_project_line(self, tmp_path: Path) -> None:
        line = f'Project("{CSHARP}") = "Notes.Android", "src\\Notes.Android\\Notes.Android.csproj", "{{B}}"'
        project = parse_solution_line(line, tmp_path)
        assert project == SolutionProject(
            "Notes.Android", (tmp_path / "src" / "Notes.Android" / "Notes.Android.csproj").resolve()
        )

    def test_other_lines_ignored(self, tmp_path: Path) -> None:
        assert parse_solution_line("EndProject", tmp_path) is None
        assert parse_solution_line("Global", tmp_path) is None
        assert parse_solution_line('Project("x")', tmp_path) is None


class TestParseSolutionProjects:
    def test_reads_all_projects(self, tmp_path: Path) -> None:
        solution = tmp_path / "Notes.sln"
        solution.write_text("\ufeff" + SOLUTION, encoding="utf-8")

        result = parse_solution_projects(solution)

        assert isinstance(result, Ok)
        assert [p.name for p in result.value] == ["Notes", "Notes.Desktop", "Notes.Browser"]
        assert result.value[1].path == (tmp_path / "Notes.Desktop" / "Notes.Desktop.csproj").resolve()

    def test_missing_file(self, tmp_path: Path) -> None:
        result = parse_solution_projects(tmp_path / "missing.sln")
        assert isinstance(result, Err)
        assert result.error.kind == "configuration"


def test_find_by_suffix_is_case_insensitive(tmp_path: Path) -> None:
    projects = [
        SolutionProject("Notes", tmp_path / "a"),
        SolutionProject("Notes.DESKTOP", tmp_path / "b"),
    ]
    found = find_by_suffix(projects, ".Desktop")
    assert found is not None
    assert found.name == "Notes.DESKTOP"
    assert find_by_suffix(projects, ".Android") is None
