"""Line-oriented reading of Visual Studio solution files.

Only ``Project(...) = "Name", "relative\\path.csproj", "{GUID}"`` lines
are of interest; everything else is ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from deployer.core.errors import DeployError
from deployer.core.result import Err, Ok, Result

__all__ = ["SolutionProject", "parse_solution_line", "parse_solution_projects", "find_by_suffix"]


class SolutionProject(NamedTuple):
    name: str
    path: Path


def parse_solution_line(line: str, solution_dir: Path) -> SolutionProject | None:
    trimmed = line.strip()
    if not trimmed.startswith("Project("):
        return None

    parts = trimmed.split(",")
    if len(parts) < 2:
        return None
    name_section, path_section = parts[0], parts[1]

    equals = name_section.find("=")
    name_start = name_section.find('"', equals if equals >= 0 else 0)
    if name_start < 0:
        return None
    name_end = name_section.find('"', name_start + 1)
    if name_end < 0:
        return None

    name = name_section[name_start + 1 : name_end]
    relative = path_section.strip().strip('"').replace("\\", "/")
    return SolutionProject(name, (solution_dir / relative).resolve())


def parse_solution_projects(solution: Path) -> Result[list[SolutionProject], DeployError]:
    try:
        lines = solution.read_text(encoding="utf-8-sig").splitlines()
    except OSError as e:
        return Err(
            DeployError("configuration", f"Cannot read solution file {solution}: {e}")
        )

    solution_dir = solution.parent
    projects = [
        project
        for line in lines
        if (project := parse_solution_line(line, solution_dir)) is not None
    ]
    return Ok(projects)


def find_by_suffix(projects: list[SolutionProject], suffix: str) -> SolutionProject | None:
    wanted = suffix.lower()
    for project in projects:
        if project.name.lower().endswith(wanted):
            return project
    return None
