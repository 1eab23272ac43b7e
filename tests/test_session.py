from __future__ import annotations

from pathlib import Path

from build_manipulator.config import ManipulatorConfig
from build_manipulator.session import ManipulationSession, Project, discover_projects


def _pom(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    pom = path / "pom.xml"
    pom.write_text("<project/>\n", encoding="utf-8")
    return pom


def test_discover_projects_puts_root_first_and_skips_build_output(tmp_path: Path) -> None:
    root = tmp_path / "app"
    _pom(root / "b-module")
    _pom(root / "a-module" / "nested")
    _pom(root / "target" / "classes")
    _pom(root / ".git" / "hooks")
    _pom(root)

    projects = discover_projects(root)

    resolved = root.resolve()
    assert [project.pom for project in projects] == [
        resolved / "pom.xml",
        resolved / "a-module" / "nested" / "pom.xml",
        resolved / "b-module" / "pom.xml",
    ]
    assert [project.execution_root for project in projects] == [True, False, False]
    assert projects[0].name == "app"


def test_discover_projects_without_root_pom(tmp_path: Path) -> None:
    _pom(tmp_path / "only-child")

    projects = discover_projects(tmp_path)

    assert len(projects) == 1
    assert projects[0].execution_root is False


def test_execution_root_falls_back_to_first_project(tmp_path: Path) -> None:
    first = Project(pom=tmp_path / "first" / "pom.xml")
    second = Project(pom=tmp_path / "second" / "pom.xml")

    session = ManipulationSession.create(ManipulatorConfig(), projects=[first, second])

    assert session.execution_root() is first
    assert ManipulationSession.create(ManipulatorConfig()).execution_root() is None

    second.execution_root = True
    assert session.execution_root() is second
