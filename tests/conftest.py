from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from build_manipulator.scripts.references import ResolvedScript, ScriptReference
from build_manipulator.session import Project


@pytest.fixture()
def write_script(tmp_path: Path) -> Callable[[str, str], ResolvedScript]:
    def _write(name: str, source: str) -> ResolvedScript:
        path = tmp_path / "scripts" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return ResolvedScript(path=path, reference=ScriptReference(path.as_uri()))

    return _write


@pytest.fixture()
def root_project(tmp_path: Path) -> Project:
    pom = tmp_path / "project" / "pom.xml"
    pom.parent.mkdir(parents=True, exist_ok=True)
    pom.write_text("<project/>\n", encoding="utf-8")
    return Project(pom=pom, execution_root=True)
