"""Projects and the manipulation session handed to scripts."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .config import ManipulatorConfig

POM_FILENAME = "pom.xml"
_IGNORE_DIRECTORIES = {"target", ".git", "node_modules"}


@dataclass(slots=True)
class Project:
    pom: Path
    execution_root: bool = False
    properties: Dict[str, str] = field(default_factory=dict)

    @property
    def directory(self) -> Path:
        return self.pom.parent

    @property
    def name(self) -> str:
        return self.directory.name

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True)
class ManipulationSession:
    config: ManipulatorConfig
    user_properties: Dict[str, str] = field(default_factory=dict)
    projects: List[Project] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        config: ManipulatorConfig,
        user_properties: Optional[Mapping[str, str]] = None,
        projects: Optional[List[Project]] = None,
    ) -> "ManipulationSession":
        return cls(config=config, user_properties=dict(user_properties or {}), projects=list(projects or []))

    def execution_root(self) -> Optional[Project]:
        for project in self.projects:
            if project.execution_root:
                return project
        return self.projects[0] if self.projects else None


def discover_projects(project_dir: Path) -> List[Project]:
    """Find every ``pom.xml`` below ``project_dir``; the top-level one is the execution root."""

    root = project_dir.resolve()
    root_pom = root / POM_FILENAME
    projects: List[Project] = []
    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in _IGNORE_DIRECTORIES)
        if POM_FILENAME in filenames:
            pom = Path(current) / POM_FILENAME
            projects.append(Project(pom=pom, execution_root=pom == root_pom))
    projects.sort(key=lambda project: (not project.execution_root, str(project.pom)))
    return projects


__all__ = ["ManipulationSession", "Project", "discover_projects"]
