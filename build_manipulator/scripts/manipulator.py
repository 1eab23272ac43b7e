"""Manipulators that resolve configured scripts and apply them for one stage."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..config import ManipulatorConfig
from ..session import ManipulationSession, Project
from .base import ExecutionContext
from .fetch import HttpFetcher, LocalRepositoryResolver
from .references import ArtifactResolver, ResolvedScript, ScriptReferenceResolver, UrlFetcher
from .runtime import ScriptRuntime
from .stages import InvocationStage

logger = logging.getLogger(__name__)


class ScriptManipulator:
    """Apply the session's configured scripts at ``execution_index``.

    ``model_io`` is both the artifact resolver used for coordinate references
    and the model-access handle exposed to scripts.
    """

    def __init__(
        self,
        model_io: ArtifactResolver,
        fetcher: UrlFetcher,
        execution_index: int,
        session: Optional[ManipulationSession] = None,
    ) -> None:
        self.model_io = model_io
        self.fetcher = fetcher
        self.execution_index = execution_index
        self.session = session

    @classmethod
    def first_stage(cls, model_io: ArtifactResolver, fetcher: UrlFetcher) -> "ScriptManipulator":
        return cls(model_io, fetcher, InvocationStage.FIRST.value)

    @classmethod
    def last_stage(cls, model_io: ArtifactResolver, fetcher: UrlFetcher) -> "ScriptManipulator":
        return cls(model_io, fetcher, InvocationStage.LAST.value)

    @classmethod
    def from_config(cls, config: ManipulatorConfig, execution_index: int) -> "ScriptManipulator":
        model_io = LocalRepositoryResolver(config.local_repository, config.remote_repositories)
        return cls(model_io, HttpFetcher(config.cache_dir), execution_index)

    def parse_scripts(self, value: Optional[str]) -> List[ResolvedScript]:
        return ScriptReferenceResolver(self.fetcher, self.model_io).resolve(value)

    def apply_script(self, projects: Sequence[Project], project: Project, script: ResolvedScript) -> bool:
        context = ExecutionContext(
            model_io=self.model_io,
            session=self.session,
            projects=list(projects),
            project=project,
        )
        return ScriptRuntime(self.execution_index).execute(script, context)

    def apply_changes(
        self,
        session: ManipulationSession,
        projects: Optional[Sequence[Project]] = None,
    ) -> List[Project]:
        """Run every configured script against the execution root, in list order.

        Returns the projects handed to scripts, or an empty list when nothing ran.
        """

        self.session = session
        config = session.config
        if not config.enabled:
            logger.debug("Script manipulation disabled; skipping index %s", self.execution_index)
            return []

        scripts = self.parse_scripts(config.scripts)
        if not scripts:
            return []

        all_projects = list(projects if projects is not None else session.projects)
        root = next((project for project in all_projects if project.execution_root), None)
        if root is None:
            root = session.execution_root()
        if root is None:
            logger.warning("No projects available; %d script(s) not applied", len(scripts))
            return []

        ran = False
        for script in scripts:
            ran = self.apply_script(all_projects, root, script) or ran
        return all_projects if ran else []


__all__ = ["ScriptManipulator"]
