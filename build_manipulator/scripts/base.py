"""Extension point implemented by manipulation scripts."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, List, Optional

from ..errors import MissingStageDeclarationError
from .stages import InvocationStage


@dataclass(slots=True)
class ExecutionContext:
    """Collaborators handed to a script when it is bound.

    The build model reachable from here is shared and mutated in place by
    scripts; nothing audits or reverts those changes.
    """

    model_io: Any
    session: Any
    projects: List[Any] = field(default_factory=list)
    project: Any = None
    stage: Optional[InvocationStage] = None

    def with_stage(self, stage: InvocationStage) -> "ExecutionContext":
        return dataclasses.replace(self, stage=stage)


class ManipulationScript(ABC):
    """Base class for scripts injected into the manipulation pipeline.

    Subclasses must declare ``invocation_point`` as an :class:`InvocationStage`;
    the declaration is checked when the subclass is defined. Shared helper
    bases can opt out with ``class Helpers(ManipulationScript, abstract=True)``::

        class AlignVersions(ManipulationScript):
            invocation_point = InvocationStage.FIRST

            def run(self) -> None:
                self.project.properties["aligned"] = "true"
    """

    invocation_point: ClassVar[InvocationStage]
    abstract_script: ClassVar[bool] = True

    def __init_subclass__(cls, abstract: bool = False, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.abstract_script = abstract
        if abstract:
            return
        stage = getattr(cls, "invocation_point", None)
        if not isinstance(stage, InvocationStage):
            raise MissingStageDeclarationError(
                f"Script {cls.__qualname__} must declare 'invocation_point = InvocationStage.<STAGE>'"
            )

    def __init__(self) -> None:
        self._context: Optional[ExecutionContext] = None

    def bind(self, context: ExecutionContext) -> None:
        self._context = context

    @property
    def context(self) -> ExecutionContext:
        if self._context is None:
            raise RuntimeError(f"Script {type(self).__qualname__} has not been bound to a context")
        return self._context

    @property
    def model_io(self) -> Any:
        return self.context.model_io

    @property
    def session(self) -> Any:
        return self.context.session

    @property
    def projects(self) -> List[Any]:
        return self.context.projects

    @property
    def project(self) -> Any:
        return self.context.project

    @property
    def stage(self) -> Optional[InvocationStage]:
        return self.context.stage

    @abstractmethod
    def run(self) -> None:
        ...


__all__ = ["ExecutionContext", "ManipulationScript"]
