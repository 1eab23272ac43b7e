"""Staged script injection: resolve, gate and run manipulation scripts."""

from .base import ExecutionContext, ManipulationScript
from .fetch import HttpFetcher, LocalRepositoryResolver
from .manipulator import ScriptManipulator
from .references import (
    ArtifactResolver,
    ReferenceKind,
    ResolvedScript,
    ScriptReference,
    ScriptReferenceResolver,
    UrlFetcher,
)
from .runtime import ScriptRuntime
from .stages import InvocationStage, should_run

__all__ = [
    "ArtifactResolver",
    "ExecutionContext",
    "HttpFetcher",
    "InvocationStage",
    "LocalRepositoryResolver",
    "ManipulationScript",
    "ReferenceKind",
    "ResolvedScript",
    "ScriptManipulator",
    "ScriptReference",
    "ScriptReferenceResolver",
    "ScriptRuntime",
    "UrlFetcher",
    "should_run",
]
