"""Staged manipulation scripts and invoker execution parsing for Maven builds."""

__version__ = "0.1.0"
from .config import ManipulatorConfig, load_config, resolve_config
from .coordinates import ArtifactRef
from .errors import (
    ConfigurationError,
    ContextBindingError,
    ManipulationError,
    MissingStageDeclarationError,
    ResolutionError,
    ScriptCompilationError,
    ScriptExecutionError,
)
from .invoker import Execution, ExecutionParser, group_id
from .scripts import (
    ExecutionContext,
    InvocationStage,
    ManipulationScript,
    ScriptManipulator,
    ScriptReferenceResolver,
    ScriptRuntime,
    should_run,
)
from .session import ManipulationSession, Project

__all__ = [
    "__version__",
    "ArtifactRef",
    "ConfigurationError",
    "ContextBindingError",
    "Execution",
    "ExecutionContext",
    "ExecutionParser",
    "InvocationStage",
    "ManipulationError",
    "ManipulationScript",
    "ManipulationSession",
    "ManipulatorConfig",
    "MissingStageDeclarationError",
    "Project",
    "ResolutionError",
    "ScriptCompilationError",
    "ScriptExecutionError",
    "ScriptManipulator",
    "ScriptReferenceResolver",
    "ScriptRuntime",
    "group_id",
    "load_config",
    "resolve_config",
    "should_run",
]
