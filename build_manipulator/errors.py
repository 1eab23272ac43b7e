"""Error taxonomy shared by the script engine and the execution parser."""

from __future__ import annotations

from typing import Optional


class ManipulationError(RuntimeError):
    """Raised when a manipulation step cannot be completed."""


class ConfigurationError(ManipulationError):
    """Raised for malformed references, coordinates, properties or settings."""


class ResolutionError(ManipulationError):
    """Raised when a script reference cannot be fetched or resolved."""

    def __init__(self, message: str, *, segment: str) -> None:
        super().__init__(message)
        self.segment = segment


class ScriptCompilationError(ManipulationError):
    """Raised when a script source cannot be read, compiled or loaded."""

    def __init__(self, message: str, *, source_text: Optional[str] = None) -> None:
        super().__init__(message)
        self.source_text = source_text


class MissingStageDeclarationError(ManipulationError):
    """Raised when a script does not declare its invocation point."""


class ContextBindingError(ManipulationError):
    """Raised when a script does not expose the shape needed to receive its context."""


class ScriptExecutionError(ManipulationError):
    """Raised when a script body fails while running."""

    def __init__(self, message: str, *, script: str) -> None:
        super().__init__(message)
        self.script = script


__all__ = [
    "ConfigurationError",
    "ContextBindingError",
    "ManipulationError",
    "MissingStageDeclarationError",
    "ResolutionError",
    "ScriptCompilationError",
    "ScriptExecutionError",
]
