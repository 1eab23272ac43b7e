"""Rules interpreting one invoker property at a time."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple, Tuple

from ..errors import ConfigurationError
from ..utils import parse_bool
from .execution import Execution
from .keys import split_key

DEFAULT_COMMAND = "install"
BUILD_RESULTS = ("success", "failure")
SYSTEM_PROPERTIES_PREFIX = "systemProperties."


class PropertyEntry(NamedTuple):
    key: str
    value: str


class ExecutionParserHandler(ABC):
    """Examines one property and mutates the execution it belongs to when it matches."""

    subkey: str

    def matches(self, entry: PropertyEntry) -> bool:
        return split_key(entry.key).subkey == self.subkey

    def handle(self, execution: Execution, entry: PropertyEntry) -> None:
        if self.matches(entry):
            self.apply(execution, entry)

    @abstractmethod
    def apply(self, execution: Execution, entry: PropertyEntry) -> None:
        ...


class SkipHandler(ExecutionParserHandler):
    subkey = "skip"

    def apply(self, execution: Execution, entry: PropertyEntry) -> None:
        execution.skip = parse_bool(entry.value, entry.key)


class BuildHandler(ExecutionParserHandler):
    subkey = "build"

    def apply(self, execution: Execution, entry: PropertyEntry) -> None:
        command = entry.value.strip()
        if not command:
            raise ConfigurationError(f"Property '{entry.key}' must name a build command")
        execution.command = command


class BuildResultHandler(ExecutionParserHandler):
    subkey = "buildResult"

    def apply(self, execution: Execution, entry: PropertyEntry) -> None:
        result = entry.value.strip().lower()
        if result not in BUILD_RESULTS:
            expected = " or ".join(BUILD_RESULTS)
            raise ConfigurationError(f"Property '{entry.key}' must be {expected} (got '{entry.value}')")
        execution.build_result = result


class BuildProfilesHandler(ExecutionParserHandler):
    subkey = "buildProfiles"

    def apply(self, execution: Execution, entry: PropertyEntry) -> None:
        for profile in entry.value.split(","):
            if profile.strip():
                execution.add_profile(profile.strip())


class SystemPropertiesHandler(ExecutionParserHandler):
    subkey = "systemProperties"

    def matches(self, entry: PropertyEntry) -> bool:
        subkey = split_key(entry.key).subkey
        return subkey == self.subkey or subkey.startswith(SYSTEM_PROPERTIES_PREFIX)

    def apply(self, execution: Execution, entry: PropertyEntry) -> None:
        name = split_key(entry.key).subkey[len(SYSTEM_PROPERTIES_PREFIX) :]
        if not name:
            raise ConfigurationError(f"Property '{entry.key}' does not name a system property")
        execution.properties[name] = entry.value


class DefaultCommandPostHandler:
    """Runs once per execution after all properties are applied."""

    def __init__(self, default_command: str = DEFAULT_COMMAND) -> None:
        self.default_command = default_command

    def handle(self, execution: Execution) -> None:
        if not execution.command:
            execution.command = self.default_command


DEFAULT_HANDLERS: Tuple[ExecutionParserHandler, ...] = (
    SkipHandler(),
    BuildHandler(),
    BuildResultHandler(),
    BuildProfilesHandler(),
    SystemPropertiesHandler(),
)

POST_HANDLER = DefaultCommandPostHandler()


__all__ = [
    "BuildHandler",
    "BuildProfilesHandler",
    "BuildResultHandler",
    "DEFAULT_COMMAND",
    "DEFAULT_HANDLERS",
    "DefaultCommandPostHandler",
    "ExecutionParserHandler",
    "POST_HANDLER",
    "PropertyEntry",
    "SkipHandler",
    "SystemPropertiesHandler",
]
