"""Invoker execution descriptors built from flat properties."""

from .execution import Execution
from .handlers import (
    DEFAULT_COMMAND,
    DEFAULT_HANDLERS,
    POST_HANDLER,
    BuildHandler,
    BuildProfilesHandler,
    BuildResultHandler,
    DefaultCommandPostHandler,
    ExecutionParserHandler,
    PropertyEntry,
    SkipHandler,
    SystemPropertiesHandler,
)
from .keys import PropertyKey, group_id, split_key
from .parser import ExecutionParser

__all__ = [
    "BuildHandler",
    "BuildProfilesHandler",
    "BuildResultHandler",
    "DEFAULT_COMMAND",
    "DEFAULT_HANDLERS",
    "DefaultCommandPostHandler",
    "Execution",
    "ExecutionParser",
    "ExecutionParserHandler",
    "POST_HANDLER",
    "PropertyEntry",
    "PropertyKey",
    "SkipHandler",
    "SystemPropertiesHandler",
    "group_id",
    "split_key",
]
