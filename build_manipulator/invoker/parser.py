"""Assemble ordered execution descriptors from flat invoker properties."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

from ..utils import load_properties
from .execution import Execution
from .handlers import (
    DEFAULT_COMMAND,
    DEFAULT_HANDLERS,
    POST_HANDLER,
    DefaultCommandPostHandler,
    ExecutionParserHandler,
    PropertyEntry,
)
from .keys import DEFAULT_GROUP_ID, group_id

logger = logging.getLogger(__name__)

INVOKER_PROPERTIES = "invoker.properties"


class PostHandler(Protocol):
    def handle(self, execution: Execution) -> None:  # pragma: no cover - interface
        ...


class ExecutionParser:
    """Group properties by their numeric suffix and fold them into executions.

    Every handler sees every property; the post handler then runs exactly once
    per execution, in ascending id order. An empty property set yields a
    single execution running ``default_command``.
    """

    def __init__(
        self,
        handlers: Sequence[ExecutionParserHandler] = DEFAULT_HANDLERS,
        post_handler: Optional[PostHandler] = None,
        default_command: str = DEFAULT_COMMAND,
    ) -> None:
        self.handlers = tuple(handlers)
        if post_handler is None:
            if default_command == DEFAULT_COMMAND:
                post_handler = POST_HANDLER
            else:
                post_handler = DefaultCommandPostHandler(default_command)
        self.post_handler = post_handler
        self.default_command = default_command

    def build(self, properties: Mapping[str, str], location: str) -> List[Execution]:
        executions: Dict[int, Execution] = {}

        for key, value in properties.items():
            gid = group_id(key)
            execution = executions.get(gid)
            if execution is None:
                execution = Execution(id=gid, location=location)
                executions[gid] = execution

            entry = PropertyEntry(key=key, value=value)
            for handler in self.handlers:
                handler.handle(execution, entry)

        if not properties:
            executions[DEFAULT_GROUP_ID] = Execution(
                id=DEFAULT_GROUP_ID,
                location=location,
                command=self.default_command,
            )

        ordered = [executions[gid] for gid in sorted(executions)]
        for execution in ordered:
            self.post_handler.handle(execution)

        logger.debug("Parsed %d execution(s) for %s", len(ordered), location)
        return ordered

    def parse(self, working_dir: str | Path, filename: Optional[str] = None) -> List[Execution]:
        """Read ``invoker.properties`` from ``working_dir``; a missing file means defaults."""

        directory = Path(working_dir)
        properties = load_properties(directory / (filename or INVOKER_PROPERTIES))
        return self.build(properties, str(directory))


__all__ = ["ExecutionParser", "INVOKER_PROPERTIES", "PostHandler"]
