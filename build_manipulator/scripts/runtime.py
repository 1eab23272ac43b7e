"""Load manipulation scripts and run them at their declared stage."""

from __future__ import annotations

import logging
import re
import types
from typing import List, Type

from ..errors import (
    ContextBindingError,
    ManipulationError,
    ScriptCompilationError,
    ScriptExecutionError,
)
from .base import ExecutionContext, ManipulationScript
from .references import ResolvedScript
from .stages import should_run

logger = logging.getLogger(__name__)

_MODULE_NAME_PATTERN = re.compile(r"[^0-9A-Za-z_]")


class ScriptRuntime:
    """Run resolved scripts for one pipeline phase.

    ``execution_index`` identifies the phase the caller is in; each script runs
    only when its declared :class:`InvocationStage` matches it (or is ``BOTH``).
    """

    def __init__(self, execution_index: int) -> None:
        self.execution_index = execution_index

    def execute(self, script: ResolvedScript, context: ExecutionContext) -> bool:
        """Load, bind and run ``script``. Returns False when the stage gate skips it."""

        module = self.load(script)
        script_cls = self._locate_script_class(script, module)
        stage = script_cls.invocation_point
        logger.debug("InvocationPoint is %s", stage)

        instance = self._bind(script, script_cls, context.with_stage(stage))

        if not should_run(self.execution_index, stage):
            logger.info(
                "Ignoring script %s as invocation point %s does not match index %s",
                script,
                stage,
                self.execution_index,
            )
            return False

        logger.info("Executing %s on %s at invocation point %s", script, context.project, stage)
        try:
            instance.run()
        except Exception as exc:
            raise ScriptExecutionError(
                f"Script {script} failed during execution: {exc}", script=str(script)
            ) from exc
        logger.info("Completed %s.", script)
        return True

    def load(self, script: ResolvedScript) -> types.ModuleType:
        try:
            source = script.read_source()
        except (OSError, UnicodeDecodeError) as exc:
            raise ScriptCompilationError(f"Unable to read script {script}: {exc}", source_text=None) from exc

        try:
            code = compile(source, str(script.path), "exec")
        except (SyntaxError, ValueError) as exc:
            _log_source_for_debugging(script, "parsing")
            raise ScriptCompilationError(f"Unable to parse script {script}: {exc}", source_text=source) from exc

        module = types.ModuleType(_module_name(script))
        module.__file__ = str(script.path)
        try:
            exec(code, module.__dict__)
        except ManipulationError:
            raise
        except Exception as exc:
            _log_source_for_debugging(script, "loading")
            raise ScriptCompilationError(f"Unable to load script {script}: {exc}", source_text=source) from exc
        return module

    def _locate_script_class(self, script: ResolvedScript, module: types.ModuleType) -> Type[ManipulationScript]:
        candidates: List[Type[ManipulationScript]] = [
            value
            for value in vars(module).values()
            if isinstance(value, type)
            and issubclass(value, ManipulationScript)
            and value.__module__ == module.__name__
            and not value.abstract_script
        ]
        if not candidates:
            raise ContextBindingError(f"Script {script} does not define a ManipulationScript subclass")
        if len(candidates) > 1:
            names = ", ".join(sorted(cls.__qualname__ for cls in candidates))
            raise ContextBindingError(f"Script {script} defines more than one ManipulationScript subclass: {names}")
        return candidates[0]

    def _bind(
        self,
        script: ResolvedScript,
        script_cls: Type[ManipulationScript],
        context: ExecutionContext,
    ) -> ManipulationScript:
        try:
            instance = script_cls()
            instance.bind(context)
        except Exception as exc:
            _log_source_for_debugging(script, "injecting into")
            raise ContextBindingError(f"Unable to inject values into script {script}: {exc}") from exc
        return instance


def _module_name(script: ResolvedScript) -> str:
    stem = _MODULE_NAME_PATTERN.sub("_", script.path.stem) or "script"
    return f"build_manipulator_script_{stem}"


def _log_source_for_debugging(script: ResolvedScript, action: str) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    try:
        source = script.read_source()
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Unable to read script file %s for debugging: %s", script, exc)
        return
    logger.debug("Failure when %s script %s:\n%s", action, script, source)


__all__ = ["ScriptRuntime"]
