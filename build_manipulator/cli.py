"""Command-line entry point for script manipulation and invoker parsing."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from .config import PROPERTY_SCRIPTS, ManipulatorConfig, resolve_config
from .errors import ManipulationError
from .invoker import ExecutionParser
from .scripts import InvocationStage, ScriptManipulator
from .session import ManipulationSession, discover_projects
from .utils import parse_assignments

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "scripts":
            if args.scripts_command == "run":
                return _handle_scripts_run(args)
            if args.scripts_command == "resolve":
                return _handle_scripts_resolve(args)
            parser.error("scripts command requires a subcommand")
        if args.command == "executions":
            return _handle_executions(args)
    except ManipulationError as exc:
        logger.debug("Manipulation failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    parser.error(f"Unknown command '{args.command}'")
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="build-manipulator", description="Build manipulation helpers.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scripts = subparsers.add_parser("scripts", help="Manipulation script helpers.")
    scripts_sub = scripts.add_subparsers(dest="scripts_command", required=True)

    run = scripts_sub.add_parser("run", help="Apply manipulation scripts to a project tree.")
    run.add_argument("--project-dir", required=True)
    run.add_argument("--stage", type=_parse_stage, default="first", help="first, last or a numeric execution index.")
    run.add_argument("--scripts", help="Comma separated script references.")
    _add_config_arguments(run)

    resolve = scripts_sub.add_parser("resolve", help="Resolve script references to local files.")
    resolve.add_argument("--scripts", help="Comma separated script references.")
    _add_config_arguments(resolve)

    executions = subparsers.add_parser("executions", help="Parse invoker.properties into executions.")
    executions.add_argument("--working-dir", required=True)
    executions.add_argument("--properties-file", help="Properties file name inside the working dir.")

    return parser


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="YAML settings file.")
    parser.add_argument("-D", dest="properties", action="append", help="User property key=value (repeatable).")


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_stage(value: str) -> int:
    stripped = value.strip()
    if stripped.lstrip("-").isdigit():
        return int(stripped)
    try:
        return InvocationStage.parse(stripped).value
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _load_settings(args: argparse.Namespace) -> tuple[ManipulatorConfig, Dict[str, str]]:
    properties = parse_assignments(args.properties)
    if args.scripts is not None:
        properties[PROPERTY_SCRIPTS] = args.scripts
    config = resolve_config(Path(args.config) if args.config else None, properties)
    if not args.verbose:
        logging.getLogger().setLevel(config.log_level)
    return config, properties


def _handle_scripts_run(args: argparse.Namespace) -> int:
    config, properties = _load_settings(args)
    index = args.stage

    projects = discover_projects(Path(args.project_dir))
    session = ManipulationSession.create(config, properties, projects)
    manipulator = ScriptManipulator.from_config(config, index)
    changed = manipulator.apply_changes(session)

    _print_json(
        {
            "execution_index": index,
            "scripts": config.scripts,
            "projects": [str(project.pom) for project in projects],
            "changed": [str(project.pom) for project in changed],
            "properties": {str(project.pom): project.properties for project in projects},
        }
    )
    return 0


def _handle_scripts_resolve(args: argparse.Namespace) -> int:
    config, _ = _load_settings(args)
    manipulator = ScriptManipulator.from_config(config, InvocationStage.BOTH.value)
    resolved = manipulator.parse_scripts(config.scripts)
    _print_json(
        {
            "scripts": [
                {"reference": str(script.reference), "kind": script.reference.kind.value, "path": str(script.path)}
                for script in resolved
            ]
        }
    )
    return 0


def _handle_executions(args: argparse.Namespace) -> int:
    executions = ExecutionParser().parse(Path(args.working_dir), args.properties_file)
    _print_json({"executions": [execution.to_dict() for execution in executions]})
    return 0


def _print_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
