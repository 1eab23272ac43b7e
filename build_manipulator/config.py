"""Manipulator settings loaded from YAML, user properties and the environment."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .utils import parse_bool

logger = logging.getLogger(__name__)

PROPERTY_SCRIPTS = "manipulationScripts"
PROPERTY_DISABLE = "manipulation.disable"
PROPERTY_LOCAL_REPOSITORY = "localRepository"
PROPERTY_REMOTE_REPOSITORIES = "remoteRepositories"

ENV_SCRIPTS = "BUILD_MANIPULATOR_SCRIPTS"
ENV_LOCAL_REPOSITORY = "BUILD_MANIPULATOR_LOCAL_REPOSITORY"

MAVEN_CENTRAL = "https://repo1.maven.org/maven2"


def _default_local_repository() -> Path:
    return Path.home() / ".m2" / "repository"


class ManipulatorConfig(BaseModel):
    """Settings shared by the script manipulators and the CLI."""

    scripts: Optional[str] = Field(default=None, description="Comma separated script references.")
    enabled: bool = True
    local_repository: Path = Field(default_factory=_default_local_repository)
    remote_repositories: List[str] = Field(default_factory=lambda: [MAVEN_CENTRAL])
    cache_dir: Optional[Path] = Field(default=None, description="Download directory for remote scripts.")
    log_level: str = "INFO"

    model_config = ConfigDict(extra="forbid")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level '{value}'")
        return level

    def with_properties(self, properties: Mapping[str, str]) -> "ManipulatorConfig":
        """Return a copy with user properties (``-Dkey=value``) applied."""

        updates: Dict[str, Any] = {}
        if PROPERTY_SCRIPTS in properties:
            updates["scripts"] = properties[PROPERTY_SCRIPTS] or None
        if PROPERTY_DISABLE in properties:
            updates["enabled"] = not parse_bool(properties[PROPERTY_DISABLE], PROPERTY_DISABLE)
        if PROPERTY_LOCAL_REPOSITORY in properties:
            updates["local_repository"] = properties[PROPERTY_LOCAL_REPOSITORY]
        if PROPERTY_REMOTE_REPOSITORIES in properties:
            updates["remote_repositories"] = [
                entry.strip() for entry in properties[PROPERTY_REMOTE_REPOSITORIES].split(",") if entry.strip()
            ]
        return self._updated(updates)

    def with_environment(self, environ: Optional[Mapping[str, str]] = None) -> "ManipulatorConfig":
        env = os.environ if environ is None else environ
        updates: Dict[str, Any] = {}
        if env.get(ENV_SCRIPTS):
            updates["scripts"] = env[ENV_SCRIPTS]
        if env.get(ENV_LOCAL_REPOSITORY):
            updates["local_repository"] = env[ENV_LOCAL_REPOSITORY]
        return self._updated(updates)

    def _updated(self, updates: Mapping[str, Any]) -> "ManipulatorConfig":
        if not updates:
            return self
        payload = self.model_dump()
        payload.update(updates)
        try:
            return ManipulatorConfig.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid manipulator settings: {exc}") from exc


def load_config(path: Optional[Path]) -> ManipulatorConfig:
    """Load settings from a YAML file, or defaults when ``path`` is None."""

    if path is None:
        return ManipulatorConfig()
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")

    try:
        return ManipulatorConfig.model_validate(loaded)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {exc}") from exc


def resolve_config(
    path: Optional[Path] = None,
    properties: Optional[Mapping[str, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ManipulatorConfig:
    """Defaults, then the YAML file, then user properties, then the environment."""

    config = load_config(path).with_properties(properties or {}).with_environment(environ)
    logger.debug("Resolved manipulator settings: %s", config.model_dump(mode="json"))
    return config


__all__ = [
    "ENV_LOCAL_REPOSITORY",
    "ENV_SCRIPTS",
    "MAVEN_CENTRAL",
    "ManipulatorConfig",
    "PROPERTY_DISABLE",
    "PROPERTY_LOCAL_REPOSITORY",
    "PROPERTY_REMOTE_REPOSITORIES",
    "PROPERTY_SCRIPTS",
    "load_config",
    "resolve_config",
]
