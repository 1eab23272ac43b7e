"""Resolve comma separated script references into local script files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol

from requests.exceptions import RequestException

from ..coordinates import ArtifactRef
from ..errors import ResolutionError

logger = logging.getLogger(__name__)

REMOTE_PREFIXES = ("http", "file")


class ReferenceKind(str, Enum):
    REMOTE = "remote"
    COORDINATE = "coordinate"


@dataclass(frozen=True)
class ScriptReference:
    raw: str

    @property
    def kind(self) -> ReferenceKind:
        if self.raw.startswith(REMOTE_PREFIXES):
            return ReferenceKind.REMOTE
        return ReferenceKind.COORDINATE

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class ResolvedScript:
    path: Path
    reference: ScriptReference

    @property
    def name(self) -> str:
        return self.path.name

    def read_source(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def __str__(self) -> str:
        return str(self.path)


class UrlFetcher(Protocol):
    def fetch(self, url: str) -> Path:  # pragma: no cover - interface
        ...


class ArtifactResolver(Protocol):
    def resolve_raw_file(self, ref: ArtifactRef) -> Path:  # pragma: no cover - interface
        ...


def split_references(value: Optional[str]) -> List[ScriptReference]:
    if not value:
        return []
    return [ScriptReference(token.strip()) for token in value.split(",") if token.strip()]


class ScriptReferenceResolver:
    """Turn a script list into local files, in list order.

    Resolution stops at the first failing entry: a malformed coordinate raises
    :class:`~build_manipulator.errors.ConfigurationError` and a fetch failure
    raises :class:`~build_manipulator.errors.ResolutionError`. Later entries
    are never touched and no partial result is returned.
    """

    def __init__(self, fetcher: UrlFetcher, artifact_resolver: ArtifactResolver) -> None:
        self.fetcher = fetcher
        self.artifact_resolver = artifact_resolver

    def resolve(self, value: Optional[str]) -> List[ResolvedScript]:
        references = split_references(value)
        if not references:
            return []

        logger.debug("Processing scripts %s", value)
        result: List[ResolvedScript] = []
        for reference in references:
            result.append(self._resolve_one(reference))
        return result

    def _resolve_one(self, reference: ScriptReference) -> ResolvedScript:
        if reference.kind is ReferenceKind.REMOTE:
            logger.info("Attempting to read URL %s", reference.raw)
            try:
                found = self.fetcher.fetch(reference.raw)
            except (OSError, RequestException) as exc:
                raise ResolutionError(
                    f"Unable to fetch script '{reference.raw}': {exc}", segment=reference.raw
                ) from exc
            return ResolvedScript(path=Path(found), reference=reference)

        ref = ArtifactRef.parse(reference.raw)
        logger.info(
            "Attempting to read GAV %s with classifier %s and type %s",
            ref.as_project_version(),
            ref.classifier,
            ref.type,
        )
        try:
            found = self.artifact_resolver.resolve_raw_file(ref)
        except (OSError, RequestException) as exc:
            raise ResolutionError(
                f"Unable to resolve script artifact '{reference.raw}': {exc}", segment=reference.raw
            ) from exc
        return ResolvedScript(path=Path(found), reference=reference)


__all__ = [
    "ArtifactResolver",
    "ReferenceKind",
    "ResolvedScript",
    "ScriptReference",
    "ScriptReferenceResolver",
    "UrlFetcher",
    "split_references",
]
