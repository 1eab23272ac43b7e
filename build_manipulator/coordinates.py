"""Artifact coordinate parsing (``group:artifact:version[:type[:classifier]]``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

DEFAULT_TYPE = "jar"


@dataclass(frozen=True)
class ArtifactRef:
    group_id: str
    artifact_id: str
    version: str
    type: str = DEFAULT_TYPE
    classifier: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "ArtifactRef":
        """Parse a colon separated coordinate, rejecting empty or surplus parts."""

        raw = (text or "").strip()
        parts = raw.split(":")
        if len(parts) < 3 or len(parts) > 5:
            raise ConfigurationError(
                f"Invalid artifact coordinate '{text}': expected group:artifact:version[:type[:classifier]]"
            )
        if any(not part.strip() for part in parts):
            raise ConfigurationError(f"Invalid artifact coordinate '{text}': empty segment")

        group_id, artifact_id, version = (part.strip() for part in parts[:3])
        type_ = parts[3].strip() if len(parts) > 3 else DEFAULT_TYPE
        classifier = parts[4].strip() if len(parts) > 4 else None
        return cls(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            type=type_,
            classifier=classifier,
        )

    def as_project_version(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def filename(self) -> str:
        suffix = f"-{self.classifier}" if self.classifier else ""
        return f"{self.artifact_id}-{self.version}{suffix}.{self.type}"

    def repository_path(self) -> str:
        """Relative path of the artifact inside a Maven-layout repository."""

        group_path = self.group_id.replace(".", "/")
        return f"{group_path}/{self.artifact_id}/{self.version}/{self.filename()}"

    def __str__(self) -> str:
        text = f"{self.as_project_version()}:{self.type}"
        if self.classifier:
            text += f":{self.classifier}"
        return text


__all__ = ["ArtifactRef", "DEFAULT_TYPE"]
