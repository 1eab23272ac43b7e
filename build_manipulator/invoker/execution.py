"""Execution descriptors assembled from invoker properties."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(slots=True)
class Execution:
    id: int
    location: str
    command: Optional[str] = None
    profiles: List[str] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)
    build_result: Optional[str] = None
    skip: bool = False

    def add_profile(self, profile: str) -> None:
        if profile not in self.profiles:
            self.profiles.append(profile)

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "location": self.location,
            "command": self.command,
            "profiles": list(self.profiles),
            "properties": dict(self.properties),
            "build_result": self.build_result,
            "skip": self.skip,
        }


__all__ = ["Execution"]
