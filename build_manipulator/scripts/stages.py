"""Invocation stages and the gate deciding whether a script runs."""

from __future__ import annotations

from enum import Enum


class InvocationStage(Enum):
    """Point in the manipulation pipeline at which a script is eligible to run."""

    BOTH = 0
    FIRST = 1
    LAST = 99

    @classmethod
    def parse(cls, value: str) -> "InvocationStage":
        try:
            return cls[value.strip().upper()]
        except KeyError as exc:
            available = ", ".join(stage.name.lower() for stage in cls)
            raise ValueError(f"Unknown invocation stage '{value}'. Available stages: {available}.") from exc

    def __str__(self) -> str:
        return self.name


def should_run(current_stage: int, declared: InvocationStage) -> bool:
    """Return True when a script declared for ``declared`` runs at ``current_stage``."""

    return declared is InvocationStage.BOTH or declared.value == current_stage


__all__ = ["InvocationStage", "should_run"]
