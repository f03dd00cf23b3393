"""Structured results of a connection diagnostic run."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class StageOutcome(str, Enum):
    """Outcome of one diagnostic stage, ordered from best to worst."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {StageOutcome.PASS: 0, StageOutcome.WARN: 1, StageOutcome.FAIL: 2}


@dataclass(frozen=True)
class StageResult:
    """Result of a single diagnostic stage.

    Attributes:
        name: Stage name (configuration, certificates, connectivity, operations)
        outcome: pass, warn or fail
        messages: Human-readable lines, in the order they were produced
        details: Machine-readable data captured by the stage

    """

    name: str
    outcome: StageOutcome
    messages: tuple[str, ...] = ()
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.outcome is StageOutcome.PASS

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "outcome": self.outcome.value,
            "messages": list(self.messages),
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class DiagnosticReport:
    """Ordered stage results of one diagnostic run."""

    stages: tuple[StageResult, ...]

    @property
    def outcome(self) -> StageOutcome:
        """Worst stage outcome; pass for a report with no stages."""
        return max(
            (stage.outcome for stage in self.stages),
            key=lambda outcome: outcome.severity,
            default=StageOutcome.PASS,
        )

    @property
    def usable(self) -> bool:
        """True when no stage failed (a warn-only report is usable but degraded)."""
        return self.outcome is not StageOutcome.FAIL

    def stage(self, name: str) -> StageResult | None:
        """Return the stage called ``name``, or None if it did not run."""
        return next((stage for stage in self.stages if stage.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "usable": self.usable,
            "stages": [stage.to_dict() for stage in self.stages],
        }
