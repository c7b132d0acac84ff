"""Typed objects for the normalized view of a test run."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Literal, Tuple

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"


@dataclass(frozen=True)
class StepOutcome:
    """A named sub-phase of a test, used as a report column."""

    title: str
    status: str
    duration: float = 0


@dataclass(frozen=True)
class Validation:
    """One pass/fail check extracted from console output."""

    type: Literal["pass", "fail"]
    message: str


@dataclass(frozen=True)
class TestRecord:
    """Flattened outcome of one leaf test."""

    id: str
    title: str
    status: str
    duration: float
    start_time: str
    suite: str
    spec_id: str
    steps: Tuple[StepOutcome, ...] = ()
    validations: Tuple[Validation, ...] = ()
    # attachment name -> data URI
    screenshots: Dict[str, str] = field(default_factory=dict)

    @property
    def screenshot_count(self) -> int:
        return len(self.screenshots)

    def step_status(self, title: str) -> str:
        """Status shown in the column for ``title``; skipped when the test has no such step."""
        for step in self.steps:
            if step.title == title:
                return step.status
        return SKIPPED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape embedded in the report."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "duration": self.duration,
            "steps": [
                {"title": s.title, "status": s.status, "duration": s.duration}
                for s in self.steps
            ],
            "validations": [{"type": v.type, "message": v.message} for v in self.validations],
            "screenshots": dict(self.screenshots),
            "startTime": self.start_time,
            "suite": self.suite,
            "specID": self.spec_id,
        }


@dataclass(frozen=True)
class RunAggregates:
    """Run-level status counts."""

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    total: int = 0

    @property
    def success_rate(self) -> float:
        return round(self.passed / self.total * 100, 1) if self.total else 0.0


@dataclass(frozen=True)
class NormalizedRun:
    """Immutable snapshot handed from the normalizer to the reporters."""

    records: Tuple[TestRecord, ...]
    aggregates: RunAggregates
    step_columns: Tuple[str, ...]

    def __iter__(self) -> Iterator[Any]:
        return iter((self.records, self.aggregates, self.step_columns))
