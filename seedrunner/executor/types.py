from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


class SkipReason(Enum):
    EXCLUDED = "excluded"
    NOT_ATTEMPTED = "not attempted"


@dataclass(frozen=True)
class ActionReport:
    """Optional value a task action can return to enrich its result."""

    records_created: int | None = None
    summary: str | None = None


@dataclass(frozen=True)
class Success:
    report: ActionReport | None = None


@dataclass(frozen=True)
class Failure:
    error: TaskError


Outcome = Success | Failure


@dataclass(frozen=True)
class TaskResult:
    name: str
    status: TaskStatus
    duration_ms: float
    error: TaskError | None = None
    records_created: int | None = None
    summary: str | None = None
    skip_reason: SkipReason | None = None

    @classmethod
    def skipped(cls, name: str, reason: SkipReason) -> TaskResult:
        return cls(name, TaskStatus.SKIPPED, 0.0, skip_reason=reason)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "duration_ms": round(self.duration_ms, 3),
            "error": str(self.error) if self.error else None,
            "records_created": self.records_created,
            "summary": self.summary,
            "skip_reason": self.skip_reason.value if self.skip_reason else None,
        }


@dataclass(frozen=True)
class RunSummary:
    total_tasks: int
    successful: int
    failed: int
    skipped: int
    total_duration_ms: float
    results: list[TaskResult] = field(default_factory=list)

    def get(self, name: str) -> TaskResult:
        for result in self.results:
            if result.name == name:
                return result

        raise KeyError(name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_tasks": self.total_tasks,
            "successful": self.successful,
            "failed": self.failed,
            "skipped": self.skipped,
            "total_duration_ms": round(self.total_duration_ms, 3),
            "results": [result.to_dict() for result in self.results],
        }


class RunError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class TaskError(RunError):
    def __init__(self, task: str, cause: BaseException):
        super().__init__(f"Task '{task}' failed: {cause}")
        self.task = task
        self.cause = cause


class AggregateRunError(RunError):
    def __init__(self, summary: RunSummary):
        super().__init__(f"Seed failed: {summary.failed} task(s) failed")
        self.summary = summary
