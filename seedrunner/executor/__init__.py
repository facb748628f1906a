from .executor import Executor, invoke
from .report import ReportBuilder
from .reporter import LoggingReporter, Reporter
from .types import (
    ActionReport,
    AggregateRunError,
    Failure,
    Outcome,
    RunError,
    RunSummary,
    SkipReason,
    Success,
    TaskError,
    TaskResult,
    TaskStatus,
)

__all__ = [
    "Executor",
    "invoke",
    "ReportBuilder",
    "Reporter",
    "LoggingReporter",
    "ActionReport",
    "Success",
    "Failure",
    "Outcome",
    "TaskResult",
    "TaskStatus",
    "SkipReason",
    "RunSummary",
    "RunError",
    "TaskError",
    "AggregateRunError",
]
