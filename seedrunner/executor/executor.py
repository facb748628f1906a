from __future__ import annotations

import inspect
import logging
import time
from typing import Any

from seedrunner.registry.types import RunOptions, TaskDescriptor

from .report import ReportBuilder
from .reporter import Reporter
from .types import (
    ActionReport,
    Failure,
    Outcome,
    SkipReason,
    Success,
    TaskError,
    TaskResult,
    TaskStatus,
)

logger = logging.getLogger(__name__)


def accepts_force(action: Any) -> bool:
    try:
        params = inspect.signature(action).parameters.values()
    except (TypeError, ValueError):
        # Some builtins have no introspectable signature.
        return False

    return any(
        p.kind is inspect.Parameter.VAR_KEYWORD
        or (p.name == "force" and p.kind is not inspect.Parameter.POSITIONAL_ONLY)
        for p in params
    )


async def invoke(task: TaskDescriptor, resource: Any, force: bool = False) -> Outcome:
    """Run one action and turn whatever happens into an outcome value.

    `force` is passed as a keyword only to actions that declare it.
    """
    try:
        if accepts_force(task.action):
            value = task.action(resource, force=force)
        else:
            value = task.action(resource)
        if inspect.isawaitable(value):
            value = await value
    except Exception as exc:
        return Failure(TaskError(task.name, exc))

    return Success(value if isinstance(value, ActionReport) else None)


class Executor:
    def __init__(self, reporter: Reporter | None = None):
        self.reporter = reporter or Reporter()

    async def run(
        self,
        order: list[TaskDescriptor],
        options: RunOptions,
        report: ReportBuilder,
    ) -> list[TaskResult]:
        results: list[TaskResult] = []
        stopped_at: int | None = None

        for index, task in enumerate(order):
            self.reporter.task_started(task)

            start = time.monotonic()
            outcome = await invoke(task, options.resource, options.force)
            duration_ms = (time.monotonic() - start) * 1000

            match outcome:
                case Success(report=action_report):
                    result = TaskResult(
                        task.name,
                        TaskStatus.SUCCESS,
                        duration_ms,
                        records_created=action_report.records_created if action_report else None,
                        summary=action_report.summary if action_report else None,
                    )
                    self._record(result, results, report)
                    self.reporter.task_succeeded(task, result)
                case Failure(error=error):
                    result = TaskResult(task.name, TaskStatus.FAILED, duration_ms, error=error)
                    self._record(result, results, report)
                    self.reporter.task_failed(task, result)

                    if not options.continue_on_error:
                        stopped_at = index
                        break

        if stopped_at is not None:
            logger.error("Stopping seed due to error (use continue_on_error to override)")
            for task in order[stopped_at + 1 :]:
                result = TaskResult.skipped(task.name, SkipReason.NOT_ATTEMPTED)
                self._record(result, results, report)
                self.reporter.task_skipped(result)

        return results

    def _record(
        self, result: TaskResult, results: list[TaskResult], report: ReportBuilder
    ) -> None:
        results.append(result)
        report.add(result)
