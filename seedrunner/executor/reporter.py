from __future__ import annotations

import logging

from seedrunner.registry.types import TaskDescriptor

from .types import RunSummary, TaskResult


class Reporter:
    """Progress sink for a single run. Every hook is a no-op by default."""

    def run_started(self, order: list[TaskDescriptor]) -> None:
        pass

    def task_started(self, task: TaskDescriptor) -> None:
        pass

    def task_succeeded(self, task: TaskDescriptor, result: TaskResult) -> None:
        pass

    def task_failed(self, task: TaskDescriptor, result: TaskResult) -> None:
        pass

    def task_skipped(self, result: TaskResult) -> None:
        pass

    def run_finished(self, summary: RunSummary) -> None:
        pass


class LoggingReporter(Reporter):
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("seedrunner")

    def run_started(self, order: list[TaskDescriptor]) -> None:
        self.logger.info("Seeding %d task(s) in dependency order...", len(order))
        self.logger.debug("Order: %s", " -> ".join(task.name for task in order))

    def task_started(self, task: TaskDescriptor) -> None:
        self.logger.info("Seeding %s: %s", task.name, task.description)

    def task_succeeded(self, task: TaskDescriptor, result: TaskResult) -> None:
        self.logger.info("Completed %s in %.0fms", task.name, result.duration_ms)

    def task_failed(self, task: TaskDescriptor, result: TaskResult) -> None:
        cause = result.error.cause if result.error else None
        self.logger.error("Failed %s: %s", task.name, cause)
        if cause is not None:
            exc_info = (type(cause), cause, cause.__traceback__)
            self.logger.debug("Stack trace for %s", task.name, exc_info=exc_info)

    def task_skipped(self, result: TaskResult) -> None:
        reason = result.skip_reason.value if result.skip_reason else "skipped"
        self.logger.warning("Skipped %s (%s)", result.name, reason)

    def run_finished(self, summary: RunSummary) -> None:
        self.logger.info(
            "Total: %d, successful: %d, failed: %d, skipped: %d in %.0fms",
            summary.total_tasks,
            summary.successful,
            summary.failed,
            summary.skipped,
            summary.total_duration_ms,
        )
