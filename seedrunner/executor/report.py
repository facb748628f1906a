from __future__ import annotations

import time

from seedrunner.registry.types import Registry

from .types import RunSummary, SkipReason, TaskResult, TaskStatus


class ReportBuilder:
    """Collects task results for one run and turns them into a summary.

    The wall clock starts when the builder is created, so the total duration
    covers validation and sorting as well as the tasks themselves and is
    never derived from the per-task durations.
    """

    def __init__(self, registry: Registry):
        self.registry = registry
        self.results: list[TaskResult] = []
        self._reported: set[str] = set()
        self._start = time.monotonic()

    def add(self, result: TaskResult) -> None:
        if result.name in self._reported:
            raise ValueError(f"Result for '{result.name}' already recorded")

        self._reported.add(result.name)
        self.results.append(result)

    def add_excluded(self) -> list[TaskResult]:
        """Record every registry task nothing was reported for as skipped."""
        excluded = [
            TaskResult.skipped(task.name, SkipReason.EXCLUDED)
            for task in self.registry
            if task.name not in self._reported
        ]
        for result in excluded:
            self.add(result)

        return excluded

    def build(self) -> RunSummary:
        counts = {status: 0 for status in TaskStatus}
        for result in self.results:
            counts[result.status] += 1

        return RunSummary(
            total_tasks=len(self.registry),
            successful=counts[TaskStatus.SUCCESS],
            failed=counts[TaskStatus.FAILED],
            skipped=counts[TaskStatus.SKIPPED],
            total_duration_ms=(time.monotonic() - self._start) * 1000,
            results=list(self.results),
        )
