from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from seedrunner.executor import (
    AggregateRunError,
    Executor,
    ReportBuilder,
    Reporter,
    RunSummary,
)
from seedrunner.graph import TaskGraph, validate
from seedrunner.registry import Registry, RunOptions, TaskDescriptor

logger = logging.getLogger(__name__)


async def run_seeds_async(
    registry: Registry | Iterable[TaskDescriptor],
    options: RunOptions | None = None,
    *,
    reporter: Reporter | None = None,
) -> RunSummary:
    """Validate, order and run the selected tasks of ``registry``.

    Nothing runs if the options are inconsistent with the registry
    (``ConfigurationError``) or the selected tasks form a cycle
    (``CycleError``). When a task fails and ``continue_on_error`` is off, the
    remaining tasks are reported as skipped and ``AggregateRunError`` is raised
    with the summary attached. With ``continue_on_error`` on, the summary is
    returned and the caller decides what to do with ``summary.failed``.
    """
    if not isinstance(registry, Registry):
        registry = Registry.from_tasks(registry)
    options = options or RunOptions()
    reporter = reporter or Reporter()
    report = ReportBuilder(registry)

    if options.only is not None:
        logger.info("Running only: %s", ", ".join(options.only))
    if options.skip is not None:
        logger.info("Skipping: %s", ", ".join(options.skip))

    selected = validate(registry, options)
    order = TaskGraph.from_tasks(selected).topo_order()

    reporter.run_started(order)
    await Executor(reporter).run(order, options, report)

    for result in report.add_excluded():
        reporter.task_skipped(result)

    summary = report.build()
    reporter.run_finished(summary)

    if summary.failed > 0 and not options.continue_on_error:
        raise AggregateRunError(summary)

    return summary


def run_seeds(
    registry: Registry | Iterable[TaskDescriptor],
    options: RunOptions | None = None,
    *,
    reporter: Reporter | None = None,
) -> RunSummary:
    return asyncio.run(run_seeds_async(registry, options, reporter=reporter))
