from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sys
from typing import Any, Callable, Iterator

from seedrunner.executor import (
    AggregateRunError,
    LoggingReporter,
    RunSummary,
    TaskStatus,
)
from seedrunner.graph import GraphError, TaskGraph, check, validate
from seedrunner.registry import (
    RegistryError,
    ResourceError,
    RunOptions,
    SeedFile,
    TaskDescriptor,
    load_seed_file,
)
from seedrunner.runner import run_seeds

from .args import build_parser

LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(message)s"


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)

        with _stderr_logging(args.verbose):
            match args.command:
                case "run":
                    return cmd_run(args)
                case "plan":
                    return cmd_plan(args)
                case "list":
                    return cmd_list(args)
                case "graph":
                    return cmd_graph(args)
                case _:
                    return 2

    except (RegistryError, GraphError, KeyError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def cmd_run(args: argparse.Namespace) -> int:
    seed_file = _load(args)
    options = _options_from(args, seed_file.options)
    # Reject bad filters and cycles before the resource is opened. The
    # runner validates again and logs the filter warnings then.
    TaskGraph.from_tasks(check(seed_file.registry, options)).topo_order()

    with contextlib.ExitStack() as stack:
        resource = _open_resource(stack, seed_file.resource_factory)
        options = RunOptions(
            only=options.only,
            skip=options.skip,
            continue_on_error=options.continue_on_error,
            force=options.force,
            resource=resource,
        )
        try:
            summary = run_seeds(
                seed_file.registry, options, reporter=LoggingReporter()
            )
        except AggregateRunError as exc:
            summary = exc.summary

    _print_summary(summary, as_json=args.json)
    return 1 if summary.failed else 0


def cmd_plan(args: argparse.Namespace) -> int:
    seed_file = _load(args)
    options = _options_from(args, seed_file.options)
    for task in _plan(seed_file, options):
        print(task.name)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    seed_file = _load(args)
    for task in seed_file.registry:
        print(f"{task.name:<20} {task.description}".rstrip())
    return 0


def cmd_graph(args: argparse.Namespace) -> int:
    seed_file = _load(args)
    for task in seed_file.registry:
        deps = " ".join(task.dependencies)
        print(f"{task.name}: {deps}".rstrip())
    return 0


def _load(args: argparse.Namespace) -> SeedFile:
    for path in reversed(args.pythonpath):
        if path not in sys.path:
            sys.path.insert(0, path)
    return load_seed_file(args.config)


def _plan(seed_file: SeedFile, options: RunOptions) -> list[TaskDescriptor]:
    selected = validate(seed_file.registry, options)
    return TaskGraph.from_tasks(selected).topo_order()


def _options_from(args: argparse.Namespace, defaults: RunOptions) -> RunOptions:
    only = args.only if args.only is not None else defaults.only
    skip = args.skip if args.skip is not None else defaults.skip
    continue_on_error = getattr(args, "continue_on_error", None)
    if continue_on_error is None:
        continue_on_error = defaults.continue_on_error
    force = getattr(args, "force", None)
    if force is None:
        force = defaults.force
    return RunOptions(
        only=only, skip=skip, continue_on_error=continue_on_error, force=force
    )


def _open_resource(
    stack: contextlib.ExitStack, factory: Callable[[], Any] | None
) -> Any:
    # The CLI owns the resource for the whole run; the runner only passes it on.
    if factory is None:
        return None
    try:
        resource = factory()
        if hasattr(resource, "__enter__") and hasattr(resource, "__exit__"):
            resource = stack.enter_context(resource)
    except Exception as exc:
        raise ResourceError(f"Could not open resource: {exc}") from exc
    return resource


@contextlib.contextmanager
def _stderr_logging(verbose: bool) -> Iterator[None]:
    log = logging.getLogger("seedrunner")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    previous_level, previous_propagate = log.level, log.propagate
    log.addHandler(handler)
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    # The handler above is the only output; root handlers would duplicate it.
    log.propagate = False
    try:
        yield
    finally:
        log.removeHandler(handler)
        log.setLevel(previous_level)
        log.propagate = previous_propagate


def _print_summary(summary: RunSummary, *, as_json: bool) -> None:
    if as_json:
        print(json.dumps(summary.to_dict(), indent=2))
        return

    for result in summary.results:
        match result.status:
            case TaskStatus.SUCCESS:
                print(f"OK {result.name}, {result.duration_ms:.3f}ms")
                if result.records_created is not None:
                    print(f"  records created: {result.records_created}")
                if result.summary:
                    print(f"  {result.summary}")
            case TaskStatus.FAILED:
                print(f"FAIL {result.name}, {result.duration_ms:.3f}ms")
                if result.error is not None:
                    print(f"  error: {result.error.cause}")
            case TaskStatus.SKIPPED:
                reason = result.skip_reason.value if result.skip_reason else "skipped"
                print(f"SKIP {result.name} ({reason})")

    print(
        f"total={summary.total_tasks} successful={summary.successful} "
        f"failed={summary.failed} skipped={summary.skipped} "
        f"duration={summary.total_duration_ms:.3f}ms"
    )
