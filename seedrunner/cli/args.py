from __future__ import annotations

import argparse


def _name_list(value: str) -> list[str]:
    names = [name.strip() for name in value.split(",") if name.strip()]
    if not names:
        raise argparse.ArgumentTypeError("expected a comma-separated list of task names")
    return names


def _add_filters(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--only",
        type=_name_list,
        help="Run only these tasks (comma-separated)",
    )
    parser.add_argument(
        "--skip",
        type=_name_list,
        help="Skip these tasks (comma-separated)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seedrunner")

    parser.add_argument(
        "--config",
        default="seeds.yml",
        help="Path to seed file",
    )
    parser.add_argument(
        "--pythonpath",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory to add to the import path before resolving actions",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging, including stack traces of failed tasks",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # run
    run = subparsers.add_parser("run", help="Run seed tasks")
    _add_filters(run)
    run.add_argument(
        "--continue-on-error",
        action="store_true",
        default=None,
        help="Keep running the remaining tasks after a failure",
    )
    run.add_argument(
        "--force",
        action="store_true",
        default=None,
        help="Ask tasks that support it to reseed data that already exists",
    )
    run.add_argument(
        "--json",
        action="store_true",
        help="Print the run summary as JSON",
    )

    # plan
    plan = subparsers.add_parser("plan", help="Show execution order without running")
    _add_filters(plan)

    # list
    subparsers.add_parser("list", help="List tasks")

    # graph
    subparsers.add_parser("graph", help="Show dependency graph")

    return parser
