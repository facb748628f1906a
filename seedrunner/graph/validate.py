from __future__ import annotations

import logging

from seedrunner.registry.types import Registry, RunOptions, TaskDescriptor

from .types import ConfigurationError

logger = logging.getLogger(__name__)


def select(registry: Registry, options: RunOptions) -> list[TaskDescriptor]:
    """Tasks left after applying ``only`` then ``skip``, in registry order."""
    return [task for task in registry if options.is_selected(task.name)]


def find_violations(registry: Registry, options: RunOptions) -> list[str]:
    """Collect every problem with running ``options`` against ``registry``.

    Checked per selected task and per dependency:

    1. the dependency exists somewhere in the registry;
    2. the dependency is not skipped while its dependent still runs;
    3. with an ``only`` list, the dependency is part of it. Dependencies are
       never pulled in implicitly.
    """
    known = set(registry.names())
    skip = set(options.skip or ())
    only = set(options.only) if options.only is not None else None
    violations: list[str] = []

    for task in select(registry, options):
        for dep in task.dependencies:
            if dep not in known:
                violations.append(
                    f"Task '{task.name}' depends on non-existent task '{dep}'"
                )

            if dep in skip and task.name not in skip:
                violations.append(
                    f"Task '{task.name}' depends on '{dep}', but '{dep}' is being skipped"
                )

            if only is not None and dep not in only:
                violations.append(
                    f"Task '{task.name}' depends on '{dep}', but '{dep}' is not in the 'only' list"
                )

    return violations


def validate(registry: Registry, options: RunOptions) -> list[TaskDescriptor]:
    for label, names in (("only", options.only), ("skip", options.skip)):
        for name in names or ():
            if name not in registry.names():
                logger.warning("'%s' names unknown task '%s'", label, name)

    return check(registry, options)


def check(registry: Registry, options: RunOptions) -> list[TaskDescriptor]:
    """Like `validate`, without the warnings about unknown filter names."""
    violations = find_violations(registry, options)
    if violations:
        raise ConfigurationError(violations)

    return select(registry, options)
