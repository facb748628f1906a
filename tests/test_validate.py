import logging

import pytest

from seedrunner.graph.types import ConfigurationError
from seedrunner.graph.validate import check, find_violations, select, validate
from seedrunner.registry.types import Registry, RunOptions, TaskDescriptor


def _registry(spec: dict[str, list[str]]) -> Registry:
    return Registry.from_tasks(
        TaskDescriptor(name, "", deps, lambda resource: None) for name, deps in spec.items()
    )


SEEDS = {
    "auth": [],
    "accounts": [],
    "products": [],
    "crm": ["auth", "accounts"],
    "sales": ["accounts", "products"],
}


def test_no_filters_selects_everything_in_registry_order():
    registry = _registry(SEEDS)
    assert find_violations(registry, RunOptions()) == []
    assert [t.name for t in validate(registry, RunOptions())] == list(SEEDS)


def test_unknown_dependency_is_reported():
    registry = _registry({"crm": ["auth"]})
    assert find_violations(registry, RunOptions()) == [
        "Task 'crm' depends on non-existent task 'auth'"
    ]


def test_only_without_dependency_is_reported():
    registry = _registry(SEEDS)
    violations = find_violations(registry, RunOptions(only=["crm", "auth"]))
    assert violations == [
        "Task 'crm' depends on 'accounts', but 'accounts' is not in the 'only' list"
    ]


def test_only_with_dependencies_is_valid():
    registry = _registry(SEEDS)
    options = RunOptions(only=["auth", "accounts", "crm"])
    assert [t.name for t in validate(registry, options)] == ["auth", "accounts", "crm"]


def test_skipping_a_needed_dependency_is_reported():
    registry = _registry(SEEDS)
    violations = find_violations(registry, RunOptions(skip=["products"]))
    assert violations == [
        "Task 'sales' depends on 'products', but 'products' is being skipped"
    ]


def test_skipping_dependency_and_dependent_together_is_valid():
    registry = _registry(SEEDS)
    options = RunOptions(skip=["products", "sales"])
    assert [t.name for t in validate(registry, options)] == ["auth", "accounts", "crm"]


def test_excluded_tasks_are_not_checked():
    registry = _registry({"auth": [], "broken": ["missing"]})
    assert find_violations(registry, RunOptions(only=["auth"])) == []
    assert find_violations(registry, RunOptions(skip=["broken"])) == []


def test_all_violations_are_collected():
    registry = _registry({**SEEDS, "hr": ["auth", "missing"]})
    options = RunOptions(only=["crm", "sales", "hr"], skip=["sales"])

    violations = find_violations(registry, options)

    assert violations == [
        "Task 'crm' depends on 'auth', but 'auth' is not in the 'only' list",
        "Task 'crm' depends on 'accounts', but 'accounts' is not in the 'only' list",
        "Task 'hr' depends on 'auth', but 'auth' is not in the 'only' list",
        "Task 'hr' depends on non-existent task 'missing'",
        "Task 'hr' depends on 'missing', but 'missing' is not in the 'only' list",
    ]


def test_validate_raises_with_every_violation():
    registry = _registry(SEEDS)
    options = RunOptions(skip=["auth", "products"])

    with pytest.raises(ConfigurationError) as e:
        validate(registry, options)

    assert len(e.value.violations) == 2
    assert "'auth' is being skipped" in str(e.value)
    assert "'products' is being skipped" in str(e.value)


def test_empty_only_list_means_no_filter():
    registry = _registry(SEEDS)
    options = RunOptions(only=[])
    assert options.only is None
    assert len(select(registry, options)) == len(SEEDS)


def test_skip_applies_after_only():
    registry = _registry(SEEDS)
    options = RunOptions(only=["auth", "accounts"], skip=["accounts"])
    assert [t.name for t in select(registry, options)] == ["auth"]


def test_inputs_are_not_mutated():
    registry = _registry(SEEDS)
    options = RunOptions(only=["crm"], skip=["sales"])

    find_violations(registry, options)

    assert registry.names() == list(SEEDS)
    assert options.only == ("crm",)
    assert options.skip == ("sales",)


def test_unknown_filter_names_are_logged(caplog: pytest.LogCaptureFixture):
    registry = _registry(SEEDS)

    with caplog.at_level(logging.WARNING, logger="seedrunner"):
        validate(registry, RunOptions(skip=["crmm"]))

    assert "unknown task 'crmm'" in caplog.text


def test_check_raises_like_validate_but_logs_nothing(caplog: pytest.LogCaptureFixture):
    registry = _registry(SEEDS)

    with caplog.at_level(logging.WARNING, logger="seedrunner"):
        selected = check(registry, RunOptions(skip=["crmm"]))
        with pytest.raises(ConfigurationError):
            check(registry, RunOptions(only=["crm"]))

    assert [t.name for t in selected] == list(SEEDS)
    assert caplog.text == ""
