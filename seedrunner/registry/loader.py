import importlib
import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from .types import (
    Registry,
    RegistryError,
    RunOptions,
    TaskDescriptor,
    UnsupportedFormatError,
)


@dataclass(frozen=True)
class SeedFile:
    registry: Registry
    options: RunOptions
    resource_factory: Callable[[], Any] | None


def load_seed_file(path: str | Path) -> SeedFile:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise RegistryError(f"Seed file not found: {pure_path}")

    if not pure_path.is_file():
        raise RegistryError(f"Seed path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return _build_seed_file(raw_file)


def resolve_reference(ref: str) -> Callable[..., Any]:
    """Import ``package.module:attr`` and return the callable it names."""
    module_name, sep, attr_path = ref.partition(":")
    module_name = module_name.strip()
    attr_path = attr_path.strip()

    if not sep or not module_name or not attr_path:
        raise RegistryError(f"Reference must look like 'module:attr', got {ref!r}")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise RegistryError(f"{ref}: cannot import module '{module_name}'") from exc

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            raise RegistryError(f"{ref}: '{attr}' not found") from exc

    if not callable(target):
        raise RegistryError(f"{ref}: is not callable")

    return target


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    text = path.read_text(encoding="utf-8")

    match fmt:
        case "yaml":
            try:
                raw_file = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise RegistryError(f"{path}: invalid YAML") from exc
        case "toml":
            try:
                raw_file = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise RegistryError(f"{path}: invalid TOML") from exc
        case "json":
            try:
                raw_file = json.loads(text)
            except json.JSONDecodeError as exc:
                raise RegistryError(f"{path}: invalid JSON") from exc
        case _:
            raise AssertionError("Unreachable")

    if not isinstance(raw_file, Mapping):
        raise RegistryError(
            f"{path}: parsed succesfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_seed_file(raw: Mapping[str, Any]) -> SeedFile:
    for key in raw.keys():
        if key not in {"tasks", "options", "resource"}:
            raise RegistryError(f"Can't process top-level field: {key}")

    registry = _build_registry(raw)
    options = _build_options({} if raw.get("options") is None else raw["options"])

    resource_factory = None
    if "resource" in raw:
        if not isinstance(raw["resource"], str):
            raise RegistryError("'resource' must be a 'module:attr' string")
        resource_factory = resolve_reference(raw["resource"])

    return SeedFile(registry, options, resource_factory)


def _build_registry(raw: Mapping[str, Any]) -> Registry:
    tasks: dict[str, TaskDescriptor] = {}

    if not "tasks" in raw:
        raise RegistryError("Missing 'tasks' field")

    if not isinstance(raw["tasks"], Mapping):
        raise RegistryError(f"'tasks' must be a mapping, got {type(raw['tasks'])}")

    if len(raw["tasks"]) < 1:
        raise RegistryError("There must be at least one task in the seed file")

    for name, fields in raw["tasks"].items():
        if not isinstance(name, str):
            raise RegistryError(f"Task name must be a string, got {type(name)}")

        if not isinstance(fields, Mapping):
            raise RegistryError(f"{name} must be a mapping")

        name_norm = name.strip()

        if len(name_norm) < 1:
            raise RegistryError("A task name can't be empty")

        if name_norm in tasks:
            raise RegistryError(f"Duplicate task name after normalization: {name_norm}")

        tasks[name_norm] = _build_task(name_norm, fields)

    # Unknown dependencies are reported by the validator, with the run options.
    return Registry.from_tasks(tasks.values())


def _build_task(name: str, fields: Mapping[str, Any]) -> TaskDescriptor:
    keys = {"action", "deps", "description"}
    deps: list[str] = []
    seen: set[str] = set()
    description = ""

    for field in fields.keys():
        if field not in keys:
            raise RegistryError(f"{name}: Can't process: {field}")

    if not "action" in fields:
        raise RegistryError(f"{name}: missing 'action'")

    if not isinstance(fields["action"], str):
        raise RegistryError(f"{name}: The action should be a 'module:attr' string")

    action = resolve_reference(fields["action"])

    if "description" in fields:
        if not isinstance(fields["description"], str):
            raise RegistryError(f"{name}: The description should be a string")
        description = fields["description"].strip()

    if "deps" in fields:
        if not isinstance(fields["deps"], list):
            raise RegistryError(f"{name}: Dependencies should be in a list.")

        for item in fields["deps"]:
            if not isinstance(item, str):
                raise RegistryError(
                    f"{name}: {item} should be a string in the dependency list"
                )

            dep = item.strip()

            if len(dep) < 1:
                raise RegistryError(f"{name}: A dependency is empty")

            if dep == name:
                raise RegistryError(f"{name}: A task cannot be self dependent")

            if dep in seen:
                continue

            deps.append(dep)
            seen.add(dep)

    return TaskDescriptor(name, description, tuple(deps), action)


def _build_options(raw: Any) -> RunOptions:
    if not isinstance(raw, Mapping):
        raise RegistryError(f"'options' must be a mapping, got {type(raw)}")

    for key in raw.keys():
        if key not in {"only", "skip", "continue_on_error", "force"}:
            raise RegistryError(f"options: Can't process: {key}")

    only = _name_list(raw, "only")
    skip = _name_list(raw, "skip")

    continue_on_error = raw.get("continue_on_error", False)
    if not isinstance(continue_on_error, bool):
        raise RegistryError("options: continue_on_error should be a boolean")

    force = raw.get("force", False)
    if not isinstance(force, bool):
        raise RegistryError("options: force should be a boolean")

    return RunOptions(
        only=only, skip=skip, continue_on_error=continue_on_error, force=force
    )


def _name_list(raw: Mapping[str, Any], key: str) -> tuple[str, ...] | None:
    if key not in raw or raw[key] is None:
        return None

    if not isinstance(raw[key], list):
        raise RegistryError(f"options: {key} should be a list")

    names = []
    for item in raw[key]:
        if not isinstance(item, str) or len(item.strip()) < 1:
            raise RegistryError(f"options: {key} entries should be non-empty strings")
        names.append(item.strip())

    return tuple(names)
