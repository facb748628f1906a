from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator

Action = Callable[[Any], Any]


@dataclass(frozen=True)
class TaskDescriptor:
    name: str
    description: str
    dependencies: tuple[str, ...]
    action: Action

    def __post_init__(self) -> None:
        # Accept any iterable of names, store an immutable tuple.
        object.__setattr__(self, "dependencies", tuple(self.dependencies))


@dataclass(frozen=True)
class Registry:
    tasks: tuple[TaskDescriptor, ...]

    @classmethod
    def from_tasks(cls, tasks: Iterable[TaskDescriptor]) -> Registry:
        seen: set[str] = set()
        built: list[TaskDescriptor] = []

        for task in tasks:
            if not isinstance(task.name, str) or len(task.name.strip()) < 1:
                raise RegistryError(f"A task name can't be empty: {task.name!r}")

            if task.name in seen:
                raise RegistryError(f"Duplicate task name: {task.name}")

            if task.name in task.dependencies:
                raise RegistryError(f"{task.name}: A task cannot be self dependent")

            seen.add(task.name)
            built.append(task)

        return cls(tuple(built))

    def __iter__(self) -> Iterator[TaskDescriptor]:
        return iter(self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def has_task(self, name: str) -> bool:
        return any(task.name == name for task in self.tasks)

    def get_task(self, name: str) -> TaskDescriptor:
        for task in self.tasks:
            if task.name == name:
                return task

        raise KeyError(name)

    def names(self) -> list[str]:
        return [task.name for task in self.tasks]


@dataclass(frozen=True)
class RunOptions:
    only: tuple[str, ...] | None = None
    skip: tuple[str, ...] | None = None
    continue_on_error: bool = False
    force: bool = False
    resource: Any = None

    def __post_init__(self) -> None:
        # An empty filter means "no filter".
        for field_name in ("only", "skip"):
            value = getattr(self, field_name)
            if value is not None:
                value = tuple(value)
                object.__setattr__(self, field_name, value or None)

    def is_selected(self, name: str) -> bool:
        if self.only is not None and name not in self.only:
            return False
        if self.skip is not None and name in self.skip:
            return False
        return True


class RegistryError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedFormatError(RegistryError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class ResourceError(RegistryError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
