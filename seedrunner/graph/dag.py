from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator

from seedrunner.registry.types import TaskDescriptor

from .types import CycleError, MissingDependencyError


class _Visit(Enum):
    UNVISITED = auto()
    VISITING = auto()
    VISITED = auto()


@dataclass(frozen=True)
class TaskGraph:
    tasks: tuple[TaskDescriptor, ...]
    _deps: dict[str, tuple[str, ...]]

    @classmethod
    def from_tasks(cls, tasks: Iterable[TaskDescriptor]) -> TaskGraph:
        tasks = tuple(tasks)
        position = {task.name: index for index, task in enumerate(tasks)}
        deps = {}

        for task in tasks:
            for dep in task.dependencies:
                if dep not in position:
                    raise MissingDependencyError(task.name, dep)

            # Visit dependencies in input order so ties are broken the same way
            # as for roots.
            deps[task.name] = tuple(
                sorted(dict.fromkeys(task.dependencies), key=position.__getitem__)
            )

        return cls(tasks, deps)

    def topo_order(self) -> list[TaskDescriptor]:
        by_name = {task.name: task for task in self.tasks}
        return [by_name[name] for name in self.topo_names()]

    def topo_names(self) -> list[str]:
        state = {task.name: _Visit.UNVISITED for task in self.tasks}
        out: list[str] = []
        stack: list[str] = []
        pos: dict[str, int] = {}
        # Explicit (name, remaining deps) frames; no recursion depth limit.
        frames: list[tuple[str, Iterator[str]]] = []

        def enter(name: str) -> None:
            state[name] = _Visit.VISITING
            pos[name] = len(stack)
            stack.append(name)
            frames.append((name, iter(self._deps[name])))

        for task in self.tasks:
            if state[task.name] != _Visit.UNVISITED:
                continue

            enter(task.name)
            while frames:
                name, deps = frames[-1]
                for dep in deps:
                    if state[dep] == _Visit.VISITING:
                        start = pos[dep]
                        raise CycleError(stack[start:] + [dep])
                    if state[dep] == _Visit.UNVISITED:
                        enter(dep)
                        break
                else:
                    frames.pop()
                    stack.pop()
                    pos.pop(name)
                    state[name] = _Visit.VISITED
                    out.append(name)

        return out


def topo_order(tasks: Iterable[TaskDescriptor]) -> list[TaskDescriptor]:
    return TaskGraph.from_tasks(tasks).topo_order()
