class GraphError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class CycleError(GraphError):
    def __init__(self, cycle: list[str]):
        super().__init__("Circular dependency detected: " + " -> ".join(cycle))
        self.cycle = cycle


class MissingDependencyError(GraphError):
    def __init__(self, task: str, dependency: str):
        super().__init__(
            f"Task '{task}' depends on '{dependency}', which is not part of the graph"
        )
        self.task = task
        self.dependency = dependency


class ConfigurationError(GraphError):
    def __init__(self, violations: list[str]):
        lines = "\n".join(f"  - {violation}" for violation in violations)
        super().__init__(f"Seed dependencies are invalid:\n{lines}")
        self.violations = violations
