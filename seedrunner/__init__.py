from .executor import (
    ActionReport,
    AggregateRunError,
    LoggingReporter,
    Reporter,
    RunError,
    RunSummary,
    SkipReason,
    TaskError,
    TaskResult,
    TaskStatus,
)
from .graph import ConfigurationError, CycleError, GraphError, MissingDependencyError
from .registry import Registry, RegistryError, RunOptions, TaskDescriptor, load_seed_file
from .runner import run_seeds, run_seeds_async

__all__ = [
    "run_seeds",
    "run_seeds_async",
    "load_seed_file",
    "TaskDescriptor",
    "Registry",
    "RunOptions",
    "ActionReport",
    "TaskResult",
    "TaskStatus",
    "SkipReason",
    "RunSummary",
    "Reporter",
    "LoggingReporter",
    "RegistryError",
    "GraphError",
    "ConfigurationError",
    "CycleError",
    "MissingDependencyError",
    "RunError",
    "TaskError",
    "AggregateRunError",
]
