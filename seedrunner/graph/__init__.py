from .dag import TaskGraph, topo_order
from .types import ConfigurationError, CycleError, GraphError, MissingDependencyError
from .validate import check, find_violations, select, validate

__all__ = [
    "TaskGraph",
    "topo_order",
    "check",
    "find_violations",
    "select",
    "validate",
    "GraphError",
    "CycleError",
    "ConfigurationError",
    "MissingDependencyError",
]
