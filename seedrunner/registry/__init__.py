from .loader import SeedFile, load_seed_file, resolve_reference
from .types import (
    Registry,
    RegistryError,
    ResourceError,
    RunOptions,
    TaskDescriptor,
    UnsupportedFormatError,
)

__all__ = [
    "load_seed_file",
    "resolve_reference",
    "SeedFile",
    "Registry",
    "RegistryError",
    "ResourceError",
    "RunOptions",
    "TaskDescriptor",
    "UnsupportedFormatError",
]
