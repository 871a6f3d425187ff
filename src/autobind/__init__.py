"""Reflection-driven dependency injection container.

Requested identifiers (classes, dotted class paths or abstract string names)
are resolved into fully constructed objects. Constructor and function
parameters annotated with a class are auto-wired; everything else is filled
from caller-supplied values, by position or by name, or from defaults.

Exports:
- `Container`: registry and resolver; `Container.get_instance()` returns the
  process-wide container.
- `get`: resolve through the process-wide container.
- `Positional` / `Named`: explicit argument modes for `Container.resolve`.
- `BoundCall`: arguments prepared by `Container.bind_params`.
- `ContainerError` and its subclasses: the errors resolution can raise.
"""

from ._args import Named, Positional
from ._binder import BoundCall
from ._container import Container, get
from ._exceptions import (
    CircularDependencyError,
    ClassNotFoundError,
    ContainerError,
    FunctionNotFoundError,
    ParamMissError,
)


__all__ = [
    "BoundCall",
    "CircularDependencyError",
    "ClassNotFoundError",
    "Container",
    "ContainerError",
    "FunctionNotFoundError",
    "Named",
    "ParamMissError",
    "Positional",
    "get",
]
