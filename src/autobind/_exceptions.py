from __future__ import annotations

from typing import Any


class ContainerError(RuntimeError):
    pass


class ClassNotFoundError(ContainerError):
    """Raised when an identifier cannot be turned into an instantiable class."""

    def __init__(self, identifier: Any, reason: str = "") -> None:
        self.identifier = identifier
        msg = f"class not exists: {_display(identifier)}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class FunctionNotFoundError(ContainerError):
    """Raised when a factory or function cannot be introspected."""

    def __init__(self, function: Any) -> None:
        self.function = function
        super().__init__(f"function not exists: {_display(function)}()")


class ParamMissError(ContainerError):
    def __init__(self, name: str, target: Any = None) -> None:
        self.name = name
        self.target = target
        msg = f"method param miss: {name}"
        if target is not None:
            msg = f"{msg} (in {_display(target)})"
        super().__init__(msg)


class CircularDependencyError(ContainerError):
    def __init__(self, chain: list[Any]) -> None:
        self.chain = list(chain)
        super().__init__("circular dependency: " + " -> ".join(_display(item) for item in self.chain))


def _display(obj: Any) -> str:
    if isinstance(obj, str):
        return obj
    return getattr(obj, "__qualname__", None) or repr(obj)
