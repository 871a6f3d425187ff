from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, get_type_hints

from ._args import ArgCursor, Args, Positional
from ._exceptions import ParamMissError


if TYPE_CHECKING:
    from collections.abc import Callable

    from ._container import Container


logger = logging.getLogger(__name__)

_empty = inspect.Parameter.empty


@dataclass(frozen=True)
class ParameterInfo:
    name: str
    kind: inspect._ParameterKind
    annotation: Any = _empty
    default: Any = _empty

    @property
    def has_default(self) -> bool:
        return self.default is not _empty

    @property
    def is_injectable(self) -> bool:
        """Only nominal, non-builtin classes are auto-wired; scalars are plain values."""
        ann = self.annotation
        if ann is _empty:
            return False
        return inspect.isclass(ann) and getattr(ann, "__module__", "") != "builtins"


@dataclass
class BoundCall:
    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)

    def __call__(self, target: Callable[..., Any]) -> Any:
        return target(*self.args, **self.kwargs)


def describe_parameters(sig: inspect.Signature, hints: dict[str, Any]) -> list[ParameterInfo]:
    return [
        ParameterInfo(
            name=name,
            kind=p.kind,
            annotation=hints.get(name, _empty),
            default=p.default,
        )
        for name, p in sig.parameters.items()
        if name != "self"
    ]


def get_hints(func: Any, owner: Any = None) -> dict[str, Any]:
    func = getattr(func, "__func__", func)
    try:
        return get_type_hints(func)
    except TypeError:
        return {}
    except NameError as exc:
        where = getattr(owner or func, "__qualname__", repr(owner or func))
        logger.warning("'%s' name error retrieving %s type hints", exc.name, where)
        return {}


class ParamBinder:
    """Turns declared parameters plus caller values into a concrete call."""

    def __init__(self, container: Container) -> None:
        self._container = container

    def bind(self, params: list[ParameterInfo], args: Args, target: Any = None) -> BoundCall:
        call = BoundCall()
        if not params:
            return call

        positional = isinstance(args, Positional)
        cursor = ArgCursor(args)

        for p in params:
            if p.kind is inspect.Parameter.VAR_POSITIONAL:
                if positional:
                    while cursor:
                        call.args.append(cursor.pop())
                continue

            if p.kind is inspect.Parameter.VAR_KEYWORD:
                if not positional:
                    declared = {q.name for q in params}
                    extras = cursor.leftover_named(declared)
                    call.kwargs.update({k: v for k, v in extras.items() if isinstance(k, str)})
                continue

            value = self._value_for(p, cursor, positional, target)

            if p.kind is inspect.Parameter.KEYWORD_ONLY:
                call.kwargs[p.name] = value
            else:
                call.args.append(value)

        return call

    def _value_for(self, p: ParameterInfo, cursor: ArgCursor, positional: bool, target: Any) -> Any:
        if p.is_injectable:
            return self._object_param(p.annotation, cursor)

        if positional and cursor:
            return cursor.pop()

        if not positional:
            found, value = cursor.take_named(p.name)
            if found:
                return value

        if p.has_default:
            return p.default

        raise ParamMissError(p.name, target)

    def _object_param(self, cls: type, cursor: ArgCursor) -> Any:
        # A pre-built instance at the front of the caller values wins over auto-wiring.
        if cursor and _is_instance(cursor.peek(), cls):
            return cursor.pop()
        return self._container.resolve(cls)


def _is_instance(value: Any, cls: type) -> bool:
    try:
        return isinstance(value, cls)
    except TypeError:
        # non runtime-checkable protocols reject isinstance
        return False
