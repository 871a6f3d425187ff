from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Positional:
    """Caller-supplied values matched to parameters by order."""

    values: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    def entries(self) -> list[tuple[int, Any]]:
        return list(enumerate(self.values))


@dataclass(frozen=True)
class Named:
    """Caller-supplied values matched to parameters by name."""

    values: Mapping[Any, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # snapshot so later changes to the caller's mapping are not observed
        object.__setattr__(self, "values", dict(self.values))

    def entries(self) -> list[tuple[Any, Any]]:
        return list(self.values.items())


Args = Union[Positional, Named]


def as_args(raw: Any) -> Args:
    """Decide the binding mode of caller input once.

    A mapping whose first key is the integer ``0`` is treated as an ordered
    list, every other mapping as named values.
    """
    if raw is None:
        return Positional()

    if isinstance(raw, (Positional, Named)):
        return raw

    if isinstance(raw, Mapping):
        first = next(iter(raw), None)
        if type(first) is int and first == 0:
            return Positional(tuple(raw.values()))
        return Named(raw)

    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        msg = f"Arguments must be a sequence or a mapping, got {type(raw).__name__}"
        raise TypeError(msg)

    return Positional(tuple(raw))


class ArgCursor:
    """Front-consuming view over caller entries that never mutates them."""

    def __init__(self, args: Args) -> None:
        self._entries = args.entries()
        self._pos = 0
        self._taken: set[Any] = set()

    def __bool__(self) -> bool:
        return self._pos < len(self._entries)

    def peek(self) -> Any:
        return self._entries[self._pos][1]

    def pop(self) -> Any:
        _, value = self._entries[self._pos]
        self._pos += 1
        return value

    def take_named(self, name: str) -> tuple[bool, Any]:
        for key, value in self._entries[self._pos :]:
            if key == name:
                self._taken.add(key)
                return True, value
        return False, None

    def remaining(self) -> list[tuple[Any, Any]]:
        return self._entries[self._pos :]

    def leftover_named(self, declared: set[str]) -> dict[str, Any]:
        return {
            key: value
            for key, value in self.remaining()
            if key not in declared and key not in self._taken
        }
