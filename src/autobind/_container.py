from __future__ import annotations

import inspect
import logging
import threading
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar, overload

from ._args import as_args
from ._exceptions import CircularDependencyError
from ._invoker import Invoker


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._binder import BoundCall

    T = TypeVar("T")

    Token = type[T] | str


class Container:
    """Reflection-driven DI container.

    - bind identifiers to factories or to other identifiers
    - resolve with constructor injection
    - instances are cached per identifier unless ``force_new`` is given
    """

    _shared: ClassVar[Container | None] = None
    _shared_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._bindings: dict[Any, Any] = {}
        self._aliases: dict[Any, Any] = {}
        self._instances: dict[Any, object] = {Container: self}
        self._building: list[Any] = []
        self._lock = threading.RLock()
        self._invoker = Invoker(self)

    @classmethod
    def get_instance(cls) -> Container:
        """Return the process-wide container, creating it on first access."""
        if Container._shared is None:
            with Container._shared_lock:
                if Container._shared is None:
                    Container._shared = cls()
        return Container._shared

    def bind(self, identifier: Token[Any], concrete: Any, *, replace: bool = False) -> None:
        """Bind ``identifier`` to a factory callable or to another identifier.

        Example:
          container.bind("cache", RedisCache)
          container.bind("clock", lambda: FakeClock(), replace=True)

        """
        if concrete == identifier:
            msg = f"Cannot bind {identifier!r} to itself."
            raise ValueError(msg)

        if not (isinstance(concrete, str) or callable(concrete)):
            msg = f"Binding target must be a callable or an identifier, got {type(concrete).__name__}"
            raise TypeError(msg)

        with self._lock:
            if not replace and identifier in self._bindings:
                msg = f"Identifier {identifier!r} is already bound. Pass replace=True to overwrite."
                raise KeyError(msg)
            self._bindings[identifier] = concrete
            self._instances.pop(identifier, None)
            # recorded aliases may run through the old binding; they are rebuilt lazily
            self._aliases.clear()

    def instance(self, identifier: Token[Any], obj: object) -> None:
        """Register a pre-built object; non-forced resolution always returns it."""
        with self._lock:
            self._aliases.pop(identifier, None)
            self._instances[identifier] = obj

    def bound(self, identifier: Token[Any]) -> bool:
        with self._lock:
            return identifier in self._bindings or identifier in self._instances

    def forget(self, identifier: Token[Any]) -> None:
        """Drop the cached instance and recorded alias of ``identifier``."""
        with self._lock:
            self._instances.pop(identifier, None)
            self._aliases.pop(identifier, None)

    @overload
    def resolve(self, identifier: type[T], args: Any = ..., force_new: bool = ...) -> T: ...

    @overload
    def resolve(self, identifier: str, args: Any = ..., force_new: bool = ...) -> object: ...

    def resolve(self, identifier: Token[T], args: Any = None, force_new: bool = False) -> object:
        """Resolve the identifier to an instance.

        - A recorded alias is followed first.
        - A cached instance is returned unless ``force_new`` is set.
        - A factory binding is called; an identifier binding is resolved in its place.
        - Anything else is constructed as a class, auto-wiring class-typed parameters.

        ``args`` is a sequence (matched by position) or a mapping (matched by name).
        """
        with self._lock:
            identifier = self._aliases.get(identifier, identifier)

            if not force_new and identifier in self._instances:
                return self._instances[identifier]

            bound_args = as_args(args)

            concrete = self._bindings.get(identifier)
            if concrete is not None and _is_alias(concrete):
                target = self._final_target(identifier)
                logger.debug("Recorded alias %r -> %r", identifier, target)
                self._aliases[identifier] = target
                return self.resolve(target, bound_args, force_new)

            self._enter(identifier)
            try:
                if concrete is not None:
                    obj = self._invoker.invoke_function(concrete, bound_args)
                else:
                    obj = self._invoker.invoke_class(identifier, bound_args)
            finally:
                self._building.pop()

            if not force_new:
                self._instances[identifier] = obj

            return obj

    def invoke(self, function: Callable[..., T], args: Any = None) -> T:
        """Call ``function`` with injected arguments. The result is never cached."""
        with self._lock:
            return self._invoker.invoke_function(function, as_args(args))

    def bind_params(self, function: Callable[..., Any], args: Any = None) -> BoundCall:
        """Bind caller values and dependencies to the parameters of ``function`` without calling it.

        The returned call is invoked as ``call(function)``.
        """
        with self._lock:
            return self._invoker.bind_params(function, as_args(args))

    def _final_target(self, identifier: Any) -> Any:
        chain = [identifier]
        target = self._bindings[identifier]
        while True:
            if target in chain:
                raise CircularDependencyError([*chain, target])
            chain.append(target)
            nxt = self._bindings.get(target)
            if nxt is None or not _is_alias(nxt):
                return target
            target = nxt

    def _enter(self, identifier: Any) -> None:
        if identifier in self._building:
            start = self._building.index(identifier)
            raise CircularDependencyError([*self._building[start:], identifier])
        self._building.append(identifier)


def _is_alias(concrete: Any) -> bool:
    return isinstance(concrete, str) or inspect.isclass(concrete)


def get(identifier: Token[T], args: Any = None, force_new: bool = False) -> object:
    """Resolve ``identifier`` through the process-wide container."""
    return Container.get_instance().resolve(identifier, args, force_new)
