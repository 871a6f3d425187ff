from __future__ import annotations

import importlib
import inspect
import logging
import typing
from typing import TYPE_CHECKING, Any, Protocol

from ._binder import BoundCall, ParamBinder, describe_parameters, get_hints
from ._exceptions import ClassNotFoundError, FunctionNotFoundError


if TYPE_CHECKING:
    from collections.abc import Callable

    from ._args import Args
    from ._container import Container


logger = logging.getLogger(__name__)

#: Name of the static/class method a class may declare to build its own instances.
FACTORY_METHOD = "__make__"


class Invoker:
    """Builds objects from classes and calls factories with bound parameters."""

    def __init__(self, container: Container) -> None:
        self._binder = ParamBinder(container)

    def invoke_class(self, identifier: Any, args: Args) -> Any:
        cls = load_class(identifier)

        factory = _static_factory(cls)
        if factory is not None:
            logger.debug("Building %s through %s()", cls.__qualname__, FACTORY_METHOD)
            params = describe_parameters(_signature_of_class(cls, factory, identifier), get_hints(factory, cls))
            return self._binder.bind(params, args, factory)(factory)

        if cls.__init__ is object.__init__ and cls.__new__ is object.__new__:
            return cls()

        sig = _signature_of_class(cls, cls, identifier)
        # hints come from whichever of __init__ / __new__ provides the signature
        ctor = "__new__" if cls.__init__ is object.__init__ else "__init__"
        params = describe_parameters(sig, get_hints(inspect.getattr_static(cls, ctor), cls))

        logger.debug("Constructing %s", cls.__qualname__)
        return self._binder.bind(params, args, cls)(cls)

    def invoke_function(self, function: Callable[..., Any], args: Args) -> Any:
        call = self.bind_params(function, args)
        logger.debug("Calling %s", getattr(function, "__qualname__", function))
        return call(function)

    def bind_params(self, function: Callable[..., Any], args: Args) -> BoundCall:
        if not callable(function):
            raise FunctionNotFoundError(function)

        try:
            sig = inspect.signature(function)
        except (TypeError, ValueError) as e:
            raise FunctionNotFoundError(function) from e

        params = describe_parameters(sig, get_hints(function))
        return self._binder.bind(params, args, function)


def load_class(identifier: Any) -> type:
    """Return the class named by ``identifier`` (a class or a dotted import path)."""
    if inspect.isclass(identifier):
        cls = identifier
    elif isinstance(identifier, str):
        cls = _import_dotted(identifier)
    else:
        raise ClassNotFoundError(identifier, "identifier must be a class or a dotted path")

    if not inspect.isclass(cls):
        raise ClassNotFoundError(identifier, "not a class")
    if inspect.isabstract(cls):
        raise ClassNotFoundError(identifier, "abstract class")
    if _is_protocol(cls):
        raise ClassNotFoundError(identifier, "protocol")
    return cls


def _import_dotted(path: str) -> Any:
    module_name, _, attr = path.rpartition(".")
    if not module_name:
        raise ClassNotFoundError(path, "no binding and not a dotted path")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ClassNotFoundError(path, str(e)) from e

    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ClassNotFoundError(path, str(e)) from e


def _static_factory(cls: type) -> Callable[..., Any] | None:
    try:
        raw = inspect.getattr_static(cls, FACTORY_METHOD)
    except AttributeError:
        return None

    # instance methods are not factories
    if not isinstance(raw, (staticmethod, classmethod)):
        return None
    return getattr(cls, FACTORY_METHOD)


def _signature_of_class(cls: type, target: Any, identifier: Any) -> inspect.Signature:
    try:
        return inspect.signature(target)
    except (TypeError, ValueError) as e:
        raise ClassNotFoundError(identifier, f"cannot introspect {cls.__qualname__}") from e


if hasattr(typing, "is_protocol"):
    # https://docs.python.org/3/library/typing.html#typing.is_protocol
    def _is_protocol(tp: type) -> bool:
        return typing.is_protocol(tp)

else:

    def _is_protocol(tp: type) -> bool:
        return bool(getattr(tp, "_is_protocol", False)) and Protocol in tp.__mro__
