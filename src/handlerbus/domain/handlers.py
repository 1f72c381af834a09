"""Handler capability, auto-registration marker, and their inspector.

A handler class declares which message types it handles by deriving from
``Handler[M]`` with a concrete message class ``M``. A class handling more
than one message type derives from several intermediate bases, each
parameterized once::

    class OrderHandler(Handler[OrderCreated]): ...
    class PaymentHandler(Handler[PaymentReceived]): ...

    @auto_register
    class Ledger(OrderHandler, PaymentHandler):
        def handle(self, message): ...

Inspection happens at discovery time only; dispatch never looks at these.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any, Generic, TypeVar, get_args, get_origin

M = TypeVar("M")

AUTO_REGISTER_ATTR = "__handlerbus_auto_register__"


class InstancePolicy(StrEnum):
    """How discovery instantiates a handler class that declares several message types."""

    PER_MESSAGE_TYPE = "per-message-type"
    SHARED = "shared"


class Handler(ABC, Generic[M]):
    """Capability: handles messages of exactly type ``M``."""

    @abstractmethod
    def handle(self, message: M) -> None:
        """Process *message*. May raise; the dispatcher isolates failures."""


def auto_register(cls: type) -> type:
    """Class decorator: mark *cls* for discovery.

    The marker applies to the decorated class only; subclasses must be
    marked on their own.
    """
    setattr(cls, AUTO_REGISTER_ATTR, True)
    return cls


def is_auto_registered(cls: type) -> bool:
    """Whether *cls* itself (not a base) carries the ``auto_register`` marker."""
    return bool(vars(cls).get(AUTO_REGISTER_ATTR, False))


def handled_message_types(cls: type) -> list[type]:
    """Return the message types *cls* declares via ``Handler[M]``, in MRO order.

    Capabilities declared through a generic intermediate base resolve through
    its type arguments: ``class OrderLogger(LoggingHandler[Order])`` with
    ``class LoggingHandler(Handler[M])`` handles ``Order``. Parameterizations
    left open (a bare ``TypeVar``) or with a non-class argument are ignored.
    """
    found: list[type] = []
    for klass in cls.__mro__:
        for base in vars(klass).get("__orig_bases__", ()):
            _collect_message_types(base, {}, found)
    return found


def _collect_message_types(base: Any, bindings: dict[Any, Any], found: list[type]) -> None:
    origin = get_origin(base)
    if not (isinstance(origin, type) and issubclass(origin, Handler)):
        return
    args = tuple(bindings.get(arg, arg) for arg in get_args(base))
    if origin is Handler:
        if args and isinstance(args[0], type) and args[0] not in found:
            found.append(args[0])
        return
    inner = dict(zip(getattr(origin, "__parameters__", ()), args))
    for inner_base in vars(origin).get("__orig_bases__", ()):
        _collect_message_types(inner_base, inner, found)


def is_handler(obj: Any) -> bool:
    """Whether *obj* exposes a callable ``handle``."""
    return callable(getattr(obj, "handle", None))


def type_name(cls: type) -> str:
    """Dotted ``module.QualName`` for display."""
    return f"{cls.__module__}.{cls.__qualname__}"
