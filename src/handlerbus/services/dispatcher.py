"""Dispatcher: synchronous, type-indexed delivery with per-handler isolation.

``dispatch(message)`` routes to the handlers registered for the message's
exact runtime type, in registration order, on the caller's thread. Around
each handler it notifies observers (``dispatching``, then ``dispatched`` or
``dispatch_failed``).

INVARIANT: A failing handler never aborts delivery to the handlers after
it, and its exception never reaches the caller of ``dispatch``.
"""

from __future__ import annotations

import logging
from types import ModuleType
from typing import TYPE_CHECKING, Any

from handlerbus.domain.events import DispatchEvent
from handlerbus.domain.handlers import InstancePolicy, is_handler
from handlerbus.plugins.discovery import register_entry_points, register_module
from handlerbus.plugins.notifier import Notifier
from handlerbus.services.registry import HandlerRegistry

if TYPE_CHECKING:
    from handlerbus.config.settings import HandlerbusSettings

logger = logging.getLogger(__name__)


class Dispatcher:
    """In-process message dispatcher.

    Each instance exclusively owns one :class:`HandlerRegistry` and one
    :class:`Notifier`. Register/unregister are safe to call while another
    thread dispatches: an in-flight dispatch keeps iterating the snapshot
    it started with.
    """

    def __init__(self) -> None:
        self._registry = HandlerRegistry()
        self._notifier = Notifier()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create_and_register(
        cls,
        module: ModuleType | str,
        *,
        policy: InstancePolicy | str = InstancePolicy.PER_MESSAGE_TYPE,
    ) -> Dispatcher:
        """Build a dispatcher and populate it from the handlers found in *module*.

        Raises:
            ModuleLoadError: *module* cannot be imported.
            HandlerInstantiationError: a marked handler cannot be constructed.
        """
        dispatcher = cls()
        register_module(dispatcher, module, policy=policy)
        return dispatcher

    @classmethod
    def from_settings(cls, settings: HandlerbusSettings) -> Dispatcher:
        """Build a dispatcher wired according to *settings*.

        Attaches the built-in logging observer, loads entry-point observers,
        and runs discovery over the configured modules and entry points.
        """
        dispatcher = cls()

        observers = settings.observers
        if observers.log_lifecycle:
            from handlerbus.plugins.builtins.logging_observer import LoggingObserver

            dispatcher.add_observer(LoggingObserver(), name="logging")
        if observers.use_entry_points:
            dispatcher.load_observers(observers.entry_point_group)

        discovery = settings.discovery
        for module in discovery.modules:
            register_module(
                dispatcher,
                module,
                policy=discovery.policy,
                call_manifest=discovery.call_manifest,
            )
        if discovery.use_entry_points:
            register_entry_points(
                dispatcher,
                discovery.entry_point_group,
                policy=discovery.policy,
                call_manifest=discovery.call_manifest,
            )

        logger.debug(
            "Dispatcher ready: %d handler(s) for %d message type(s), observers: %s",
            len(dispatcher._registry),
            len(dispatcher._registry.message_types()),
            ", ".join(dispatcher._notifier.list_observer_names()) or "none",
        )
        return dispatcher

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    def register(self, message_type: type, handler: Any) -> None:
        """Register *handler* for messages of exactly *message_type*.

        Registering the same instance twice for a type is a no-op.
        """
        if not isinstance(message_type, type):
            raise TypeError(f"message_type must be a class, got {message_type!r}")
        if handler is None:
            raise TypeError("handler must not be None")
        if not is_handler(handler):
            raise TypeError(f"{handler!r} has no callable handle()")
        self._registry.register(message_type, handler)

    def unregister(self, message_type: type, handler: Any) -> None:
        """Remove *handler* for *message_type*. No-op if it is not registered."""
        self._registry.unregister(message_type, handler)

    def clear(self) -> None:
        """Remove every handler registration. Observers stay attached."""
        self._registry.clear()

    def dispatch(self, message: Any) -> None:
        """Deliver *message* to every handler registered for ``type(message)``.

        Handlers run sequentially in registration order. Exceptions from a
        handler are reported through ``dispatch_failed`` and swallowed.
        """
        if message is None:
            raise TypeError("Cannot dispatch None")

        handlers = self._registry.lookup(type(message))
        for handler in handlers:
            event = DispatchEvent(message=message, handler_type=type(handler), handler=handler)
            self._notifier.notify("dispatching", event=event)
            try:
                handler.handle(message)
            except Exception as exc:
                logger.debug(
                    "Handler %s failed for %s: %s",
                    type(handler).__qualname__,
                    type(message).__qualname__,
                    exc,
                )
                self._notifier.notify("dispatch_failed", event=event, error=exc)
            else:
                self._notifier.notify("dispatched", event=event)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_observer(self, observer: object, name: str | None = None) -> None:
        """Attach an observer carrying ``@hookimpl`` lifecycle methods."""
        self._notifier.register(observer, name=name)

    def remove_observer(self, observer: object) -> None:
        """Detach an observer. No-op if it is not attached."""
        self._notifier.unregister(observer)

    def get_observers(self) -> list[object]:
        """Return all attached observers."""
        return self._notifier.get_observers()

    def load_observers(self, group: str | None = None) -> int:
        """Attach observers advertised in an entry-point group."""
        if group is None:
            return self._notifier.load_entry_points()
        return self._notifier.load_entry_points(group)
