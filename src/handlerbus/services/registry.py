"""HandlerRegistry: message type to ordered, duplicate-free handler sequences.

Each message type maps to an immutable tuple. Mutations build a new tuple
under a lock and swap it in, so ``lookup`` hands out a snapshot that later
register/unregister calls cannot change underneath an in-flight dispatch.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Maps exact message types to handler instances in registration order.

    Uniqueness is by identity: registering the same instance twice for a
    message type is a no-op, while two equal-but-distinct instances are both
    kept. The registry only holds references.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, tuple[Any, ...]] = {}
        self._lock = threading.Lock()

    def register(self, message_type: type, handler: Any) -> bool:
        """Append *handler* for *message_type*.

        Returns True if added, False if the instance was already present.
        """
        if not isinstance(message_type, type):
            raise TypeError(f"message_type must be a class, got {message_type!r}")
        with self._lock:
            current = self._handlers.get(message_type, ())
            if any(h is handler for h in current):
                return False
            self._handlers[message_type] = (*current, handler)
        logger.debug("Registered %r for %s", handler, message_type.__qualname__)
        return True

    def unregister(self, message_type: type, handler: Any) -> bool:
        """Remove *handler* for *message_type*. Returns True if it was present."""
        with self._lock:
            current = self._handlers.get(message_type)
            if not current:
                return False
            remaining = tuple(h for h in current if h is not handler)
            if len(remaining) == len(current):
                return False
            if remaining:
                self._handlers[message_type] = remaining
            else:
                del self._handlers[message_type]
        logger.debug("Unregistered %r for %s", handler, message_type.__qualname__)
        return True

    def clear(self) -> None:
        """Drop every registration."""
        with self._lock:
            self._handlers = {}

    def lookup(self, message_type: type) -> tuple[Any, ...]:
        """Snapshot of handlers for *message_type* (empty if none)."""
        return self._handlers.get(message_type, ())

    def message_types(self) -> list[type]:
        """Message types that currently have at least one handler."""
        with self._lock:
            return list(self._handlers)

    def __contains__(self, message_type: object) -> bool:
        return message_type in self._handlers

    def __len__(self) -> int:
        with self._lock:
            return sum(len(handlers) for handlers in self._handlers.values())
