"""Built-in observer counting lifecycle notifications per message type."""

from __future__ import annotations

import threading
from collections import Counter
from typing import Any

from handlerbus.domain.events import DispatchEvent
from handlerbus.domain.handlers import type_name
from handlerbus.plugins.hookspecs import hookimpl


class DispatchStats:
    """Counts dispatching/dispatched/failed notifications.

    Keys are dotted message type names. Safe to share between threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: dict[str, Counter[str]] = {
            "dispatching": Counter(),
            "dispatched": Counter(),
            "failed": Counter(),
        }

    @hookimpl
    def dispatching(self, event: DispatchEvent) -> None:
        self._bump("dispatching", event)

    @hookimpl
    def dispatched(self, event: DispatchEvent) -> None:
        self._bump("dispatched", event)

    @hookimpl
    def dispatch_failed(self, event: DispatchEvent) -> None:
        self._bump("failed", event)

    def count(self, phase: str, message_type: type | None = None) -> int:
        """Count for *phase*, for one message type or summed over all."""
        with self._lock:
            counter = self._counts[phase]
            if message_type is None:
                return sum(counter.values())
            return counter[type_name(message_type)]

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {phase: dict(counter) for phase, counter in self._counts.items()}

    def reset(self) -> None:
        with self._lock:
            for counter in self._counts.values():
                counter.clear()

    def _bump(self, phase: str, event: DispatchEvent) -> None:
        with self._lock:
            self._counts[phase][type_name(event.message_type)] += 1
