"""Pluggy hook specifications for dispatch lifecycle notifications.

Three hooks fire around every individual handler invocation:
``dispatching`` before, then ``dispatched`` on success or
``dispatch_failed`` when the handler raised. Observers are side channels
such as logging or metrics and cannot change dispatch control flow.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from handlerbus.domain.events import DispatchEvent

PROJECT_NAME = "handlerbus"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class DispatchHookSpec:
    """Hook specifications for the handlerbus observer system."""

    @hookspec
    def dispatching(self, event: DispatchEvent) -> None:
        """Called before a handler receives the message."""

    @hookspec
    def dispatched(self, event: DispatchEvent) -> None:
        """Called after a handler returned normally."""

    @hookspec
    def dispatch_failed(self, event: DispatchEvent, error: Exception) -> None:
        """Called after a handler raised *error*. Delivery continues regardless."""
