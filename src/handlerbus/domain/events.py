"""Lifecycle notification payload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from handlerbus.domain.handlers import type_name


@dataclass(frozen=True, slots=True)
class DispatchEvent:
    """One handler invocation within a dispatch.

    The same instance is passed to ``dispatching`` and then to either
    ``dispatched`` or ``dispatch_failed``.

    Attributes:
        message: The message being dispatched.
        handler_type: Declared class of the handler (``type(handler)``).
        handler: The handler instance receiving the message.
    """

    message: Any
    handler_type: type
    handler: Any

    @property
    def message_type(self) -> type:
        return type(self.message)

    def to_dict(self) -> dict[str, str]:
        return {
            "message_type": type_name(type(self.message)),
            "handler_type": type_name(self.handler_type),
        }
