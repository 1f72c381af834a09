"""Built-in observer that logs every lifecycle phase through structlog.

Successful phases log at DEBUG, so they only show with ``--verbose``.
Handler failures log at WARNING with the error summarized.
"""

from __future__ import annotations

import structlog

from handlerbus.domain.events import DispatchEvent
from handlerbus.plugins.hookspecs import hookimpl


class LoggingObserver:
    """Structured log line per handler invocation."""

    def __init__(self, logger_name: str = "handlerbus.dispatch") -> None:
        self._log = structlog.get_logger(logger_name)

    @hookimpl
    def dispatching(self, event: DispatchEvent) -> None:
        self._log.debug("dispatch.start", **event.to_dict())

    @hookimpl
    def dispatched(self, event: DispatchEvent) -> None:
        self._log.debug("dispatch.ok", **event.to_dict())

    @hookimpl
    def dispatch_failed(self, event: DispatchEvent, error: Exception) -> None:
        self._log.warning(
            "dispatch.failed",
            error=f"{type(error).__name__}: {error}",
            **event.to_dict(),
        )
