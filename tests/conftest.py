"""Shared pytest fixtures and test helpers for handlerbus tests."""

from __future__ import annotations

import logging
import os
import sys
import textwrap
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from handlerbus import DispatchEvent, Dispatcher, hookimpl


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def dispatcher() -> Dispatcher:
    """Empty dispatcher."""
    return Dispatcher()


# ---------------------------------------------------------------------------
# Messages and handlers shared across test modules
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderCreated:
    order_id: str


@dataclass(frozen=True)
class PaymentReceived:
    order_id: str
    amount: int = 0


@dataclass(frozen=True)
class PriorityOrderCreated(OrderCreated):
    pass


class CountingHandler:
    """Counts and records every message it receives."""

    def __init__(self) -> None:
        self.received: list[Any] = []

    @property
    def count(self) -> int:
        return len(self.received)

    def handle(self, message: Any) -> None:
        self.received.append(message)


class FailingHandler:
    """Always raises."""

    def __init__(self, exc: BaseException | None = None) -> None:
        self.exc = exc or RuntimeError("handler exploded")
        self.calls = 0

    def handle(self, message: Any) -> None:
        self.calls += 1
        raise self.exc


class OrderLog:
    """Handler appending ``(name, message)`` to a shared log, for ordering tests."""

    def __init__(self, name: str, log: list[tuple[str, Any]]) -> None:
        self.name = name
        self.log = log

    def handle(self, message: Any) -> None:
        self.log.append((self.name, message))


class RecordingObserver:
    """Observer that records every lifecycle notification."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, DispatchEvent, Exception | None]] = []

    @hookimpl
    def dispatching(self, event: DispatchEvent) -> None:
        self.calls.append(("dispatching", event, None))

    @hookimpl
    def dispatched(self, event: DispatchEvent) -> None:
        self.calls.append(("dispatched", event, None))

    @hookimpl
    def dispatch_failed(self, event: DispatchEvent, error: Exception) -> None:
        self.calls.append(("dispatch_failed", event, error))

    def phases(self) -> list[str]:
        return [phase for phase, _event, _error in self.calls]

    def phases_for(self, handler: object) -> list[str]:
        return [phase for phase, event, _error in self.calls if event.handler is handler]


@pytest.fixture
def recorder(dispatcher: Dispatcher) -> RecordingObserver:
    """RecordingObserver attached to the ``dispatcher`` fixture."""
    observer = RecordingObserver()
    dispatcher.add_observer(observer, name="recorder")
    return observer


# ---------------------------------------------------------------------------
# Handler modules on disk for discovery tests
# ---------------------------------------------------------------------------


@pytest.fixture
def write_module(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Callable[[str, str], str]]:
    """Write a Python module into an importable temp directory.

    Returns a factory ``write(name, source) -> name``. Modules written this
    way are evicted from ``sys.modules`` after the test.
    """
    monkeypatch.syspath_prepend(str(tmp_path))
    written: list[str] = []

    def write(name: str, source: str) -> str:
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(source), encoding="utf-8")
        written.append(name)
        return name

    yield write

    for name in written:
        sys.modules.pop(name, None)


# ---------------------------------------------------------------------------
# Logging isolation for tests that call configure_logging (directly or via CLI)
# ---------------------------------------------------------------------------


@pytest.fixture
def _restore_logging() -> Iterator[None]:
    """Restore root logger state and structlog defaults after the test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    hb = logging.getLogger("handlerbus")
    hb_level = hb.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    hb.setLevel(hb_level)
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# CLI isolation
# ---------------------------------------------------------------------------

SHOP_HANDLERS_SRC = """\
from handlerbus import Handler, auto_register


class OrderCreated:
    pass


class PaymentReceived:
    pass


class OrderHandler(Handler[OrderCreated]):
    def handle(self, message):
        pass


class PaymentHandler(Handler[PaymentReceived]):
    def handle(self, message):
        pass


@auto_register
class AuditOrders(OrderHandler):
    pass


@auto_register
class Ledger(OrderHandler, PaymentHandler):
    pass
"""


@pytest.fixture
def _isolated_project(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, _restore_logging: None
) -> None:
    """Run the CLI from an empty project directory with no inherited config.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``; also restores
    logging since every CLI invocation reconfigures it.
    """
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("HANDLERBUS_"):
            monkeypatch.delenv(key)
