"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from handlerbus.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from handlerbus.services.result import ServiceResult


def render_result(result: ServiceResult) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="hb.ok")
    op = Text(f"  {result.op}", style="hb.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"))
    console.print(Text(f"  {key}: ", style="hb.key"), Text(str(value)), sep="", end="")
    console.print()


def _routes_table(routes: list[dict[str, Any]]) -> Table:
    """One row per handler; the message type is printed on its first row only."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Message type", style="hb.message_type", no_wrap=True)
    table.add_column("#", style="hb.position", justify="right")
    table.add_column("Handler", style="hb.handler", no_wrap=True)

    for route in routes:
        for position, handler in enumerate(route["handlers"], start=1):
            label = route["message_type"] if position == 1 else ""
            table.add_row(label, str(position), handler)
    return table


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_routes(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    data = dict(result.data)
    routes = data.pop("routes", [])
    for key, value in data.items():
        _field(console, key, value)
    if routes:
        console.print(_routes_table(routes))


def _render_error(result: ServiceResult, console: Console) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="hb.error")
    op = Text(f"  {result.op}: ", style="hb.op")
    console.print(label, op, Text(msg), sep="", end="")
    console.print()


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "routes": _render_routes,
}
