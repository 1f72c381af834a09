"""Rich Console factory and theme for handlerbus output.

Consoles render to a StringIO buffer so ``format_result()`` keeps
returning a string. Outside a terminal (tests, pipes) Rich emits no
color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

HB_THEME = Theme(
    {
        "hb.ok": "bold green",
        "hb.error": "bold red",
        "hb.op": "bold cyan",
        "hb.key": "dim",
        "hb.message_type": "bold blue",
        "hb.handler": "green",
        "hb.position": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=HB_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
