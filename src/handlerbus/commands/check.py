"""Command: verify handler modules load and their handlers construct."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from handlerbus.commands._base import HbCommand, path_option

if TYPE_CHECKING:
    from handlerbus.commands._context import AppContext


@click.command(
    cls=HbCommand,
    examples="""\
  handlerbus check shop.handlers
  handlerbus check -p src shop.handlers billing.handlers""",
)
@click.argument("modules", nargs=-1)
@path_option
@click.pass_obj
def check(app: AppContext, modules: tuple[str, ...], paths: tuple[Path, ...]) -> None:
    """Check that MODULES import and every marked handler instantiates."""
    from handlerbus.services.routes import RouteService

    app.emit(RouteService(app.settings).check(modules, paths=paths))
