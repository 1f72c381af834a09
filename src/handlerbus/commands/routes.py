"""Command: print the routing table discovered from handler modules."""

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
  handlerbus routes shop.handlers
  handlerbus routes shop.handlers billing.handlers
  handlerbus --policy shared routes shop.handlers
  handlerbus --json routes -p src shop.handlers""",
)
@click.argument("modules", nargs=-1)
@path_option
@click.pass_obj
def routes(app: AppContext, modules: tuple[str, ...], paths: tuple[Path, ...]) -> None:
    """Discover handlers in MODULES and show message type -> handler routing.

    Falls back to ``[discovery] modules`` from handlerbus.toml when no
    module is given.
    """
    from handlerbus.services.routes import RouteService

    app.emit(RouteService(app.settings).routes(modules, paths=paths))
