"""Subcommand modules for handlerbus.

Provides register_commands() which uses deferred imports to keep
``handlerbus --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from handlerbus.commands.check import check
    from handlerbus.commands.routes import routes

    cli.add_command(routes)
    cli.add_command(check)
