"""Root CLI group for handlerbus with global flags and command registration."""

from __future__ import annotations

from typing import Any

import click

from handlerbus import __version__
from handlerbus.commands import register_commands
from handlerbus.commands._context import AppContext
from handlerbus.config.settings import HandlerbusSettings
from handlerbus.domain.handlers import InstancePolicy


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="handlerbus")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--policy",
    type=click.Choice([p.value for p in InstancePolicy]),
    default=None,
    help="Instance policy for handlers declaring several message types.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    policy: str | None,
) -> None:
    """Inspect in-process message handler routing."""
    ctx.ensure_object(dict)
    overrides: dict[str, Any] = {}
    if policy is not None:
        overrides["discovery"] = {"policy": policy}
    settings = HandlerbusSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
        **overrides,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
