"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from handlerbus.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["routes", "--examples"], ["handlerbus routes shop.handlers", "--policy shared"]),
    (["check", "--examples"], ["handlerbus check shop.handlers", "-p src"]),
]


@pytest.mark.usefixtures("_isolated_project")
class TestExamplesFlag:
    @pytest.mark.parametrize(
        ("args", "keywords"),
        EXAMPLES_COMMANDS,
        ids=[" ".join(a[:-1]) for a, _ in EXAMPLES_COMMANDS],
    )
    def test_examples_output(
        self, cli_runner: CliRunner, args: list[str], keywords: list[str]
    ) -> None:
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        assert "Examples for" in result.output
        for keyword in keywords:
            assert keyword in result.output

    def test_examples_skip_discovery(self, cli_runner: CliRunner) -> None:
        """--examples is eager: missing module arguments are never resolved."""
        result = cli_runner.invoke(cli, ["routes", "--examples", "hb_never_imported"])
        assert result.exit_code == 0

    def test_examples_not_in_help_body(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["routes", "--help"])
        assert result.exit_code == 0
        assert "--examples" in result.output
        assert "handlerbus routes shop.handlers" not in result.output
