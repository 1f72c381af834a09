"""Tests for the check CLI command."""

from __future__ import annotations

import json
from collections.abc import Callable

import pytest
from click.testing import CliRunner

from handlerbus.cli import cli
from tests.conftest import SHOP_HANDLERS_SRC

_NEEDS_ARGS_SRC = """\
from handlerbus import Handler, auto_register


class Ping:
    pass


@auto_register
class NeedsArgs(Handler[Ping]):
    def __init__(self, dsn):
        self.dsn = dsn

    def handle(self, message):
        pass
"""

_RAISING_MANIFEST_SRC = """\
def register_handlers(dispatcher):
    raise RuntimeError("database unavailable")
"""


@pytest.mark.usefixtures("_isolated_project")
class TestCheckCommand:
    def test_healthy(
        self, cli_runner: CliRunner, write_module: Callable[[str, str], str]
    ) -> None:
        name = write_module("hb_cmd_check", SHOP_HANDLERS_SRC)

        result = cli_runner.invoke(cli, ["check", name])

        assert result.exit_code == 0
        assert result.stdout.startswith("OK  check")
        assert "  healthy: True" in result.stdout

    def test_json_output(
        self, cli_runner: CliRunner, write_module: Callable[[str, str], str]
    ) -> None:
        name = write_module("hb_cmd_check_json", SHOP_HANDLERS_SRC)

        result = cli_runner.invoke(cli, ["--json", "check", name])

        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["message_types"] == 2
        assert data["handlers"] == 3
        assert data["healthy"] is True

    def test_shared_policy_flag(
        self, cli_runner: CliRunner, write_module: Callable[[str, str], str]
    ) -> None:
        name = write_module("hb_cmd_check_shared", SHOP_HANDLERS_SRC)

        result = cli_runner.invoke(cli, ["--json", "--policy", "shared", "check", name])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["handlers"] == 3

    def test_instantiation_failure(
        self, cli_runner: CliRunner, write_module: Callable[[str, str], str]
    ) -> None:
        name = write_module("hb_cmd_check_broken", _NEEDS_ARGS_SRC)

        result = cli_runner.invoke(cli, ["--json", "check", name])

        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["op"] == "check"
        assert payload["error"]["code"] == "INSTANTIATION_FAILED"
        assert payload["error"]["detail"]["handler_type"] == f"{name}.NeedsArgs"

    def test_module_load_failure(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", "hb_cmd_check_missing"])

        assert result.exit_code == 1
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "MODULE_LOAD_FAILED"
        assert payload["error"]["detail"] == {"module": "hb_cmd_check_missing"}

    def test_manifest_failure_exits_cleanly(
        self, cli_runner: CliRunner, write_module: Callable[[str, str], str]
    ) -> None:
        name = write_module("hb_cmd_check_manifest", _RAISING_MANIFEST_SRC)

        result = cli_runner.invoke(cli, ["--json", "check", name])

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "MANIFEST_FAILED"
