"""Tests for the ``ev`` command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from evexpr.cli import _split_expression, main


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    """A runner whose working directory has no evexpr.yaml."""
    monkeypatch.chdir(tmp_path)
    return CliRunner()


# ────────────────────────────────────────────────────────────────
# Argument splitting
# ────────────────────────────────────────────────────────────────


class TestSplitExpression:
    def test_plain_expression(self) -> None:
        assert _split_expression(["1+2"]) == ["--", "1+2"]

    def test_negative_expression_is_not_an_option(self) -> None:
        assert _split_expression(["-x", "-2*pi"]) == ["-x", "--", "-2*pi"]

    def test_precision_value_is_kept_with_option(self) -> None:
        assert _split_expression(["-p", "3", "pi"]) == ["-p", "3", "--", "pi"]

    def test_explicit_separator(self) -> None:
        assert _split_expression(["-i", "--", "-1"]) == ["-i", "--", "-1"]

    def test_options_only(self) -> None:
        assert _split_expression(["--version"]) == ["--version"]


# ────────────────────────────────────────────────────────────────
# Output modes
# ────────────────────────────────────────────────────────────────


class TestOutput:
    def test_double(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["1 + 2 * 3"])
        assert result.exit_code == 0, result.output
        assert result.output == "7\n"

    def test_default_precision_is_17(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["0.1"])
        assert result.output == "0.10000000000000001\n"

    def test_precision(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-p", "3", "pi"])
        assert result.exit_code == 0, result.output
        assert result.output == "3.14\n"

    def test_hex(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-x", "255"])
        assert result.output == "0x000000FF\n"

    def test_hex_of_negative_wraps(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-x", "-1"])
        assert result.output == "0xFFFFFFFF\n"

    def test_int(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-i", "7 / 2"])
        assert result.output == "3\n"

    def test_uint(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--uint", "0xFFFFFFFF"])
        assert result.output == "4294967295\n"

    def test_float(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-f", "0.1"])
        assert result.output == "0.100000001\n"

    def test_hex_wins_over_int(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-i", "-x", "16"])
        assert result.output == "0x00000010\n"

    def test_negative_expression(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-2*3"])
        assert result.exit_code == 0, result.output
        assert result.output == "-6\n"

    def test_list_functions(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-l"])
        assert result.exit_code == 0
        assert "sqrt" in result.output
        assert "datan2" in result.output


# ────────────────────────────────────────────────────────────────
# Errors
# ────────────────────────────────────────────────────────────────


class TestErrors:
    def test_trailing_garbage(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["1 2"])
        assert result.exit_code == 1
        assert "Garbage at end of expression: 2" in result.output

    def test_unknown_function(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["foo(1)"])
        assert result.exit_code == 1
        assert "Unknown function: foo" in result.output

    def test_uint_out_of_range(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["-u", "-1"])
        assert result.exit_code == 1
        assert "Unsigned integer out of range" in result.output

    def test_missing_expression(self, runner: CliRunner) -> None:
        result = runner.invoke(main, [])
        assert result.exit_code == 2
        assert "EXPRESSION" in result.output


# ────────────────────────────────────────────────────────────────
# Configuration and event log
# ────────────────────────────────────────────────────────────────


class TestConfig:
    def test_precision_from_config(self, runner: CliRunner, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("precision: 5\n")
        result = runner.invoke(main, ["--config", str(cfg), "pi"])
        assert result.exit_code == 0, result.output
        assert result.output == "3.1416\n"

    def test_output_mode_from_default_file(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "evexpr.yaml").write_text("output: hex\n")
        result = runner.invoke(main, ["255"])
        assert result.output == "0x000000FF\n"

    def test_flag_overrides_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "evexpr.yaml").write_text("output: hex\n")
        result = runner.invoke(main, ["-i", "255"])
        assert result.output == "255\n"

    def test_invalid_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "evexpr.yaml").write_text("output: octal\n")
        result = runner.invoke(main, ["1"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_events_logged(self, runner: CliRunner, tmp_path: Path) -> None:
        log = tmp_path / "logs" / "events.ndjson"
        (tmp_path / "evexpr.yaml").write_text(f"logging_path: {log}\n")

        runner.invoke(main, ["1 + 1"])
        runner.invoke(main, ["1 +"])

        events = [json.loads(line) for line in log.read_text().splitlines()]
        assert [e["event_type"] for e in events] == ["eval_completed", "eval_error"]
        assert events[0]["context"]["result"] == "2"
        assert events[1]["error_code"] == "bad_numerical_expression"
        assert events[1]["level"] == "warning"
