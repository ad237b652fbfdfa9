"""Tests for CLI commands."""

import sys

from click.testing import CliRunner

from subexec import __version__, check_output
from subexec.tester import tester as tester_group

PYTHON = sys.executable
TESTER = [PYTHON, "-m", "subexec.tester"]


def test_cli_help(invoke):
    result = invoke(["--help"])
    assert result.exit_code == 0
    for command in ("run", "call", "check-call", "check-output", "quote"):
        assert command in result.output


def test_cli_version(invoke):
    result = invoke(["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_quote_command(invoke):
    result = invoke(["quote", "echo", "a b", 'c"d'])
    assert result.exit_code == 0
    assert result.output == 'echo "a b" c"""d\n'


def test_quote_split_command(invoke):
    result = invoke(["quote", "--split", 'echo "a b" c"""d'])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["echo", "a b", 'c"d']


def test_quote_help(invoke):
    result = invoke(["quote", "--help"])
    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "--split" in result.output


def test_quote_help_as_external_program(subexec_cli):
    output = check_output(subexec_cli.path, subexec_cli.args("quote", "--help"))
    assert "Usage:" in output
    assert "TOKENS" in output


def test_run_exits_with_child_exit_code(invoke):
    result = invoke(["run", *TESTER, "error-exit", "7"])
    assert result.exit_code == 7


def test_run_passes_cwd_and_env(invoke, tmp_path):
    result = invoke(
        [
            "run",
            "--cwd",
            str(tmp_path),
            "--env",
            "SUBEXEC_TEST_VAR=from-cli",
            *TESTER,
            "envvar-to-file",
            "out.txt",
            "SUBEXEC_TEST_VAR",
        ]
    )
    assert result.exit_code == 0
    assert (tmp_path / "out.txt").read_text() == "from-cli"


def test_run_rejects_malformed_env(invoke):
    result = invoke(["run", "--env", "NOVALUE", *TESTER, "echo", "x"])
    assert result.exit_code != 0
    assert "NAME=VALUE" in result.output


def test_call_exits_with_child_exit_code(invoke):
    result = invoke(["call", *TESTER, "error-exit", "4", "quiet"])
    assert result.exit_code == 4


def test_check_call_reports_failure(invoke, tmp_path):
    result = invoke(["check-call", "--cwd", str(tmp_path), *TESTER, "error-exit", "42", "Sparta"])
    assert result.exit_code == 42
    assert "Error:" in result.output
    assert "error output: Sparta" in result.output
    assert str(tmp_path) in result.output


def test_check_call_success(invoke):
    result = invoke(["check-call", *TESTER, "echo", "fine"])
    assert result.exit_code == 0


def test_check_output_prints_output(invoke):
    result = invoke(["check-output", *TESTER, "echo", "Sparta"])
    assert result.exit_code == 0
    assert result.output == "Sparta\n"


def test_check_output_with_input_file(invoke, tmp_path):
    source = tmp_path / "input.txt"
    source.write_text("line from file\n")
    result = invoke(["check-output", "--input", str(source), *TESTER, "echo-input"])
    assert result.exit_code == 0
    assert result.output == "line from file\n"


def test_missing_executable_reports_error(invoke, tmp_path):
    result = invoke(["check-output", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_tester_verbs_in_process(tmp_path):
    runner = CliRunner()
    assert runner.invoke(tester_group, ["echo", "hi"]).output == "hi\n"
    assert runner.invoke(tester_group, ["echo-input"], input="typed\n").output == "typed\n"
    assert runner.invoke(tester_group, ["error-exit", "9", "bad"]).exit_code == 9
    assert runner.invoke(tester_group, ["print-args", "a", "b c"]).output == "a\nb c\n"

    target = tmp_path / "f.txt"
    assert runner.invoke(tester_group, ["output-file", str(target), "text"]).exit_code == 0
    assert target.read_text() == "text"

    flood = runner.invoke(tester_group, ["flood", "100", "--line-length", "10"])
    assert flood.exit_code == 0
    assert flood.stdout.count("x") == 90
