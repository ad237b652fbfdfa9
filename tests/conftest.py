"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from subexec import quote
from subexec.cli import cli

SRC_DIR = Path(__file__).resolve().parent.parent / "src"


@pytest.fixture(scope="session", autouse=True)
def child_pythonpath():
    """Make ``subexec`` importable in child interpreters.

    Tests launch ``python -m subexec.tester`` (and ``python -m subexec``) in
    arbitrary working directories, so the source tree is prepended to
    PYTHONPATH for the whole session and the original value restored after.
    """
    original = os.environ.get("PYTHONPATH")
    src = str(SRC_DIR)
    if original:
        if src not in original.split(os.pathsep):
            os.environ["PYTHONPATH"] = src + os.pathsep + original
    else:
        os.environ["PYTHONPATH"] = src

    yield

    if original is None:
        os.environ.pop("PYTHONPATH", None)
    else:
        os.environ["PYTHONPATH"] = original


class Tester:
    """Invokes the tester program through the current interpreter."""

    path = sys.executable

    def args(self, *tokens):
        """Argument string running the tester with ``tokens``."""
        return quote(["-m", "subexec.tester", *tokens])


class SubexecCli:
    """Invokes the subexec CLI through the current interpreter."""

    path = sys.executable

    def args(self, *tokens):
        return quote(["-m", "subexec", *tokens])


@pytest.fixture
def tester():
    """The tester program: ``tester.path`` plus ``tester.args(...)``."""
    return Tester()


@pytest.fixture
def subexec_cli():
    """The subexec CLI as an external program."""
    return SubexecCli()


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional input.

    Usage:
        result = invoke(["quote", "a b", "c"])
        result = invoke(["run", sys.executable, "-c", "print(1)"])
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke
