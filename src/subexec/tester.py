"""Tester program the engine is exercised against.

Run with ``python -m subexec.tester VERB ...``. Every verb does one
observable thing with stdout, stderr, stdin, a file, or its exit code.
"""

import os
import sys
from pathlib import Path

import click


@click.group()
def tester():
    """Black-box program used by the subexec tests."""


@tester.command()
@click.argument("text")
def echo(text):
    """Print TEXT to stdout."""
    click.echo(text)


@tester.command("echo-input")
def echo_input():
    """Read one line from stdin and print it to stdout."""
    line = sys.stdin.readline()
    click.echo(line.rstrip("\n"))


@tester.command("error-exit")
@click.argument("exit_code", type=click.IntRange(0, 255))
@click.argument("error_text", default="")
def error_exit(exit_code, error_text):
    """Print ERROR_TEXT to stderr and exit with EXIT_CODE."""
    click.echo(error_text, err=True)
    sys.exit(exit_code)


@tester.command("output-file")
@click.argument("file", type=click.Path(dir_okay=False))
@click.argument("text", default="")
def output_file(file, text):
    """Write TEXT into FILE."""
    Path(file).write_text(text, encoding="utf-8")


@tester.command("envvar-to-file")
@click.argument("file", type=click.Path(dir_okay=False))
@click.argument("name", default="")
def envvar_to_file(file, name):
    """Write the value of environment variable NAME into FILE."""
    Path(file).write_text(os.environ.get(name, ""), encoding="utf-8")


@tester.command(
    "print-args", context_settings=dict(ignore_unknown_options=True)
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def print_args(args):
    """Print every received argument on its own line."""
    for arg in args:
        click.echo(arg)


@tester.command()
@click.argument("size", type=click.IntRange(min=1))
@click.option("--line-length", default=79, show_default=True, type=click.IntRange(min=1))
def flood(size, line_length):
    """Write SIZE characters to both stdout and stderr, interleaved."""
    line = "x" * (line_length - 1) + "\n"
    written = 0
    while written < size:
        chunk = line[: size - written]
        sys.stdout.write(chunk)
        sys.stderr.write(chunk)
        written += len(chunk)
    sys.stdout.flush()
    sys.stderr.flush()


def main():
    """Entry point for the tester program."""
    tester()


if __name__ == "__main__":
    main()
