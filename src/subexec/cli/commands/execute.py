"""Execution commands - run, call, check-call, check-output."""

import sys

import click

from ...environment import env_with_overrides
from ...errors import ExecutionError
from ...executor import call as exec_call
from ...executor import check_call as exec_check_call
from ...executor import check_output as exec_check_output
from ...executor import run as exec_run
from ...quoting import quote

# Options must precede EXECUTABLE; everything after it belongs to the child.
_COMMAND_SETTINGS = dict(ignore_unknown_options=True, allow_interspersed_args=False)


def _parse_env(pairs):
    overrides = []
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(
                f"expected NAME=VALUE, got {pair!r}", param_hint="--env"
            )
        overrides.append((name, value))
    return env_with_overrides(*overrides) if overrides else None


def invocation_options(func):
    """Arguments and options shared by every execution command."""
    func = click.argument("arguments", nargs=-1, type=click.UNPROCESSED)(func)
    func = click.argument("executable")(func)
    func = click.option(
        "--input",
        "input_file",
        type=click.File("r"),
        help="File fed to the process's stdin ('-' for this process's stdin)",
    )(func)
    func = click.option(
        "--env",
        "env_pairs",
        multiple=True,
        metavar="NAME=VALUE",
        help="Environment override (repeatable)",
    )(func)
    func = click.option(
        "--cwd", type=click.Path(file_okay=False), help="Working directory"
    )(func)
    return func


def _fail(e):
    click.echo(f"Error: {e}", err=True)
    if isinstance(e, ExecutionError):
        sys.exit(e.exit_code)
    sys.exit(1)


@click.command(context_settings=_COMMAND_SETTINGS)
@invocation_options
def run(executable, arguments, cwd, env_pairs, input_file):
    """Run EXECUTABLE with ARGUMENTS, forwarding its output.

    Exits with the exit code of the process.

    Examples:
        subexec run git status
        subexec run --cwd /tmp --env LANG=C ls -la
    """
    env = _parse_env(env_pairs)
    try:
        handle = exec_run(
            executable,
            quote(arguments) if arguments else None,
            cwd=cwd,
            env=env,
            stdin=input_file,
        )
    except (OSError, ValueError) as e:
        _fail(e)
    sys.exit(handle.exit_code)


@click.command(context_settings=_COMMAND_SETTINGS)
@invocation_options
def call(executable, arguments, cwd, env_pairs, input_file):
    """Run EXECUTABLE with ARGUMENTS, suppressing all output.

    Exits with the exit code of the process.
    """
    env = _parse_env(env_pairs)
    try:
        handle = exec_call(
            executable,
            quote(arguments) if arguments else None,
            cwd=cwd,
            env=env,
            stdin=input_file,
        )
    except (OSError, ValueError) as e:
        _fail(e)
    sys.exit(handle.exit_code)


@click.command("check-call", context_settings=_COMMAND_SETTINGS)
@invocation_options
def check_call(executable, arguments, cwd, env_pairs, input_file):
    """Run EXECUTABLE and fail with its error output if it fails."""
    env = _parse_env(env_pairs)
    try:
        exec_check_call(
            executable,
            quote(arguments) if arguments else None,
            cwd=cwd,
            env=env,
            stdin=input_file,
        )
    except (ExecutionError, OSError, ValueError) as e:
        _fail(e)


@click.command("check-output", context_settings=_COMMAND_SETTINGS)
@invocation_options
def check_output(executable, arguments, cwd, env_pairs, input_file):
    """Run EXECUTABLE and print its captured output once it succeeds."""
    env = _parse_env(env_pairs)
    try:
        output = exec_check_output(
            executable,
            quote(arguments) if arguments else None,
            cwd=cwd,
            env=env,
            stdin=input_file,
        )
    except (ExecutionError, OSError, ValueError) as e:
        _fail(e)
    click.echo(output, nl=False)
