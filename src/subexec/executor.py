"""Execution engine.

Runs executables in one of four modes, named after Python's own
``subprocess`` API:

- ``run``: forwards output to this process's stdout/stderr (or given sinks)
- ``call``: suppresses all output
- ``check_call``: suppresses stdout, raises ExecutionError on failure
- ``check_output``: captures stdout and returns it, raises on failure

``run`` and ``call`` never raise on a non-zero exit code; inspect
``ProcessHandle.exit_code`` instead.
"""

from __future__ import annotations

import io
import logging
import os
import sys
from collections.abc import Mapping
from typing import Any, TextIO

from .config import Settings, resolve_settings
from .errors import ExecutionError
from .models import InvocationRequest, ProcessHandle
from .process_utils import prepare
from .streams import NullSink, StreamCoordinator, as_source

logger = logging.getLogger(__name__)

PathArg = str | os.PathLike[str]
InputSource = TextIO | str


def _execute(
    request: InvocationRequest,
    stdout: Any,
    stderr: Any,
    settings: Settings | None = None,
) -> ProcessHandle:
    """Launch the child, drain its pipes, and wait for it to exit."""
    settings = settings or resolve_settings()
    prepared = prepare(request, encoding=settings.encoding)
    source = as_source(request.stdin)

    with prepared.start() as process:
        coordinator = StreamCoordinator(
            process,
            stdout=stdout,
            stderr=stderr,
            stdin=source,
            chunk_size=settings.chunk_size,
        ).start()
        exit_code = process.wait()
        coordinator.join()

    logger.debug("Process %s exited with code %d", prepared.argv, exit_code)
    return ProcessHandle(exit_code=exit_code, pid=process.pid, argv=prepared.argv)


def assert_success(request: InvocationRequest, error_output: str, exit_code: int) -> None:
    """Raise ExecutionError if ``exit_code`` is non-zero."""
    if exit_code != 0:
        raise ExecutionError(
            request.executable_path,
            request.args,
            request.cwd,
            error_output,
            exit_code,
        )


def _request(
    executable_path: PathArg,
    args: str | None,
    cwd: PathArg | None,
    env: Mapping[str, str] | None,
    stdin: InputSource | None,
    stdout: Any = None,
    stderr: Any = None,
) -> InvocationRequest:
    return InvocationRequest(
        executable_path=executable_path,
        args=args,
        cwd=cwd,
        env=dict(env) if env is not None else None,
        stdin=stdin,
        stdout=stdout,
        stderr=stderr,
    )


def run(
    executable_path: PathArg,
    args: str | None = None,
    cwd: PathArg | None = None,
    env: Mapping[str, str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    stdin: InputSource | None = None,
) -> ProcessHandle:
    """Run an executable and wait for it to finish.

    Args:
        executable_path: Path of the executable to run
        args: Argument string (see ``quote``); None runs without arguments
        cwd: Working directory; None uses the current one
        env: Complete environment for the child; None inherits ours
        stdout: Sink for the child's stdout (default: ``sys.stdout``)
        stderr: Sink for the child's stderr (default: ``sys.stderr``)
        stdin: Text stream or string fed to the child's stdin

    Returns:
        ProcessHandle with the exit code. A non-zero exit code does not
        raise.

    Raises:
        OSError: If the executable cannot be started
    """
    request = _request(executable_path, args, cwd, env, stdin, stdout, stderr)
    return _execute(
        request,
        stdout=request.stdout if request.stdout is not None else sys.stdout,
        stderr=request.stderr if request.stderr is not None else sys.stderr,
    )


def call(
    executable_path: PathArg,
    args: str | None = None,
    cwd: PathArg | None = None,
    env: Mapping[str, str] | None = None,
    stdin: InputSource | None = None,
) -> ProcessHandle:
    """Run an executable with all of its output suppressed."""
    request = _request(executable_path, args, cwd, env, stdin)
    return _execute(request, stdout=NullSink(), stderr=NullSink())


def check_call(
    executable_path: PathArg,
    args: str | None = None,
    cwd: PathArg | None = None,
    env: Mapping[str, str] | None = None,
    stdin: InputSource | None = None,
) -> ProcessHandle:
    """Run an executable, suppress its stdout, and require exit code 0.

    Raises:
        ExecutionError: If the process exits with a non-zero code; the
            error carries everything the process wrote to stderr
        OSError: If the executable cannot be started
    """
    request = _request(executable_path, args, cwd, env, stdin)
    error_output = io.StringIO()
    handle = _execute(request, stdout=NullSink(), stderr=error_output)
    assert_success(request, error_output.getvalue(), handle.exit_code)
    return handle


def check_output(
    executable_path: PathArg,
    args: str | None = None,
    cwd: PathArg | None = None,
    env: Mapping[str, str] | None = None,
    stdin: InputSource | None = None,
) -> str:
    """Run an executable and return everything it wrote to stdout.

    Raises:
        ExecutionError: If the process exits with a non-zero code
        OSError: If the executable cannot be started
    """
    request = _request(executable_path, args, cwd, env, stdin)
    output = io.StringIO()
    error_output = io.StringIO()
    handle = _execute(request, stdout=output, stderr=error_output)
    assert_success(request, error_output.getvalue(), handle.exit_code)
    return output.getvalue()


__all__ = ["assert_success", "call", "check_call", "check_output", "run"]
