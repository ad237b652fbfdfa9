"""Errors raised by the execution engine."""

from __future__ import annotations

import os


def _arguments_part(args: str | None) -> str:
    if args is None:
        return "without args"
    return f"with arguments '{args}'"


def format_failure(
    executable_path: str,
    args: str | None,
    cwd: str | None,
    error_output: str,
    exit_code: int,
) -> str:
    """Render the message of an :class:`ExecutionError`."""
    working_dir = cwd if cwd is not None else os.getcwd()
    return (
        f"Command '{executable_path}' "
        f"{_arguments_part(args)}"
        f" at working dir '{working_dir}'"
        f" failed with error code '{exit_code}'"
        f" and error output: {error_output}"
    )


class ExecutionError(Exception):
    """A process ran to completion and exited with a non-zero code.

    Raised only by ``check_call`` and ``check_output``. Failures to start a
    process surface as the platform's ``OSError`` instead.

    Attributes:
        executable_path: Path of the executable that was invoked
        arguments: Argument string, or None if invoked without arguments
            (named so it does not shadow ``BaseException.args``)
        cwd: Working directory, or None if the caller's was used
        error_output: Everything the process wrote to stderr
        exit_code: The non-zero exit code
    """

    def __init__(
        self,
        executable_path: str,
        args: str | None,
        cwd: str | None,
        error_output: str,
        exit_code: int,
    ):
        super().__init__(
            format_failure(executable_path, args, cwd, error_output, exit_code)
        )
        self._executable_path = executable_path
        self._args = args
        self._cwd = cwd
        self._error_output = error_output
        self._exit_code = exit_code

    @property
    def executable_path(self) -> str:
        return self._executable_path

    @property
    def arguments(self) -> str | None:
        return self._args

    @property
    def cwd(self) -> str | None:
        return self._cwd

    @property
    def error_output(self) -> str:
        return self._error_output

    @property
    def exit_code(self) -> int:
        return self._exit_code

    def __reduce__(self):
        return (
            type(self),
            (
                self._executable_path,
                self._args,
                self._cwd,
                self._error_output,
                self._exit_code,
            ),
        )


__all__ = ["ExecutionError", "format_failure"]
