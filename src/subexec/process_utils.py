"""Process launching.

Builds a description of the child process from an invocation request and
starts it. Lives apart from the executor so the description can be
inspected in tests without launching anything.
"""

from __future__ import annotations

import io
import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Any

from .config import DEFAULT_ENCODING
from .models import InvocationRequest
from .quoting import quote, split_args

logger = logging.getLogger(__name__)

_IS_WINDOWS = sys.platform == "win32"


@dataclass(frozen=True)
class PreparedProcess:
    """An unstarted child process.

    ``argv`` is the argument vector the child receives. On Windows the
    command line is passed to the OS instead, so the argument string reaches
    the child verbatim.
    """

    argv: list[str]
    command_line: str | None
    cwd: str | None
    env: dict[str, str] | None
    encoding: str = DEFAULT_ENCODING
    creationflags: int = 0

    def popen_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``subprocess.Popen``: binary pipes, no shell."""
        return {
            "stdin": subprocess.PIPE,
            "stdout": subprocess.PIPE,
            "stderr": subprocess.PIPE,
            "cwd": self.cwd,
            "env": self.env,
            "shell": False,
            "creationflags": self.creationflags,
        }

    def start(self) -> subprocess.Popen:
        """Start the child.

        Raises:
            OSError: If the executable cannot be started (missing,
                not executable, bad working directory)
        """
        command: Any = self.command_line if self.command_line is not None else self.argv
        logger.debug("Starting %s (cwd=%s)", self.argv, self.cwd or os.getcwd())
        process = subprocess.Popen(command, **self.popen_kwargs())  # noqa: S603
        self.wrap_pipes(process)
        return process

    def wrap_pipes(self, process: subprocess.Popen) -> None:
        r"""Replace the binary pipes of ``process`` with text wrappers.

        ``newline=""`` disables newline translation in both directions, so
        sinks see ``\r\n`` and lone ``\r`` exactly as the child wrote them.
        Undecodable output is replaced rather than aborting the drain.
        """
        if process.stdout is not None:
            process.stdout = io.TextIOWrapper(
                process.stdout, encoding=self.encoding, errors="replace", newline=""
            )
        if process.stderr is not None:
            process.stderr = io.TextIOWrapper(
                process.stderr, encoding=self.encoding, errors="replace", newline=""
            )
        if process.stdin is not None:
            process.stdin = io.TextIOWrapper(
                process.stdin, encoding=self.encoding, newline="", write_through=True
            )


def _normalize_executable(path: str) -> str:
    """Validate the executable path before it reaches the OS."""
    if not path.strip():
        msg = "Executable path cannot be empty or whitespace"
        raise ValueError(msg)
    return path


def prepare(request: InvocationRequest, encoding: str = DEFAULT_ENCODING) -> PreparedProcess:
    """Describe the child process for ``request`` without starting it.

    ``request.env`` replaces the inherited environment entirely when given;
    ``request.cwd`` defaults to the caller's working directory.
    """
    executable = _normalize_executable(request.executable_path)
    tokens = split_args(request.args) if request.args else []
    argv = [executable, *tokens]

    command_line = None
    creationflags = 0
    if _IS_WINDOWS:
        command_line = quote([executable])
        if request.args:
            command_line = f"{command_line} {request.args}"
        creationflags = subprocess.CREATE_NO_WINDOW

    return PreparedProcess(
        argv=argv,
        command_line=command_line,
        cwd=request.cwd,
        env=dict(request.env) if request.env is not None else None,
        encoding=encoding,
        creationflags=creationflags,
    )


__all__ = ["PreparedProcess", "prepare"]
