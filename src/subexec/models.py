"""Invocation request and process handle models."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InvocationRequest(BaseModel):
    """Everything needed to launch and talk to one child process.

    ``None`` always means "use the fallback": no arguments, the caller's
    working directory, the caller's environment, no input, and the default
    sink of the call mode. An empty ``args`` or ``cwd`` string is not the
    same as ``None``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    executable_path: str = Field(min_length=1)
    args: str | None = None
    cwd: str | None = None
    env: dict[str, str] | None = None
    stdin: Any = None
    stdout: Any = None
    stderr: Any = None

    @field_validator("executable_path", "cwd", mode="before")
    @classmethod
    def _fspath(cls, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value


@dataclass(frozen=True)
class ProcessHandle:
    """Outcome of a finished child process."""

    exit_code: int
    pid: int
    argv: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


__all__ = ["InvocationRequest", "ProcessHandle"]
