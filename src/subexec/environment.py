"""Environment helpers for child processes."""

from __future__ import annotations

import os


def env_with_overrides(*overrides: tuple[str, str], **named: str) -> dict[str, str]:
    """Return a copy of the current environment with overrides applied.

    Positional ``(name, value)`` pairs are applied in order, then keyword
    overrides; later values for the same name win. ``os.environ`` itself is
    never modified.

    Example:
        >>> env = env_with_overrides(("LANG", "C"), PYTHONUNBUFFERED="1")
        >>> env["LANG"], env["PYTHONUNBUFFERED"]
        ('C', '1')
    """
    env = os.environ.copy()
    for name, value in overrides:
        env[name] = value
    env.update(named)
    return env


__all__ = ["env_with_overrides"]
