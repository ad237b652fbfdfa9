"""Runtime settings resolved from the environment."""

import os
from dataclasses import dataclass

DEFAULT_ENCODING = "utf-8"
DEFAULT_CHUNK_SIZE = 4096
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Settings used by the execution engine and the CLI."""

    encoding: str = DEFAULT_ENCODING
    chunk_size: int = DEFAULT_CHUNK_SIZE
    log_level: str = DEFAULT_LOG_LEVEL


def _parse_chunk_size(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(
            f"SUBEXEC_CHUNK_SIZE must be an integer, got {raw!r}"
        ) from None
    if value <= 0:
        raise ValueError(f"SUBEXEC_CHUNK_SIZE must be positive, got {value}")
    return value


def resolve_settings(log_level: str | None = None) -> Settings:
    """Resolve settings.

    Resolution order for each setting:
    1. Explicit argument (only ``log_level``, from the --log-level flag)
    2. $SUBEXEC_* environment variable
    3. Built-in default

    Reads fresh from the environment each time so tests and callers can
    change variables between invocations.

    Raises:
        ValueError: If $SUBEXEC_CHUNK_SIZE is not a positive integer
    """
    encoding = os.environ.get("SUBEXEC_ENCODING") or DEFAULT_ENCODING

    raw_chunk = os.environ.get("SUBEXEC_CHUNK_SIZE")
    chunk_size = _parse_chunk_size(raw_chunk) if raw_chunk else DEFAULT_CHUNK_SIZE

    level = log_level or os.environ.get("SUBEXEC_LOG_LEVEL") or DEFAULT_LOG_LEVEL

    return Settings(encoding=encoding, chunk_size=chunk_size, log_level=level.upper())
