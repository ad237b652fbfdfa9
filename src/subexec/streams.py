"""Concurrent draining of child process pipes.

Each output pipe gets its own reader thread and, when the caller supplies
input, a third thread pumps it into the child's stdin. The calling thread
never reads a pipe itself, so a child that fills both pipe buffers while
blocked on stdin cannot deadlock the caller.
"""

from __future__ import annotations

import io
import logging
import subprocess
import threading
from typing import IO, Any, Callable, TextIO

from .config import DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)


class NullSink:
    """Text sink that discards everything written to it."""

    def write(self, text: str) -> int:
        return len(text)

    def flush(self) -> None:
        pass


def as_source(stdin: Any) -> TextIO | None:
    """Accept a text stream or a plain string as an input source."""
    if stdin is None or hasattr(stdin, "read"):
        return stdin
    if isinstance(stdin, str):
        return io.StringIO(stdin)
    raise TypeError(f"stdin must be a readable text stream or str, got {type(stdin).__name__}")


class _Worker(threading.Thread):
    """Daemon thread that remembers the exception its target raised."""

    def __init__(self, name: str, target: Callable[[], None]):
        super().__init__(name=name, daemon=True)
        self._work = target
        self.error: BaseException | None = None

    def run(self) -> None:
        try:
            self._work()
        except BaseException as exc:  # noqa: BLE001 - re-raised by join()
            self.error = exc


def drain_lines(pipe: IO[str], sink: Any) -> None:
    """Forward every line of ``pipe`` to ``sink`` until end of file.

    Lines keep their terminators, so the sink receives exactly the text the
    child wrote. If the sink fails, the rest of the pipe is still read (and
    discarded) so the child never blocks on a full buffer; the sink's error
    is raised once the pipe is exhausted.
    """
    error: Exception | None = None
    try:
        for line in iter(pipe.readline, ""):
            if error is not None:
                continue
            try:
                sink.write(line)
            except Exception as exc:
                error = exc
    finally:
        pipe.close()
    if error is not None:
        raise error
    flush = getattr(sink, "flush", None)
    if flush is not None:
        flush()


def pump_input(source: TextIO, pipe: IO[str], chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
    """Copy ``source`` into ``pipe`` in chunks, then close ``pipe``.

    A child that exits or closes its stdin before consuming everything ends
    the pump quietly.
    """
    try:
        while True:
            chunk = source.read(chunk_size)
            if not chunk:
                break
            pipe.write(chunk)
            pipe.flush()
    except BrokenPipeError:
        logger.debug("Child closed stdin before all input was written")
    finally:
        try:
            pipe.close()
        except BrokenPipeError:
            pass


class StreamCoordinator:
    """Drains stdout and stderr of a started child and feeds its stdin.

    Start it immediately after the child starts; anything the child writes
    before that waits in the OS pipe buffers.
    """

    def __init__(
        self,
        process: subprocess.Popen,
        stdout: Any,
        stderr: Any,
        stdin: TextIO | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.process = process
        self._workers: list[_Worker] = []
        self._stdout = stdout
        self._stderr = stderr
        self._stdin = stdin
        self._chunk_size = chunk_size

    def start(self) -> "StreamCoordinator":
        process = self.process
        self._spawn("stdout-drain", lambda: drain_lines(process.stdout, self._stdout))
        self._spawn("stderr-drain", lambda: drain_lines(process.stderr, self._stderr))

        if self._stdin is not None:
            source = self._stdin
            self._spawn(
                "stdin-pump",
                lambda: pump_input(source, process.stdin, self._chunk_size),
            )
        elif process.stdin is not None:
            process.stdin.close()
        return self

    def _spawn(self, name: str, target: Callable[[], None]) -> None:
        worker = _Worker(f"{name}-{self.process.pid}", target)
        self._workers.append(worker)
        worker.start()

    def join(self) -> None:
        """Wait for every worker and re-raise the first failure."""
        for worker in self._workers:
            worker.join()
        for worker in self._workers:
            if worker.error is not None:
                raise worker.error


__all__ = ["NullSink", "StreamCoordinator", "as_source", "drain_lines", "pump_input"]
