# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Line streaming from a child process's stdout/stderr.

One reader thread per pipe pushes decoded lines into a shared bounded queue;
the thread that started the process drains the queue and hands each line
to a sink.  Readers must start right after the child is launched, otherwise
a chatty child can block on a full pipe buffer.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import IO

logger = logging.getLogger(__name__)

QUEUE_SIZE = 1024
JOIN_TIMEOUT = 5.0


class StreamName(Enum):
    STDOUT = "stdout"
    STDERR = "stderr"


@dataclass(frozen=True)
class StreamLine:
    stream: StreamName
    text: str


# Marker put on the queue by a reader once its pipe reaches EOF.
_EOF = object()

LineSink = Callable[[StreamLine], None]


def _read_pipe(pipe: IO[bytes], stream: StreamName, lines: queue.Queue) -> None:
    """Reader thread body: decode *pipe* line by line into *lines*."""
    try:
        for raw_line in iter(pipe.readline, b""):
            text = raw_line.decode("utf-8", errors="replace").rstrip("\r\n")
            lines.put(StreamLine(stream, text))
    except (OSError, ValueError) as exc:
        # ValueError: pipe closed underneath us during shutdown.
        logger.debug("%s reader stopped: %s", stream.value, exc)
    finally:
        lines.put(_EOF)


class LineStreamer:
    """Drain the stdout/stderr pipes of a running child into *sink*.

    Usage::

        with LineStreamer(proc.stdout, proc.stderr, sink) as streamer:
            streamer.drain(deadline)

    Leaving the ``with`` block joins the reader threads and closes the pipes,
    also when draining raised.
    """

    def __init__(
        self,
        stdout: IO[bytes] | None,
        stderr: IO[bytes] | None,
        sink: LineSink,
        maxsize: int = QUEUE_SIZE,
    ) -> None:
        self._sink = sink
        self._lines: queue.Queue = queue.Queue(maxsize=maxsize)
        self._pipes = [p for p in (stdout, stderr) if p is not None]
        self._threads: list[threading.Thread] = []
        for pipe, stream in ((stdout, StreamName.STDOUT), (stderr, StreamName.STDERR)):
            if pipe is None:
                continue
            self._threads.append(
                threading.Thread(
                    target=_read_pipe,
                    args=(pipe, stream, self._lines),
                    name=f"capturectl-{stream.value}-reader",
                    daemon=True,
                )
            )
        self._open = len(self._threads)

    def __enter__(self) -> LineStreamer:
        for thread in self._threads:
            thread.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def drain(self, deadline: float | None = None) -> bool:
        """Forward lines to the sink until every reader hit EOF.

        *deadline* is a ``time.monotonic()`` value; returns False if it passed
        before both pipes were exhausted, True otherwise.
        """
        while self._open:
            timeout = None
            if deadline is not None:
                timeout = deadline - time.monotonic()
                if timeout <= 0:
                    return False
            try:
                item = self._lines.get(timeout=timeout)
            except queue.Empty:
                return False
            if item is _EOF:
                self._open -= 1
                continue
            self._sink(item)
        return True

    def close(self, join_timeout: float = JOIN_TIMEOUT) -> None:
        """Wait for the reader threads to finish, then close the pipes.

        A reader can only outlive *join_timeout* when something else (a
        grandchild) still holds the pipe open; its pipe is left to the
        daemon thread.
        """
        give_up = time.monotonic() + join_timeout
        for thread in self._threads:
            while thread.is_alive() and time.monotonic() < give_up:
                # Keep the queue moving so a reader blocked on put() can exit.
                try:
                    self._lines.get_nowait()
                except queue.Empty:
                    pass
                thread.join(timeout=0.05)
        if any(thread.is_alive() for thread in self._threads):
            logger.warning("Output reader still running after %.1fs; detaching it", join_timeout)
            return
        for pipe in self._pipes:
            try:
                pipe.close()
            except OSError:
                pass
