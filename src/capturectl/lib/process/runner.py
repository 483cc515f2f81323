# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""External process execution with optional output capture.

``ProcessRunner.start`` launches a child, optionally streams its output into
the log (and echoes it to the console) while blocking until it exits, and
reports the outcome as a :class:`ProcessResult` instead of raising.

``ProcessRunner.execute`` is the strict variant: it always waits and raises
:class:`ProcessExecutionError` unless the child exits with code 0.

Neither path has a default timeout: a child that never exits blocks the
caller until a ``timeout`` is passed explicitly.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
import threading
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TextIO

from .._util.ansi import red
from ..core.config import get_elevation_prefix
from ..core.errors import ArgumentSyntaxError, ProcessExecutionError
from .streaming import LineStreamer, StreamLine, StreamName

logger = logging.getLogger(__name__)


class ProcessStatus(Enum):
    SUCCESS = "success"
    NON_ZERO_EXIT = "non_zero_exit"
    LAUNCH_FAILED = "launch_failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of a process run.

    ``exit_code`` is None when the child never produced one (launch failure,
    timeout).  ``error`` carries the OS error of a failed launch, or the
    :class:`ArgumentSyntaxError` of an argument string that could not be split.
    """

    status: ProcessStatus
    exit_code: int | None = None
    error: OSError | ArgumentSyntaxError | None = None
    pid: int | None = None

    @property
    def ok(self) -> bool:
        return self.status is ProcessStatus.SUCCESS


def split_arguments(arguments: str | Sequence[str] | None) -> list[str]:
    """Turn a command-line string (or an argv sequence) into a list.

    Raises :class:`ArgumentSyntaxError` for unbalanced quotes or a trailing
    escape.
    """
    if arguments is None:
        return []
    if isinstance(arguments, str):
        try:
            return shlex.split(arguments)
        except ValueError as exc:
            raise ArgumentSyntaxError(arguments, str(exc)) from exc
    return [str(a) for a in arguments]


class ProcessRunner:
    """Run one external executable.

    ``exit_code`` is None until :meth:`start` has recorded a result.
    """

    def __init__(
        self,
        executable_path: str | os.PathLike[str],
        *,
        stream_output: bool = True,
        elevation_prefix: Sequence[str] | None = None,
        cwd: str | os.PathLike[str] | None = None,
        env: Mapping[str, str] | None = None,
        console: TextIO | None = None,
        error_console: TextIO | None = None,
        color_enabled: bool = False,
    ) -> None:
        self.executable_path = str(executable_path)
        self.stream_output = stream_output
        self.elevation_prefix = list(elevation_prefix) if elevation_prefix is not None else None
        self.cwd = cwd
        self.env = dict(env) if env is not None else None
        self._console = console
        self._error_console = error_console
        self.color_enabled = color_enabled
        self.exit_code: int | None = None
        self.result: ProcessResult | None = None
        self.reaper: threading.Thread | None = None

    @property
    def process_name(self) -> str:
        return Path(self.executable_path).name or self.executable_path

    def build_command(
        self, arguments: str | Sequence[str] | None, use_elevated_launch: bool = False
    ) -> list[str]:
        command = [self.executable_path, *split_arguments(arguments)]
        if use_elevated_launch:
            prefix = (
                self.elevation_prefix
                if self.elevation_prefix is not None
                else get_elevation_prefix()
            )
            command = [*prefix, *command]
        return command

    def is_streaming(self, wait_for_exit: bool, use_elevated_launch: bool) -> bool:
        """Output is captured only for waited, non-elevated runs with INFO logging on."""
        return (
            self.stream_output
            and wait_for_exit
            and not use_elevated_launch
            and logger.isEnabledFor(logging.INFO)
        )

    def start(
        self,
        arguments: str | Sequence[str] | None = None,
        wait_for_exit: bool = True,
        use_elevated_launch: bool = False,
        timeout: float | None = None,
    ) -> ProcessResult:
        """Launch the executable with *arguments*.

        Args:
            arguments: Command-line string (split like a POSIX shell would)
                or an argument sequence.
            wait_for_exit: Block until the child exits and record its exit
                code.  When False, record 0 right after launch and reap the
                child on the background thread kept in ``reaper``.
            use_elevated_launch: Run behind the elevation prefix (``sudo`` by
                default) with the console inherited; disables capture.
            timeout: Seconds to wait before killing the child.  None waits
                forever.

        An argument string that cannot be split is reported as
        ``LAUNCH_FAILED`` without starting anything.
        """
        try:
            command = self.build_command(arguments, use_elevated_launch)
        except ArgumentSyntaxError as exc:
            logger.error("Could not start [%s]: %s", self.executable_path, exc)
            return self._record(ProcessResult(ProcessStatus.LAUNCH_FAILED, error=exc))
        streaming = self.is_streaming(wait_for_exit, use_elevated_launch)
        pipe = subprocess.PIPE if streaming else None

        logger.info("Start [%s] with args [%s]", self.executable_path, shlex.join(command[1:]))
        try:
            proc = subprocess.Popen(command, stdout=pipe, stderr=pipe, cwd=self.cwd, env=self.env)
        except OSError as exc:
            logger.error("Could not start [%s]: %s", self.executable_path, exc)
            return self._record(ProcessResult(ProcessStatus.LAUNCH_FAILED, error=exc))

        if not wait_for_exit:
            logger.info("Started [%s] as pid %d without waiting", self.executable_path, proc.pid)
            self.reaper = _reap_in_background(proc)
            return self._record(ProcessResult(ProcessStatus.SUCCESS, exit_code=0, pid=proc.pid))

        deadline = time.monotonic() + timeout if timeout is not None else None
        timed_out = False
        try:
            if streaming:
                with LineStreamer(proc.stdout, proc.stderr, self._on_line) as streamer:
                    try:
                        drained = streamer.drain(deadline)
                    except BaseException:
                        # Readers only stop once the child is gone.
                        _kill(proc)
                        raise
                    if not drained:
                        timed_out = True
                        _kill(proc)

            if not timed_out:
                logger.debug("Waiting for [%s] to exit", self.executable_path)
                remaining = None if deadline is None else max(deadline - time.monotonic(), 0)
                try:
                    proc.wait(timeout=remaining)
                except subprocess.TimeoutExpired:
                    timed_out = True
                    _kill(proc)
        except BaseException:
            _kill(proc)
            raise

        if timed_out:
            logger.warning("[%s] did not exit within %ss; killed", self.executable_path, timeout)
            return self._record(ProcessResult(ProcessStatus.TIMED_OUT, pid=proc.pid))

        exit_code = proc.returncode
        logger.info("[%s] exited with exit code [%d]", self.executable_path, exit_code)
        status = ProcessStatus.SUCCESS if exit_code == 0 else ProcessStatus.NON_ZERO_EXIT
        return self._record(ProcessResult(status, exit_code=exit_code, pid=proc.pid))

    @staticmethod
    def execute(
        command: Sequence[str],
        *,
        cwd: str | os.PathLike[str] | None = None,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        """Run *command* to completion and raise unless it exits with 0.

        The child inherits the console; nothing is captured.
        """
        if not command:
            raise ValueError("command must not be empty")
        name = str(command[0])
        logger.info("Start process [%s]", name)
        logger.debug("The command detail is: %s", shlex.join(str(c) for c in command[1:]))

        try:
            completed = subprocess.run(
                [str(c) for c in command],
                cwd=cwd,
                env=dict(env) if env is not None else None,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            logger.error("Process [%s] timed out after %ss", name, timeout)
            raise ProcessExecutionError(name, None) from exc
        except OSError as exc:
            logger.error("Could not start process [%s]: %s", name, exc)
            raise ProcessExecutionError(name, None, cause=exc) from exc

        if completed.returncode != 0:
            logger.error("Process [%s] failed with exit code %d", name, completed.returncode)
            raise ProcessExecutionError(name, completed.returncode)
        return ProcessResult(ProcessStatus.SUCCESS, exit_code=0)

    def _record(self, result: ProcessResult) -> ProcessResult:
        self.result = result
        self.exit_code = result.exit_code
        return result

    def _on_line(self, line: StreamLine) -> None:
        if not line.text.strip():
            return
        logger.debug(line.text)
        if line.stream is StreamName.STDERR:
            out = self._error_console if self._error_console is not None else sys.stderr
            print(red(line.text, self.color_enabled), file=out, flush=True)
        else:
            out = self._console if self._console is not None else sys.stdout
            print(line.text, file=out, flush=True)


def _kill(proc: subprocess.Popen) -> None:
    if proc.poll() is None:
        proc.kill()
        proc.wait()


def _reap_in_background(proc: subprocess.Popen) -> threading.Thread:
    """Wait for *proc* on a daemon thread so the child never lingers as a zombie."""

    def reap() -> None:
        exit_code = proc.wait()
        logger.info("Detached pid %d exited with exit code [%d]", proc.pid, exit_code)

    thread = threading.Thread(target=reap, name=f"capturectl-reap-{proc.pid}", daemon=True)
    thread.start()
    return thread
