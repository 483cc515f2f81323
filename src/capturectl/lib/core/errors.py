# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy for capturectl.

Configuration-time mistakes (bad handler definitions) fail loudly, argument
count problems are recovered inside dispatch, and the strict process path
reports failures with the process name and exit code.
"""

from __future__ import annotations

from typing import Any


class CaptureCtlError(Exception):
    """Base exception for all capturectl errors.

    Attributes:
        message: Human readable summary.
        context: Extra details (verb, process, exit code, ...) appended to
            the formatted message.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({details})"

    def __str__(self) -> str:
        return self._format_message()


class InvalidHandlerError(CaptureCtlError):
    """A handler or parameter was declared with missing or conflicting data."""


class RegistryError(CaptureCtlError):
    """The registry was used outside its configuration phase."""


class ArgumentCountError(CaptureCtlError):
    """More tokens were supplied than the handler declares parameters."""

    def __init__(self, verb: str, expected: int, received: int) -> None:
        self.verb = verb
        self.expected = expected
        self.received = received
        super().__init__(
            "Argument count mismatch",
            context={"verb": verb, "expected": expected, "received": received},
        )


class ProcessExecutionError(CaptureCtlError):
    """A strictly executed process failed to launch or exited non-zero."""

    def __init__(
        self,
        process_name: str,
        exit_code: int | None,
        cause: OSError | None = None,
    ) -> None:
        self.process_name = process_name
        self.exit_code = exit_code
        self.cause = cause
        context: dict[str, Any] = {"process": process_name, "exit_code": exit_code}
        if cause is not None:
            context["error"] = cause
        super().__init__("Process execution failed", context=context)


class ArgumentSyntaxError(CaptureCtlError):
    """A command-line argument string could not be split into tokens."""

    def __init__(self, arguments: str, reason: str) -> None:
        self.arguments = arguments
        self.reason = reason
        super().__init__(
            "Invalid argument string", context={"arguments": arguments, "error": reason}
        )
