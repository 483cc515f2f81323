# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Handler registry and the verb dispatch state machine.

A registry is created once by the program entry point, populated through
:meth:`CommandRegistry.register_handler`, then used to dispatch the real
argument vector::

    registry = CommandRegistry()
    registry.register_handler().match("rp", run_process).description("Run process.")
    registry.dispatch(sys.argv[1:])

Dispatch ends in exactly one of three states:

- ``DISPATCHED``: a handler matched, all conditions passed, callback invoked.
- ``REJECTED``: a handler matched but a condition (or the argument count)
  failed; the message and the handler's help were printed.
- ``NO_MATCH``: no verb given or unknown verb; banner and full help printed.

Dispatch is not reentrant: parameter values live on the registered handlers
and are overwritten on every call.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from .._util.ansi import red, yellow
from .._util.banner import render_banner
from ..core.config import DEFAULT_BANNER
from ..core.errors import ArgumentCountError, InvalidHandlerError, RegistryError
from .handlers import CommandHandler, CommandHandlerBuilder
from .parameters import Parameter

logger = logging.getLogger(__name__)

HELP_VERB = "h"
HELP_HEADER = "HELP ----------------------------------------------------"
HELP_FOOTER = "|__"


class DispatchState(Enum):
    DISPATCHED = "dispatched"
    REJECTED = "rejected"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a single :meth:`CommandRegistry.dispatch` call."""

    state: DispatchState
    verb: str | None = None
    message: str | None = None
    callback_result: bool | None = None


class CommandRegistry:
    """Ordered collection of command handlers plus the dispatch algorithm."""

    def __init__(
        self,
        *,
        out: TextIO | None = None,
        color_enabled: bool = False,
        banner: str | None = None,
        font: str | None = None,
    ) -> None:
        self._handlers: list[CommandHandlerBuilder] = []
        self._sealed = False
        self._out = out
        self.color_enabled = color_enabled
        self.banner = banner or DEFAULT_BANNER
        self.font = font

        self.register_handler().match(HELP_VERB, self._help_callback).description("Show help.")

    @property
    def out(self) -> TextIO:
        # Resolved lazily so redirected/captured stdout is honoured.
        return self._out if self._out is not None else sys.stdout

    @property
    def handlers(self) -> list[CommandHandler]:
        return [builder.handler for builder in self._handlers]

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register_handler(self) -> CommandHandlerBuilder:
        """Create, store and return a new handler builder."""
        if self._sealed:
            raise RegistryError("Cannot register handlers after dispatch has started")
        builder = CommandHandlerBuilder()
        self._handlers.append(builder)
        return builder

    def seal(self) -> None:
        """Validate every handler and close the configuration phase.

        Raises :class:`InvalidHandlerError` for incomplete definitions.  Called
        automatically by the first :meth:`dispatch`.
        """
        if self._sealed:
            return
        seen: set[str | None] = set()
        for handler in self.handlers:
            handler.validate()
            if handler.verb in seen:
                logger.warning(
                    "Verb '-%s' is registered more than once; the first handler wins",
                    handler.verb,
                )
            seen.add(handler.verb)
        self._sealed = True

    def find(self, verb: str) -> CommandHandler | None:
        """Return the first registered handler whose verb equals *verb*."""
        for handler in self.handlers:
            if handler.verb == verb:
                return handler
        return None

    def dispatch(self, args: Sequence[str]) -> DispatchResult:
        """Select a handler from ``args[0]`` and run it with ``args[1:]``."""
        self.seal()

        if not args:
            logger.debug("No verb supplied")
            return self._no_match(None)

        verb = args[0].lstrip("-")
        handler = self.find(verb)
        if handler is None:
            logger.info("Unknown verb '%s'", args[0])
            return self._no_match(verb)

        try:
            params = handler.bind(args[1:])
        except ArgumentCountError as exc:
            message = (
                f"Argument count mismatch: -{verb} takes at most "
                f"{exc.expected} argument(s), got {exc.received}."
            )
            return self._reject(handler, message)

        failed = handler.first_failed_condition()
        if failed is not None:
            return self._reject(handler, failed.message)

        logger.info("Dispatching '-%s' with %d argument(s)", verb, len(args) - 1)
        callback = handler.callback
        if callback is None:
            raise InvalidHandlerError(
                "Invalid handler definition: no callback", context={"verb": verb}
            )
        result = callback(params)
        return DispatchResult(DispatchState.DISPATCHED, verb=verb, callback_result=result)

    def render_help(self) -> str:
        """Return the full help listing: banner, header, handler blocks, footer."""
        c = self.color_enabled
        parts = [render_banner(self.banner, c, self.font), yellow(HELP_HEADER, c) + "\n"]
        parts.extend(builder.render_help(c) for builder in self._handlers)
        parts.append(yellow(HELP_FOOTER, c) + "\n")
        return "".join(parts)

    def write_help(self) -> None:
        self.out.write(self.render_help())

    def _help_callback(self, params: list[Parameter]) -> bool:
        self.write_help()
        return True

    def _reject(self, handler: CommandHandler, message: str) -> DispatchResult:
        logger.info("Rejected '-%s': %s", handler.verb, message)
        self.out.write(red(message, self.color_enabled) + "\n")
        self.out.write(handler.render_help(self.color_enabled))
        return DispatchResult(DispatchState.REJECTED, verb=handler.verb, message=message)

    def _no_match(self, verb: str | None) -> DispatchResult:
        self.write_help()
        return DispatchResult(DispatchState.NO_MATCH, verb=verb)
