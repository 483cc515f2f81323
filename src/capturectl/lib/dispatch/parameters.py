# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Positional parameter slots and their fluent builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.errors import InvalidHandlerError

if TYPE_CHECKING:
    from .handlers import CommandHandlerBuilder


@dataclass
class Parameter:
    """A named positional argument slot declared by a handler.

    ``value`` is rewritten each time the owning handler is dispatched;
    ``None`` means no token was supplied for this position.
    """

    name: str | None = None
    description: str | None = None
    value: str | None = None

    def __str__(self) -> str:
        return f"{self.name}: {self.description}"


class ParameterBuilder:
    """Fluent configuration of a single :class:`Parameter`.

    Obtained from :meth:`CommandHandlerBuilder.with_param`; ``base()`` hands
    control back to the handler builder::

        registry.register_handler()
            .match("rp", run_process)
            .with_param().match("pth").description("Full path").base()
            .with_param().match("arg")
    """

    def __init__(self, owner: CommandHandlerBuilder, parameter: Parameter) -> None:
        self._owner = owner
        self.parameter = parameter

    def match(self, name: str) -> ParameterBuilder:
        """Set the parameter name (non-empty, unique within the handler)."""
        if not name or not name.strip():
            raise InvalidHandlerError(
                "Invalid handler definition: parameter name must not be empty",
                context={"verb": self._owner.handler.verb},
            )
        for other in self._owner.handler.parameters:
            if other is not self.parameter and other.name == name:
                raise InvalidHandlerError(
                    "Invalid handler definition: duplicate parameter name",
                    context={"verb": self._owner.handler.verb, "parameter": name},
                )
        self.parameter.name = name
        return self

    def description(self, text: str) -> ParameterBuilder:
        self.parameter.description = text
        return self

    def base(self) -> CommandHandlerBuilder:
        return self._owner

    def get_help(self) -> str:
        return str(self.parameter)
