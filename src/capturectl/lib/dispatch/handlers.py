# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Command handlers: declaration, argument binding and help rendering."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from .._util.ansi import gray, green, white, yellow
from ..core.errors import ArgumentCountError, InvalidHandlerError
from .parameters import Parameter, ParameterBuilder

Predicate = Callable[[list[Parameter]], bool]
Callback = Callable[[list[Parameter]], bool]

GROUP_CHAR = "|"
CHILD_SPACE = "     "
NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class Condition:
    """A precondition over the bound parameters and its failure message."""

    predicate: Predicate
    message: str


@dataclass
class CommandHandler:
    """A registered verb with its parameters, conditions and callback."""

    verb: str | None = None
    description: str | None = None
    example: str | None = None
    callback: Callback | None = None
    parameters: list[Parameter] = field(default_factory=list)
    conditions: list[Condition] = field(default_factory=list)

    @property
    def hidden(self) -> bool:
        """Handlers without a description are left out of the help listing."""
        return not (self.description and self.description.strip())

    def bind(self, tokens: Sequence[str]) -> list[Parameter]:
        """Assign *tokens* positionally to the declared parameters.

        Parameters without a matching token are reset to ``None``.  Surplus
        tokens raise :class:`ArgumentCountError` before any value is touched.
        """
        if len(tokens) > len(self.parameters):
            raise ArgumentCountError(
                self.verb or "", expected=len(self.parameters), received=len(tokens)
            )
        for index, param in enumerate(self.parameters):
            param.value = tokens[index] if index < len(tokens) else None
        return self.parameters

    def first_failed_condition(self) -> Condition | None:
        """Evaluate conditions in order; return the first one that fails."""
        for condition in self.conditions:
            if not condition.predicate(self.parameters):
                return condition
        return None

    def render_help(self, color_enabled: bool = False) -> str:
        """Return this handler's help block, or ``""`` for hidden handlers."""
        if self.hidden:
            return ""

        c = color_enabled
        bar = yellow(GROUP_CHAR, c)
        lines = [
            yellow(f"{GROUP_CHAR} -{self.verb}", c) + white(f" : {self.description}", c),
        ]

        pattern = bar + green(f"{CHILD_SPACE}Pattern: ", c) + yellow(f"-{self.verb}", c)
        for param in self.parameters:
            pattern += white(f" [{param.name}]", c)
        lines.append(pattern)

        for param in self.parameters:
            description = param.description
            if not description or not description.strip():
                description = NOT_AVAILABLE
            lines.append(
                bar + green(f"{CHILD_SPACE}[{param.name}]", c) + white(f" : {description}", c)
            )

        if self.example and self.example.strip():
            lines.append(bar + green(f"{CHILD_SPACE}Ex: ", c) + gray(self.example, c))

        return "\n".join(lines) + "\n"

    def validate(self) -> None:
        """Raise :class:`InvalidHandlerError` if the definition is incomplete."""
        if not self.verb:
            raise InvalidHandlerError("Invalid handler definition: no verb matched")
        if self.callback is None:
            raise InvalidHandlerError(
                "Invalid handler definition: no callback", context={"verb": self.verb}
            )
        for position, param in enumerate(self.parameters):
            if not param.name:
                raise InvalidHandlerError(
                    "Invalid handler definition: parameter without a name",
                    context={"verb": self.verb, "position": position},
                )


class CommandHandlerBuilder:
    """Fluent configuration of a :class:`CommandHandler`."""

    def __init__(self, handler: CommandHandler | None = None) -> None:
        self.handler = handler or CommandHandler()

    def match(self, verb: str, callback: Callback) -> CommandHandlerBuilder:
        """Set the verb and the callback invoked on dispatch."""
        if not verb or not verb.strip():
            raise InvalidHandlerError("Invalid handler definition: verb must not be empty")
        if verb.startswith("-"):
            raise InvalidHandlerError(
                "Invalid handler definition: verb must not start with '-'",
                context={"verb": verb},
            )
        if callback is None:
            raise InvalidHandlerError(
                "Invalid handler definition: no callback", context={"verb": verb}
            )
        self.handler.verb = verb
        self.handler.callback = callback
        return self

    def description(self, text: str) -> CommandHandlerBuilder:
        self.handler.description = text
        return self

    def example(self, text: str) -> CommandHandlerBuilder:
        self.handler.example = text
        return self

    def condition(self, predicate: Predicate, message: str) -> CommandHandlerBuilder:
        """Append a precondition checked at dispatch time, in order.

        Predicates must not have side effects: evaluation stops at the first
        failing condition.
        """
        if predicate is None:
            raise InvalidHandlerError(
                "Invalid handler definition: condition without predicate",
                context={"verb": self.handler.verb},
            )
        self.handler.conditions.append(Condition(predicate, message))
        return self

    def with_param(self) -> ParameterBuilder:
        parameter = Parameter()
        self.handler.parameters.append(parameter)
        return ParameterBuilder(self, parameter)

    def render_help(self, color_enabled: bool = False) -> str:
        return self.handler.render_help(color_enabled)

    def write_help(self, out: TextIO | None = None, color_enabled: bool = False) -> None:
        stream = out if out is not None else sys.stdout
        stream.write(self.render_help(color_enabled))


def count_non_empty(params: list[Parameter]) -> int:
    """Number of parameters bound to a non-blank value.

    Convenience for the common ``count >= N`` precondition.
    """
    return sum(1 for p in params if p.value is not None and p.value.strip())
