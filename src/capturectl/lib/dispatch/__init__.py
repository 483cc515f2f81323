# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Verb registry and dispatch."""

from .handlers import CommandHandler, CommandHandlerBuilder, Condition, count_non_empty
from .parameters import Parameter, ParameterBuilder
from .registry import CommandRegistry, DispatchResult, DispatchState

__all__ = [
    "CommandHandler",
    "CommandHandlerBuilder",
    "CommandRegistry",
    "Condition",
    "DispatchResult",
    "DispatchState",
    "Parameter",
    "ParameterBuilder",
    "count_non_empty",
]
