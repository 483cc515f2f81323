# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""CLI command modules.

Each module exposes ``register(registry)`` to declare its verbs on a
:class:`~capturectl.lib.dispatch.CommandRegistry`.  Callbacks receive the
bound parameter list and return ``True`` on success, ``False`` otherwise.
"""
