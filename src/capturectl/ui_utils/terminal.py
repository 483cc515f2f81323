# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Terminal formatting helpers.

Core color functions (``supports_color``, ``color``, ``yellow``, ...) and
the banner renderer live in ``capturectl.lib._util`` so that library modules
can use them without a cross-layer dependency.  This module re-exports them
and adds higher-level helpers for the CLI commands.
"""

from capturectl.lib._util.ansi import (  # noqa: F401  -- re-exports
    color,
    gray,
    green,
    red,
    supports_color,
    violet,
    white,
    yellow,
)
from capturectl.lib._util.banner import (  # noqa: F401  -- re-exports
    pad_cells,
    render_ascii,
    render_banner,
    render_box,
)


def yes_no(value: bool, enabled: bool) -> str:
    """Return green ``"yes"`` or red ``"no"`` based on *value* when *enabled*."""
    return color("yes" if value else "no", "32" if value else "31", enabled)


def color_enabled(configured: bool) -> bool:
    """Colour is used only when configured and the terminal supports it."""
    return configured and supports_color()
