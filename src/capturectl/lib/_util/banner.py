# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""FIGlet lettering, boxed text and the welcome banner.

Lettering is rendered by pyfiglet.  Widths are measured with Rich's
``cell_len`` so wide (CJK, emoji) characters line up with the box border.
"""

import logging

import pyfiglet
from rich.cells import cell_len

from .ansi import violet, yellow

logger = logging.getLogger(__name__)

WELCOME_LINE = "Welcome to ............................................/>"
DEFAULT_FONT = "standard"


def pad_cells(text: str, width: int) -> str:
    """Right-pad *text* with spaces to *width* terminal cells."""
    try:
        text_width = cell_len(text)
    except (TypeError, ValueError):
        return text
    if text_width >= width:
        return text
    return f"{text}{' ' * (width - text_width)}"


def _figlet(font: str | None) -> pyfiglet.Figlet:
    name = font or DEFAULT_FONT
    try:
        return pyfiglet.Figlet(font=name)
    except pyfiglet.FontNotFound:
        logger.warning("Unknown FIGlet font %r, using %r", name, DEFAULT_FONT)
        return pyfiglet.Figlet(font=DEFAULT_FONT)


def render_ascii(text: str, font: str | None = None) -> list[str]:
    """Render *text* as FIGlet lettering, one figure per input line.

    Trailing whitespace and trailing blank rows are dropped.
    """
    figlet = _figlet(font)
    lines: list[str] = []
    for row in text.splitlines():
        lines.extend(line.rstrip() for line in figlet.renderText(row).splitlines())
    while lines and not lines[-1]:
        lines.pop()
    return lines or [""]


def render_box(text: str) -> list[str]:
    """Render *text* (possibly multi-line) inside an ASCII box.

    Returns the box as a list of lines without trailing newlines.
    """
    lines = text.splitlines() or [""]
    width = max(cell_len(line) for line in lines)
    border = "+" + "=" * (width + 2) + "+"
    body = [f"| {pad_cells(line, width)} |" for line in lines]
    return [border, *body, border]


def render_banner(title: str, enabled: bool, font: str | None = None) -> str:
    """Return the welcome banner shown above the full help listing."""
    out = [yellow(WELCOME_LINE, enabled)]
    out.extend(violet(line, enabled) for line in render_ascii(title, font))
    out.append("")
    return "\n".join(out) + "\n"
