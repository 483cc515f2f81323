# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""``-wrascii``: print a text as boxed FIGlet lettering."""

from __future__ import annotations

from ...lib.core.config import (
    get_banner_font as _get_banner_font,
    get_banner_title as _get_banner_title,
    get_color_enabled as _get_color_enabled,
)
from ...lib.dispatch import CommandRegistry, Parameter, count_non_empty
from ...ui_utils.terminal import (
    color_enabled as _color_enabled,
    render_ascii as _render_ascii,
    render_box as _render_box,
    yellow as _yellow,
)


def register(registry: CommandRegistry) -> None:
    """Register ``-wrascii``."""
    (
        registry.register_handler()
        .match("wrascii", _cmd_write_ascii)
        .description("Write ascii.")
        .example("-wrascii 'Pham Tuan'")
        .condition(
            lambda params: count_non_empty(params) >= 0,
            "The input parameter count must be at least 0.",
        )
        .with_param()
        .match("txt")
        .description("Your text.")
    )


def _cmd_write_ascii(params: list[Parameter]) -> bool:
    # Without a text the configured banner title is shown.
    text = params[0].value or _get_banner_title()
    text = text.replace("\\n", "\n")
    art = "\n".join(_render_ascii(text, _get_banner_font()))
    color_enabled = _color_enabled(_get_color_enabled())
    for line in _render_box(art):
        print(_yellow(line, color_enabled))
    return True
