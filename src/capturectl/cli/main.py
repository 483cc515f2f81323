# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""capturectl command-line entry point.

Usage: ``capturectl [-]<verb> [token1] [token2] ...``; run without a verb
(or with ``-h``) for the list of commands.
"""

import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from ..lib._util.logging_utils import setup_logging
from ..lib.core.config import (
    get_banner_font as _get_banner_font,
    get_banner_title as _get_banner_title,
    get_color_enabled as _get_color_enabled,
    get_log_level as _get_log_level,
    log_file_path as _log_file_path,
)
from ..lib.core.errors import CaptureCtlError
from ..lib.dispatch import CommandRegistry, DispatchResult, DispatchState
from ..ui_utils.terminal import color_enabled as _color_enabled
from .commands import banner, info, process

logger = logging.getLogger(__name__)

COMMAND_MODULES = (process, banner, info)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_REJECTED = 2


def build_registry(out: TextIO | None = None) -> CommandRegistry:
    """Create a registry with every CLI command registered."""
    registry = CommandRegistry(
        out=out,
        color_enabled=_color_enabled(_get_color_enabled()),
        banner=_get_banner_title(),
        font=_get_banner_font(),
    )
    for module in COMMAND_MODULES:
        module.register(registry)
    return registry


def exit_status(result: DispatchResult) -> int:
    if result.state is DispatchState.REJECTED:
        return EXIT_REJECTED
    if result.state is DispatchState.DISPATCHED and result.callback_result is False:
        return EXIT_FAILED
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    setup_logging(_get_log_level(), _log_file_path())

    registry = build_registry()
    try:
        result = registry.dispatch(args)
    except CaptureCtlError as exc:
        logger.error("%s", exc)
        raise SystemExit(str(exc)) from exc
    return exit_status(result)


if __name__ == "__main__":
    raise SystemExit(main())
