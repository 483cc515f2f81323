# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Informational CLI command: configuration and log locations."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ...lib._util.logging_utils import LOGGER_NAME, log_file_of
from ...lib.core.config import (
    get_color_enabled as _get_color_enabled,
    get_elevation_prefix as _get_elevation_prefix,
    get_log_level as _get_log_level,
    get_process_timeout as _get_process_timeout,
    get_stream_output as _get_stream_output,
    global_config_path as _global_config_path,
    global_config_search_paths as _global_config_search_paths,
    log_file_path as _log_file_path,
    state_root as _state_root,
)
from ...lib.dispatch import CommandRegistry, Parameter
from ...ui_utils.terminal import (
    color_enabled as _color_enabled,
    gray as _gray,
    yes_no as _yes_no,
)

ENV_VARS = (
    "CAPTURECTL_CONFIG_FILE",
    "CAPTURECTL_STATE_DIR",
    "CAPTURECTL_LOG_LEVEL",
    "XDG_CONFIG_HOME",
    "XDG_DATA_HOME",
    "NO_COLOR",
)


def register(registry: CommandRegistry) -> None:
    """Register ``-cfg``."""
    (
        registry.register_handler()
        .match("cfg", _cmd_print_config)
        .description("Show configuration and log file locations.")
    )


def _cmd_print_config(params: list[Parameter]) -> bool:
    """Display configuration paths and the effective settings."""
    c = _color_enabled(_get_color_enabled())

    print("Configuration (read):")
    gcfg = _global_config_path()
    print(f"- Global config file: {_gray(str(gcfg), c)} (exists: {_yes_no(gcfg.is_file(), c)})")
    print("- Global config search order:")
    for p in _global_config_search_paths():
        print(f"  • {_gray(str(p), c)} (exists: {_yes_no(Path(p).is_file(), c)})")

    print("Writable locations (write):")
    sroot = _state_root()
    print(f"- State root: {_gray(str(sroot), c)} (exists: {_yes_no(sroot.is_dir(), c)})")
    active_log = log_file_of(logging.getLogger(LOGGER_NAME)) or _log_file_path()
    print(f"- Log file: {_gray(str(active_log), c)} (exists: {_yes_no(active_log.is_file(), c)})")

    print("Effective settings:")
    print(f"- Log level: {logging.getLevelName(_get_log_level())}")
    print(f"- Colour output: {_yes_no(_get_color_enabled(), c)}")
    print(f"- Stream process output: {_yes_no(_get_stream_output(), c)}")
    timeout = _get_process_timeout()
    print(f"- Process timeout: {'none' if timeout is None else f'{timeout:g}s'}")
    prefix = " ".join(_get_elevation_prefix()) or "(none)"
    print(f"- Elevation prefix: {_gray(prefix, c)}")

    print("Environment overrides (if set):")
    for var in ENV_VARS:
        val = os.environ.get(var)
        if val is not None:
            print(f"- {var}={_gray(val, c)}")
    return True
