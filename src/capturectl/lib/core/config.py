# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml  # pip install pyyaml

from .paths import is_root, state_root as _state_root_base

DEFAULT_BANNER = "Console Log Capture"
DEFAULT_LOG_LEVEL = "INFO"

# ---------- Global config file ----------


def global_config_search_paths() -> list[Path]:
    """Return the ordered list of paths that will be checked for global config.

    Behavior matches global_config_path():
    - If CAPTURECTL_CONFIG_FILE is set, only that single path is considered.
    - Otherwise, check in order:
        1) ${XDG_CONFIG_HOME:-~/.config}/capturectl/config.yml
        2) sys.prefix/etc/capturectl/config.yml
        3) /etc/capturectl/config.yml
    """
    env_file = os.environ.get("CAPTURECTL_CONFIG_FILE")
    if env_file:
        return [Path(env_file).expanduser().resolve()]

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    user_cfg = (Path(xdg_home) if xdg_home else Path.home() / ".config") / "capturectl" / "config.yml"
    sp_cfg = Path(sys.prefix) / "etc" / "capturectl" / "config.yml"
    etc_cfg = Path("/etc/capturectl/config.yml")
    return [user_cfg, sp_cfg, etc_cfg]


def global_config_path() -> Path:
    """Global config file path (resolved based on search paths).

    Resolution order (first existing wins, except explicit override is returned even
    if missing to make intent visible to the user):
    - CAPTURECTL_CONFIG_FILE env (returned as-is)
    - ${XDG_CONFIG_HOME:-~/.config}/capturectl/config.yml (user override)
    - sys.prefix/etc/capturectl/config.yml (pip wheels)
    - /etc/capturectl/config.yml (system default)
    If none exist, return the last path (/etc/capturectl/config.yml).
    """
    candidates = global_config_search_paths()
    if len(candidates) == 1:
        return candidates[0]

    for c in candidates:
        if c.is_file():
            return c.resolve()
    return candidates[-1]


def load_global_config() -> dict[str, Any]:
    cfg_path = global_config_path()
    if not cfg_path.is_file():
        return {}
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        return {}
    return data


def get_global_section(key: str) -> dict[str, Any]:
    """Return a top-level section from the global config, defaulting to ``{}``.

    If the value under *key* is not a dict (e.g. the user wrote ``ui: "oops"``),
    returns ``{}`` to avoid ``AttributeError`` in callers that expect ``.get()``.
    """
    try:
        cfg = load_global_config()
    except (OSError, yaml.YAMLError):
        return {}
    value = cfg.get(key, {})
    if not isinstance(value, dict):
        return {}
    return value or {}


# ---------- Path resolution ----------


def _resolve_path(
    env_var: str | None,
    config_key: tuple[str, str] | None,
    default: Callable[[], Path],
) -> Path:
    """Resolve a path: env var → global config → computed default."""
    if env_var:
        env = os.environ.get(env_var)
        if env:
            return Path(env).expanduser().resolve()

    if config_key:
        val = get_global_section(config_key[0]).get(config_key[1])
        if val:
            return Path(str(val)).expanduser().resolve()

    return default().resolve()


def state_root() -> Path:
    """Writable state directory.

    Precedence:
    - Environment variable CAPTURECTL_STATE_DIR
    - Global config (paths.state_root)
    - capturectl.lib.core.paths.state_root() (FHS/XDG handling)
    """
    return _resolve_path("CAPTURECTL_STATE_DIR", ("paths", "state_root"), _state_root_base)


def log_file_path() -> Path:
    """Log file location: config ``logging.file`` or ``state_root()/capturectl.log``."""
    return _resolve_path(None, ("logging", "file"), lambda: state_root() / "capturectl.log")


# ---------- Typed settings ----------


def get_log_level() -> int:
    """Return the configured log level as a ``logging`` constant.

    CAPTURECTL_LOG_LEVEL wins over ``logging.level`` in the config file.
    Unknown level names fall back to INFO.
    """
    name = os.environ.get("CAPTURECTL_LOG_LEVEL") or get_global_section("logging").get("level")
    if not name:
        name = DEFAULT_LOG_LEVEL
    level = logging.getLevelName(str(name).strip().upper())
    if not isinstance(level, int):
        return logging.INFO
    return level


def get_color_enabled() -> bool:
    """Return False when ``ui.color`` is explicitly disabled in the config."""
    value = get_global_section("ui").get("color", True)
    return value is not False


def get_banner_title() -> str:
    title = get_global_section("ui").get("banner")
    if isinstance(title, str) and title.strip():
        return title
    return DEFAULT_BANNER


def get_banner_font() -> str | None:
    """FIGlet font for banners (``ui.font``); None selects the default font."""
    font = get_global_section("ui").get("font")
    if isinstance(font, str) and font.strip():
        return font.strip()
    return None


def get_stream_output() -> bool:
    """Whether child process output should be streamed (``process.stream_output``)."""
    return get_global_section("process").get("stream_output", True) is not False


def get_process_timeout() -> float | None:
    """Return ``process.timeout`` in seconds, or None to wait forever."""
    value = get_global_section("process").get("timeout")
    if value is None:
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return None
    return timeout if timeout > 0 else None


def get_elevation_prefix() -> list[str]:
    """Command prefix used for elevated launches.

    ``process.elevate_with`` may be a string or a list; when unset, ``sudo``
    is used unless the current process already runs as root.
    """
    value = get_global_section("process").get("elevate_with")
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list):
        return [str(v) for v in value]
    if is_root():
        return []
    return ["sudo"]
