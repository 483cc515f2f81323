# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Platform-aware path resolution for the writable state directory."""

import getpass
import os
from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "capturectl"


def is_root() -> bool:
    """Return True if the current process is running as root."""
    try:
        return os.geteuid() == 0  # type: ignore[attr-defined]
    except AttributeError:
        return getpass.getuser() == "root"


def state_root() -> Path:
    """
    Writable state (log files).

    Priority:
      1. CAPTURECTL_STATE_DIR
      2. if root   → /var/lib/capturectl
         else      → ${XDG_DATA_HOME:-~/.local/share}/capturectl
    """
    env = os.getenv("CAPTURECTL_STATE_DIR")
    if env:
        return Path(env).expanduser()

    if is_root():
        return Path("/var/lib") / APP_NAME

    return Path(user_data_dir(APP_NAME))
