# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import io
import os
import sys
import tempfile
import types
import unittest.mock
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from capturectl.lib.dispatch import CommandRegistry


@contextmanager
def config_env(
    yaml_text: str | None = None,
    *,
    extra_env: dict[str, str] | None = None,
) -> Iterator[types.SimpleNamespace]:
    """Point capturectl at a temp config file and state dir.

    Yields a namespace with: base, config_file, state_dir.
    """
    with tempfile.TemporaryDirectory() as td:
        base = Path(td)
        config_file = base / "config.yml"
        state_dir = base / "state"
        if yaml_text is not None:
            config_file.write_text(yaml_text, encoding="utf-8")

        env_vars = {
            "CAPTURECTL_CONFIG_FILE": str(config_file),
            "CAPTURECTL_STATE_DIR": str(state_dir),
        }
        if extra_env:
            env_vars.update(extra_env)

        with unittest.mock.patch.dict(os.environ, env_vars):
            if "CAPTURECTL_LOG_LEVEL" not in env_vars:
                os.environ.pop("CAPTURECTL_LOG_LEVEL", None)
            yield types.SimpleNamespace(base=base, config_file=config_file, state_dir=state_dir)


def make_registry() -> tuple[CommandRegistry, io.StringIO]:
    """Return a colourless registry writing into a StringIO."""
    out = io.StringIO()
    return CommandRegistry(out=out, color_enabled=False, banner="Test Banner"), out


def python_command(code: str) -> tuple[str, list[str]]:
    """Executable and arguments running *code* in a fresh interpreter."""
    return sys.executable, ["-c", code]
