# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""capturectl package.

Modules:
- capturectl.cli: CLI entry point package (capturectl)
- capturectl.lib.dispatch: Verb registry, handler builders, dispatch
- capturectl.lib.process: External process execution and output capture
- capturectl.lib.core: Configuration, paths, errors
- capturectl.lib._util: Internal helpers (ANSI colours, banner, logging)
- capturectl.ui_utils: Terminal helpers for the CLI
"""

__all__ = ["cli", "lib", "ui_utils"]

# Version information - single source of truth using importlib.metadata
try:
    from importlib.metadata import version

    __version__ = version("capturectl")
except Exception:
    # Fallback for development mode when package is not installed
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
                __version__ = pyproject_data["tool"]["poetry"]["version"]
        else:
            __version__ = "unknown"
    except Exception:
        __version__ = "unknown"
