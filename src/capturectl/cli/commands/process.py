# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Process commands: ``-rp`` (run and capture) and ``-ex`` (strict execute)."""

from __future__ import annotations

from ...lib.core.config import (
    get_color_enabled as _get_color_enabled,
    get_process_timeout as _get_process_timeout,
    get_stream_output as _get_stream_output,
)
from ...lib.dispatch import CommandRegistry, Parameter, count_non_empty
from ...lib.process import ProcessRunner, ProcessStatus
from ...lib.process.runner import split_arguments
from ...ui_utils.terminal import color_enabled as _color_enabled, red as _red


def register(registry: CommandRegistry) -> None:
    """Register ``-rp`` and ``-ex``."""
    (
        registry.register_handler()
        .match("rp", _cmd_run_process)
        .description("Run process.")
        .example("-rp /usr/bin/make 'install PREFIX=/opt/app'")
        .condition(
            lambda params: count_non_empty(params) >= 2,
            "The input parameter count must be at least 2.",
        )
        .with_param()
        .match("pth")
        .description("Full path of the process.")
        .base()
        .with_param()
        .match("arg")
        .description("Arguments for target process.")
    )

    (
        registry.register_handler()
        .match("ex", _cmd_execute)
        .description("Execute process, failing on a non-zero exit code.")
        .example("-ex /usr/bin/git 'fetch --all'")
        .condition(
            lambda params: count_non_empty(params[:1]) == 1,
            "The process path is required.",
        )
        .with_param()
        .match("pth")
        .description("Full path of the process.")
        .base()
        .with_param()
        .match("arg")
    )


def _cmd_run_process(params: list[Parameter]) -> bool:
    """Run the process, capturing its output; report but tolerate failures."""
    # The "rp" condition guarantees a path.
    path, arguments = str(params[0].value), params[1].value
    color_enabled = _color_enabled(_get_color_enabled())

    runner = ProcessRunner(
        path, stream_output=_get_stream_output(), color_enabled=color_enabled
    )
    result = runner.start(arguments, timeout=_get_process_timeout())

    if result.status is ProcessStatus.LAUNCH_FAILED:
        print(_red(f"Could not start {path}: {result.error}", color_enabled))
    elif result.status is ProcessStatus.TIMED_OUT:
        print(_red(f"{runner.process_name} did not finish in time and was killed", color_enabled))
    elif result.status is ProcessStatus.NON_ZERO_EXIT:
        print(f"{runner.process_name} exited with code {result.exit_code}")
    return result.ok


def _cmd_execute(params: list[Parameter]) -> bool:
    """Run the process strictly.

    ``ProcessExecutionError`` and ``ArgumentSyntaxError`` propagate to ``main``.
    """
    path, arguments = str(params[0].value), params[1].value
    ProcessRunner.execute([path, *split_arguments(arguments)], timeout=_get_process_timeout())
    return True
