# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import logging
import sys
import unittest
from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path

from test_utils import config_env

from capturectl.cli.main import EXIT_FAILED, EXIT_OK, EXIT_REJECTED, build_registry, exit_status, main
from capturectl.lib._util.banner import render_ascii
from capturectl.lib._util.logging_utils import LOGGER_NAME
from capturectl.lib.dispatch import DispatchResult, DispatchState

PYTHON_NAME = Path(sys.executable).name


def _run(argv: list[str]) -> tuple[int, str]:
    buffer = StringIO()
    with redirect_stdout(buffer):
        code = main(argv)
    return code, buffer.getvalue()


class CliTestCase(unittest.TestCase):
    def tearDown(self) -> None:
        # Release the log file so the temp state dir can be removed.
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


class HelpCommandTests(CliTestCase):
    def test_no_verb_prints_full_help(self) -> None:
        with config_env():
            code, output = _run([])
            self.tearDown()
        self.assertEqual(code, EXIT_OK)
        self.assertIn(render_ascii("Console Log Capture")[0], output)
        for verb in ("-h", "-rp", "-ex", "-wrascii", "-cfg"):
            self.assertIn(f"| {verb} : ", output)
        self.assertIn("|     Pattern: -rp [pth] [arg]", output)
        self.assertIn("|     [arg] : N/A", output)
        self.assertNotIn("\x1b[", output)

    def test_unknown_verb_matches_help_verb_listing(self) -> None:
        with config_env("ui:\n  banner: Custom Title\n"):
            _, unknown = _run(["-nope"])
            _, help_text = _run(["-h"])
            self.tearDown()
        self.assertEqual(unknown, help_text)
        self.assertIn("\n".join(render_ascii("Custom Title")), unknown)

    def test_build_registry_renders_deterministically(self) -> None:
        with config_env():
            first = build_registry(out=StringIO()).render_help()
            second = build_registry(out=StringIO()).render_help()
        self.assertEqual(first, second)


class RunProcessCommandTests(CliTestCase):
    def test_output_is_streamed_to_console_and_log(self) -> None:
        with config_env(extra_env={"CAPTURECTL_LOG_LEVEL": "DEBUG"}) as env:
            code, output = _run(["-rp", sys.executable, "-c 'print(\"captured 42\")'"])
            self.tearDown()
            log_text = (env.state_dir / "capturectl.log").read_text(encoding="utf-8")
        self.assertEqual(code, EXIT_OK)
        self.assertIn("captured 42", output)
        self.assertIn("captured 42", log_text)
        self.assertIn("exited with exit code [0]", log_text)

    def test_non_zero_exit_is_reported(self) -> None:
        with config_env():
            code, output = _run(["rp", sys.executable, "-c 'raise SystemExit(3)'"])
            self.tearDown()
        self.assertEqual(code, EXIT_FAILED)
        self.assertIn(f"{PYTHON_NAME} exited with code 3", output)

    def test_missing_argument_is_rejected(self) -> None:
        with config_env():
            code, output = _run(["-rp", sys.executable])
            self.tearDown()
        self.assertEqual(code, EXIT_REJECTED)
        self.assertIn("The input parameter count must be at least 2.", output)
        self.assertIn("| -rp : Run process.", output)

    def test_surplus_arguments_are_rejected(self) -> None:
        with config_env():
            code, output = _run(["-rp", sys.executable, "-c", "pass"])
            self.tearDown()
        self.assertEqual(code, EXIT_REJECTED)
        self.assertIn("Argument count mismatch", output)

    def test_launch_failure_is_reported(self) -> None:
        with config_env():
            code, output = _run(["-rp", "/nonexistent/capturectl-tool", "--help"])
            self.tearDown()
        self.assertEqual(code, EXIT_FAILED)
        self.assertIn("Could not start /nonexistent/capturectl-tool", output)

    def test_unbalanced_quote_is_reported_not_raised(self) -> None:
        with config_env():
            code, output = _run(["-rp", sys.executable, "don't"])
            self.tearDown()
        self.assertEqual(code, EXIT_FAILED)
        self.assertIn(f"Could not start {sys.executable}", output)
        self.assertIn("No closing quotation", output)


class ExecuteCommandTests(CliTestCase):
    def test_success(self) -> None:
        with config_env():
            code, _ = _run(["-ex", sys.executable, "-c pass"])
            self.tearDown()
        self.assertEqual(code, EXIT_OK)

    def test_single_argument_string(self) -> None:
        with config_env():
            code, _ = _run(["-ex", sys.executable, "--version"])
            self.tearDown()
        self.assertEqual(code, EXIT_OK)

    def test_failure_exits_with_message(self) -> None:
        with config_env():
            with self.assertRaises(SystemExit) as ctx:
                _run(["-ex", sys.executable, "-c 'raise SystemExit(3)'"])
            self.tearDown()
        message = str(ctx.exception.code)
        self.assertIn("Process execution failed", message)
        self.assertIn("exit_code=3", message)
        self.assertIn(sys.executable, message)

    def test_unbalanced_quote_exits_with_message(self) -> None:
        with config_env():
            with self.assertRaises(SystemExit) as ctx:
                _run(["-ex", sys.executable, "-c 'print(1)' don't"])
            self.tearDown()
        message = str(ctx.exception.code)
        self.assertIn("Invalid argument string", message)
        self.assertIn("No closing quotation", message)

    def test_missing_path_is_rejected(self) -> None:
        with config_env():
            code, output = _run(["-ex"])
            self.tearDown()
        self.assertEqual(code, EXIT_REJECTED)
        self.assertIn("The process path is required.", output)


class BannerCommandTests(CliTestCase):
    def test_text_is_written_as_boxed_lettering(self) -> None:
        with config_env():
            code, output = _run(["-wrascii", "Pham Tuan"])
            self.tearDown()
        self.assertEqual(code, EXIT_OK)
        art = render_ascii("Pham Tuan")
        lines = output.splitlines()
        self.assertEqual(len(lines), len(art) + 2)
        self.assertTrue(lines[0].startswith("+=") and lines[0] == lines[-1])
        self.assertNotIn("Pham Tuan", output)
        for line, figure in zip(lines[1:-1], art):
            self.assertTrue(line.startswith(f"| {figure}"), line)
            self.assertTrue(line.endswith(" |"), line)

    def test_font_comes_from_config(self) -> None:
        with config_env("ui:\n  font: banner\n"):
            _, output = _run(["-wrascii", "Hi"])
            self.tearDown()
        self.assertIn(render_ascii("Hi", "banner")[0], output)

    def test_without_text_uses_banner_title(self) -> None:
        with config_env("ui:\n  banner: Fallback\n"):
            code, output = _run(["-wrascii"])
            self.tearDown()
        self.assertEqual(code, EXIT_OK)
        self.assertIn(f"| {render_ascii('Fallback')[0]}", output)


class ConfigCommandTests(CliTestCase):
    def test_shows_paths_and_settings(self) -> None:
        with config_env("process:\n  timeout: 30\n", extra_env={"CAPTURECTL_LOG_LEVEL": "DEBUG"}) as env:
            code, output = _run(["-cfg"])
            self.tearDown()
        self.assertEqual(code, EXIT_OK)
        self.assertIn(f"- Global config file: {env.config_file.resolve()} (exists: yes)", output)
        self.assertIn(f"- Log file: {env.state_dir.resolve() / 'capturectl.log'}", output)
        self.assertIn("- Log level: DEBUG", output)
        self.assertIn("- Process timeout: 30s", output)
        self.assertIn("- CAPTURECTL_LOG_LEVEL=DEBUG", output)

    def test_lists_only_honoured_overrides(self) -> None:
        extra = {"CAPTURECTL_CONFIG_DIR": "/tmp/ignored", "NO_COLOR": "1"}
        with config_env(extra_env=extra) as env:
            code, output = _run(["-cfg"])
            self.tearDown()
        self.assertEqual(code, EXIT_OK)
        self.assertIn(f"- CAPTURECTL_CONFIG_FILE={env.config_file}", output)
        self.assertIn("- NO_COLOR=1", output)
        self.assertNotIn("CAPTURECTL_CONFIG_DIR", output)


class ExitStatusTests(unittest.TestCase):
    def test_mapping(self) -> None:
        self.assertEqual(exit_status(DispatchResult(DispatchState.NO_MATCH)), EXIT_OK)
        self.assertEqual(exit_status(DispatchResult(DispatchState.REJECTED, "rp")), EXIT_REJECTED)
        self.assertEqual(
            exit_status(DispatchResult(DispatchState.DISPATCHED, "rp", callback_result=True)),
            EXIT_OK,
        )
        self.assertEqual(
            exit_status(DispatchResult(DispatchState.DISPATCHED, "rp", callback_result=False)),
            EXIT_FAILED,
        )
