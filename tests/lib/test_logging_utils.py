# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import logging
import tempfile
import unittest
import unittest.mock
from pathlib import Path

from capturectl.lib._util.logging_utils import LOGGER_NAME, log_file_of, setup_logging


class SetupLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_writes_to_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            log_file = Path(td) / "nested" / "capturectl.log"
            logger = setup_logging(logging.DEBUG, log_file)
            logging.getLogger("capturectl.lib.process.runner").debug("captured line")
            for handler in logger.handlers:
                handler.flush()

            self.assertEqual(log_file_of(logger), log_file)
            content = log_file.read_text(encoding="utf-8")
            self.assertIn("DEBUG capturectl.lib.process.runner: captured line", content)
            self.tearDown()

    def test_level_filters_child_loggers(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            setup_logging(logging.WARNING, Path(td) / "capturectl.log")
            child = logging.getLogger("capturectl.lib.process.runner")
            self.assertFalse(child.isEnabledFor(logging.INFO))
            setup_logging(logging.INFO, Path(td) / "capturectl.log")
            self.assertTrue(child.isEnabledFor(logging.INFO))
            self.tearDown()

    def test_repeated_setup_replaces_handlers(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            setup_logging(logging.INFO, Path(td) / "a.log")
            logger = setup_logging(logging.INFO, Path(td) / "b.log")
            self.assertEqual(len(logger.handlers), 1)
            self.assertEqual(log_file_of(logger), Path(td) / "b.log")
            self.tearDown()

    def test_unwritable_log_file_falls_back_to_stderr(self) -> None:
        with unittest.mock.patch(
            "capturectl.lib._util.logging_utils.logging.FileHandler",
            side_effect=PermissionError("read-only"),
        ):
            logger = setup_logging(logging.INFO, Path(tempfile.gettempdir()) / "x.log")
        self.assertIsNone(log_file_of(logger))
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.handlers[0].level, logging.WARNING)

    def test_no_log_file(self) -> None:
        logger = setup_logging(logging.INFO, None)
        self.assertIsNone(log_file_of(logger))
