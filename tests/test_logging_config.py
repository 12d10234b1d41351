# tests/test_logging_config.py

"""Tests for per-run logging setup and run-log pruning."""

import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from baewatch.config.logging_config import prune_old_logs, setup_logging
from baewatch.config.settings import Settings


def _reset_logger() -> None:
    logger = logging.getLogger("baewatch")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


class TestSetupLogging(unittest.TestCase):
    """setup_logging writes into a temporary logs directory."""

    def setUp(self) -> None:
        _reset_logger()
        self._tmp = tempfile.TemporaryDirectory()
        self.logs_dir = Path(self._tmp.name) / "logs"
        patcher = patch.object(Settings, "LOGS_DIR", self.logs_dir)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)
        self.addCleanup(_reset_logger)

    def _handlers(self) -> list[logging.Handler]:
        return logging.getLogger("baewatch").handlers

    def test_creates_run_log_in_logs_dir(self) -> None:
        log_path = setup_logging()
        self.assertEqual(log_path.parent, self.logs_dir)
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")
        self.assertTrue(log_path.exists())

    def test_module_loggers_reach_the_file(self) -> None:
        log_path = setup_logging()
        logging.getLogger("baewatch.search").info("sold search for ipad")
        for handler in self._handlers():
            handler.flush()
        self.assertIn(
            "sold search for ipad", log_path.read_text(encoding="utf-8")
        )

    def test_console_handler_uses_stderr(self) -> None:
        setup_logging()
        streams = [
            h for h in self._handlers()
            if type(h) is logging.StreamHandler
        ]
        self.assertEqual(len(streams), 1)
        self.assertIs(streams[0].stream, sys.stderr)
        self.assertEqual(streams[0].level, logging.WARNING)

    def test_console_level_from_environment(self) -> None:
        with patch.dict(os.environ, {Settings.LOG_LEVEL_ENV: "debug"}):
            setup_logging()
        streams = [
            h for h in self._handlers()
            if type(h) is logging.StreamHandler
        ]
        self.assertEqual(streams[0].level, logging.DEBUG)

    def test_unknown_level_falls_back_to_warning(self) -> None:
        with patch.dict(os.environ, {Settings.LOG_LEVEL_ENV: "chatty"}):
            setup_logging()
        streams = [
            h for h in self._handlers()
            if type(h) is logging.StreamHandler
        ]
        self.assertEqual(streams[0].level, logging.WARNING)

    def test_repeated_calls_do_not_stack_handlers(self) -> None:
        setup_logging()
        count = len(self._handlers())
        setup_logging()
        self.assertEqual(len(self._handlers()), count)

    def test_old_run_logs_are_pruned(self) -> None:
        self.logs_dir.mkdir(parents=True)
        for day in range(1, 6):
            (self.logs_dir / f"run_202401{day:02d}_000000.log").touch()
        with patch.object(Settings, "LOG_RETENTION", 3):
            setup_logging()
        remaining = sorted(p.name for p in self.logs_dir.glob("run_*.log"))
        self.assertEqual(len(remaining), 3)
        self.assertNotIn("run_20240101_000000.log", remaining)
        self.assertIn("run_20240105_000000.log", remaining)


class TestPruneOldLogs(unittest.TestCase):
    """prune_old_logs keeps the newest files by name."""

    def test_keeps_newest(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            logs = Path(tmp)
            for name in ("run_20240102_000000.log", "run_20240101_000000.log",
                         "run_20240103_000000.log", "notes.txt"):
                (logs / name).touch()
            removed = prune_old_logs(logs, 2)
            self.assertEqual(
                [p.name for p in removed], ["run_20240101_000000.log"]
            )
            self.assertTrue((logs / "notes.txt").exists())

    def test_keep_zero_removes_all_runs(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            logs = Path(tmp)
            (logs / "run_20240101_000000.log").touch()
            prune_old_logs(logs, 0)
            self.assertEqual(list(logs.glob("run_*.log")), [])


if __name__ == "__main__":
    unittest.main()
