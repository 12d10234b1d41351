# baewatch/config/logging_config.py

"""Logging for the baewatch server and CLI.

MCP clients spawn a fresh server process per session, so every launch
gets its own ``logs/run_<timestamp>.log`` and only the newest
``Settings.LOG_RETENTION`` run logs are kept.

Console output goes to stderr: stdout is the MCP stdio stream.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from baewatch.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(funcName)s:%(lineno)d | %(message)s"
)
_STDERR_FORMAT = "baewatch %(levelname)s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_level() -> int:
    """Console threshold from ``BAEWATCH_LOG_LEVEL`` (default WARNING)."""
    name = os.environ.get(Settings.LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def prune_old_logs(logs_dir: Path, keep: int) -> list[Path]:
    """Delete all but the *keep* newest ``run_*.log`` files.

    Returns the removed paths. Run logs sort chronologically by name.
    """
    runs = sorted(logs_dir.glob("run_*.log"))
    stale = runs[:-keep] if keep > 0 else runs
    for path in stale:
        path.unlink(missing_ok=True)
    return stale


def setup_logging() -> Path:
    """Attach the per-run file handler and the stderr handler.

    Safe to call more than once; handlers are only added the first time.

    Returns:
        Path of this run's log file.
    """
    logs_dir = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    logger = logging.getLogger("baewatch")
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return log_file

    pruned = prune_old_logs(logs_dir, Settings.LOG_RETENTION - 1)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )
    logger.addHandler(file_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(_console_level())
    stderr_handler.setFormatter(logging.Formatter(_STDERR_FORMAT))
    logger.addHandler(stderr_handler)

    logger.debug(
        "Logging to %s (pruned %d old run logs)", log_file, len(pruned)
    )
    return log_file
