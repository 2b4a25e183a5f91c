# src/config/logging_config.py

"""Per-run logging for swipeshop.

Every launch writes ``logs/run_YYYYMMDD_HHMMSS.log``. The ``swipeshop.*``
loggers and the ``httpx`` request log of the Supabase client share that
file, so one run's gateway calls, session changes and swipe decisions can
be read in order. Only the newest ``Settings.LOG_RETENTION`` run files are
kept.

The console only receives WARNING and above because the TUI owns the
terminal while it runs.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HTTP_LOGGERS: tuple[str, ...] = ("httpx",)


def _level(name: str, default: int = logging.DEBUG) -> int:
    """Map a level name such as ``"info"`` to its number."""
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else default


def _current_log_file(logger: logging.Logger) -> Path | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def prune_old_logs(logs_dir: Path, keep: int) -> list[Path]:
    """Delete all but the newest *keep* run logs in *logs_dir*.

    Run file names sort chronologically. ``keep == 0`` removes every run
    file; a negative *keep* disables pruning. Returns the removed paths.
    """
    if keep < 0:
        return []
    runs = sorted(logs_dir.glob("run_*.log"))
    stale = runs[:len(runs) - keep] if len(runs) > keep else []
    removed: list[Path] = []
    for path in stale:
        try:
            path.unlink()
        except OSError as exc:
            logging.getLogger("swipeshop.logging").warning(
                "Could not remove old log %s: %s", path, exc,
            )
            continue
        removed.append(path)
    return removed


def setup_logging(logs_dir: Path | None = None) -> Path:
    """Initialise the ``swipeshop`` logger for the current run.

    Calling it again keeps the first run's handlers and returns that
    run's file.

    Returns:
        The :class:`~pathlib.Path` of this run's log file.
    """
    root_logger = logging.getLogger("swipeshop")
    root_logger.setLevel(logging.DEBUG)

    existing = _current_log_file(root_logger)
    if existing is not None:
        return existing

    logs_dir = logs_dir or Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    # Leave room for the file about to be created; 0 keeps everything
    removed: list[Path] = []
    if Settings.LOG_RETENTION > 0:
        removed = prune_old_logs(logs_dir, Settings.LOG_RETENTION - 1)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(_level(Settings.LOG_LEVEL))
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    http_level = _level(Settings.HTTP_LOG_LEVEL, logging.INFO)
    for name in _HTTP_LOGGERS:
        http_logger = logging.getLogger(name)
        http_logger.setLevel(http_level)
        http_logger.addHandler(file_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)
    if removed:
        root_logger.debug("Pruned %d old run log(s)", len(removed))

    return log_file
