# drivescore/infra/logging.py
# -*- coding: utf-8 -*-

"""
Logging setup for drivescore.

Everything the package logs goes through the `drivescore` logger
namespace. Library modules only ever call `get_logger(__name__)`; the CLI
scripts call `init_logging()` once, which attaches a stdout handler (and
optionally a per-run file) to that namespace. Embedding applications that
never call `init_logging()` keep full control through the root logger.

Usage
-----
    from drivescore.infra.logging import init_logging, get_logger

    init_logging(level="DEBUG", write_output=True)
    log = get_logger("bulk_score_trips")   # → "drivescore.bulk_score_trips"

Environment
-----------
- DRIVESCORE_LOG_LEVEL overrides the `level` given to `init_logging()`.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAMESPACE = "drivescore"
LOG_LEVEL_ENV = "DRIVESCORE_LOG_LEVEL"
LOG_FORMAT = "[{asctime}][{levelname}][{name}] {message}"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOGS_DIR = Path("logs")

_run_log_path: Optional[Path] = None


# ────────────────────────────────────────────────────────────────────────────────
# Internals
# ────────────────────────────────────────────────────────────────────────────────

def _resolve_level(level: str) -> int:
    requested = os.getenv(LOG_LEVEL_ENV) or level
    numeric = logging.getLevelName(str(requested).strip().upper())
    # getLevelName answers "Level X" for unknown names
    return numeric if isinstance(numeric, int) else logging.INFO


def _run_log_file(logs_dir: Optional[Path]) -> Path:
    # e.g. logs/bulk_score_trips__20261019-174709.log
    run_name = Path(sys.argv[0]).stem if sys.argv and sys.argv[0] else ""
    if run_name in {"", "-c", "-m"}:
        run_name = LOGGER_NAMESPACE
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return Path(logs_dir or DEFAULT_LOGS_DIR) / f"{run_name}__{stamp}.log"


# ────────────────────────────────────────────────────────────────────────────────
# Public API
# ────────────────────────────────────────────────────────────────────────────────

def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a logger inside the `drivescore` namespace.

    `get_logger(__name__)` from a package module is returned as is;
    any other name (a script stem, "__main__") is nested under the
    namespace so `init_logging()` reaches it.
    """
    if not name or name == LOGGER_NAMESPACE:
        return logging.getLogger(LOGGER_NAMESPACE)
    if name.startswith(LOGGER_NAMESPACE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def get_current_log_path() -> Optional[Path]:
    """
    Path of the file the last `init_logging()` call writes to, or None when
    it only logs to stdout.
    """
    return _run_log_path


def init_logging(
      level: str = "INFO"
    , *
    , write_output: bool = False
    , log_file: Optional[Path] = None
    , logs_dir: Optional[Path] = None
) -> logging.Logger:
    """
    Configure the `drivescore` logger namespace for a CLI run.

    Handlers from a previous call are replaced, so calling this more than
    once (tests, repeated `main()` calls) never duplicates output.

    Parameters
    ----------
    level : str, default "INFO"
        Level name; DRIVESCORE_LOG_LEVEL wins when set. Unknown names mean INFO.
    write_output : bool, default False
        Also write a per-run file `<script>__<timestamp>.log` under
        `logs_dir` (default `logs/`).
    log_file : Optional[Path]
        Explicit log file; implies file output. Parent dirs are created.
    logs_dir : Optional[Path]
        Directory for the per-run file when `log_file` is not given.

    Returns
    -------
    logging.Logger
        The configured namespace logger.
    """
    global _run_log_path

    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(_resolve_level(level))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT, style="{")

    stream_handler = logging.StreamHandler(stream=sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    _run_log_path = None
    if write_output or log_file is not None:
        target = Path(log_file) if log_file is not None else _run_log_file(logs_dir)
        target.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(target, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        _run_log_path = target.resolve()

    logger.debug(
        f"init_logging: level={logging.getLevelName(logger.level)}, "
        f"file={_run_log_path or '-'}"
    )
    return logger


def log_banner(
      log: logging.Logger
    , msg: str
    , *
    , char: str = "="
    , width: int = 60
    , box: bool = False
) -> None:
    """
    Log `msg` framed by a bar of `char` above and below, or centered in a
    double-line box when `box=True`. Used to separate CLI run phases.
    """
    if box:
        edge = "═" * width
        log.info(f"╔{edge}╗")
        log.info(f"║{(' ' + msg + ' ').center(width)}║")
        log.info(f"╚{edge}╝")
        return

    bar = char * width
    for line in (bar, msg, bar):
        log.info(line)
