"""Logging configuration for laneboard."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOGGER_NAME = "laneboard"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_for(verbose: int) -> int:
    """Map a -v count to a logging level (0 and 1 both log at INFO when enabled)."""
    return logging.DEBUG if verbose >= 2 else logging.INFO


def setup_logging(
    verbose: int = 0,
    log_file: Path | None = None,
    database: Path | str | None = None,
) -> None:
    """Configure the laneboard logger from verbosity and an optional log file.

    Logging stays off unless -v is given or a log file is requested. Stderr
    output is unusable while the TUI owns the terminal, so the TUI is
    normally run with --log-file instead.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG)
        log_file: Optional path to write logs to file
        database: Database path, recorded in the startup banner
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Repeated setup (tests, re-entry) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if verbose == 0 and log_file is None:
        logger.addHandler(logging.NullHandler())
        return

    level = level_for(verbose)
    logger.setLevel(level)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if verbose > 0:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("=" * 60)
    logger.info(
        "laneboard starting | %s | level=%s | db=%s",
        timestamp,
        logging.getLevelName(level),
        database if database is not None else "-",
    )
    logger.info("=" * 60)
