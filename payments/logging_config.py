"""
Structured logging configuration for the payments CLI.

Logs go to stderr; stdout is reserved for the account report.

Usage:
    from payments.logging_config import setup_logging, get_logger

    setup_logging(level="INFO", fmt="json")
    logger = get_logger(__name__, run_id="batch-0001")
    logger.info("Ingesting", extra={"path": "transactions.csv"})
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class RunIDFilter(logging.Filter):
    """Ensures every record has a run_id field, even outside a LoggerAdapter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_id"):
            record.run_id = "N/A"  # type: ignore
        return True


def setup_logging(level: str = "WARNING", fmt: str = "json") -> None:
    """
    Configure the root logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown -> WARNING)
        fmt: json or text
    """
    log_level = LEVELS.get(level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.addFilter(RunIDFilter())

    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(run_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [run_id=%(run_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # SQL echo is never wanted on the report terminal
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def get_logger(name: str, run_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger that tags records with a run_id.

    Example:
        logger = get_logger(__name__, run_id="batch-0001")
        logger.info("Replay finished")
        # Output (JSON): {"timestamp": "...", "level": "INFO", "message": "Replay finished", "run_id": "batch-0001"}
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"run_id": run_id or "N/A"})
