"""
Logging setup for the quiz service.

Log calls in the generation path attach ``provider``, ``attempt`` and
``schema`` through ``extra=``. Both formatters surface those fields, so a
fallback can be traced back to the provider failures and rejected attempts
that caused it.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

# Record attributes set by the provider chain and the structured generator
GENERATION_FIELDS = ("provider", "attempt", "schema")

LOG_FILE = "quiz-ai.log"
ERROR_LOG_FILE = "quiz-ai-errors.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def generation_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the generation fields present on a record."""
    return {
        field: getattr(record, field)
        for field in GENERATION_FIELDS
        if getattr(record, field, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with generation fields at top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "line": record.lineno,
        }
        entry.update(generation_context(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Coloured single-line output for development."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        line = f"{color}[{record.levelname}]{self.RESET} {record.name} - {record.getMessage()}"

        context = generation_context(record)
        if context:
            line += " (" + ", ".join(f"{key}={value}" for key, value in context.items()) + ")"

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


def _rotating_handler(path: Path, level: int = logging.NOTSET) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    environment: str = "development",
    log_level: str = "INFO",
    log_dir: Optional[Path] = None
) -> None:
    """
    Configure the root logger.

    Args:
        environment: "production" logs JSON to stdout, anything else coloured text
        log_level: Minimum level name, e.g. "DEBUG"
        log_dir: When set, also write JSON logs plus a separate error log there
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter() if environment == "production" else ConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(_rotating_handler(log_dir / LOG_FILE))
        root_logger.addHandler(_rotating_handler(log_dir / ERROR_LOG_FILE, logging.ERROR))

    logging.getLogger(__name__).info(
        f"Logging configured: environment={environment}, "
        f"level={log_level}, file_logging={log_dir is not None}"
    )
