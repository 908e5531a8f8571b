"""Logging configuration for the Norma evaluation runner."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional
import json
from datetime import datetime

from norma_eval.config import ENV_LOG_DIR, ENV_LOG_LEVEL, get_env

_RECORD_ATTRIBUTES = (
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "getMessage",
    "exc_info",
    "exc_text",
    "stack_info",
)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, including fields passed via extra."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Fields passed via extra={...}
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_entry[key] = value

        return json.dumps(log_entry, separators=(",", ":"), default=str)


def setup_logging(
    level: Optional[str] = None,
    log_dir: Optional[str] = None,
    enable_console: bool = True,
    enable_file: Optional[bool] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
) -> None:
    """
    Setup logging for the evaluation runner.

    Console output is plain text; log files carry one JSON object per line so
    the ``extra`` fields of each record are kept.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files (defaults to NORMA_EVAL_LOG_DIR)
        enable_console: Enable console logging
        enable_file: Enable file logging (defaults to on if a log dir is known)
        max_file_size_mb: Maximum size per log file in MB
        backup_count: Number of backup files to keep
    """
    if level is None:
        level = get_env(ENV_LOG_LEVEL, "INFO")
    level = level.upper()

    if log_dir is None:
        log_dir = get_env(ENV_LOG_DIR)

    if enable_file is None:
        enable_file = log_dir is not None

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, level))
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s "
                "[%(filename)s:%(lineno)d]"
            )
        )
        root_logger.addHandler(console_handler)

    if enable_file:
        log_path = Path(log_dir or "logs")
        log_path.mkdir(parents=True, exist_ok=True)
        file_formatter = JsonFormatter()

        main_handler = logging.handlers.RotatingFileHandler(
            log_path / "norma_eval.log",
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        main_handler.setLevel(getattr(logging, level))
        main_handler.setFormatter(file_formatter)
        root_logger.addHandler(main_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            log_path / "norma_eval_errors.log",
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(file_formatter)
        root_logger.addHandler(error_handler)

    _setup_module_loggers()


def _setup_module_loggers() -> None:
    """Apply per-module level overrides (e.g. NORMA_EVAL_LOG_LEVEL_RUNNER)."""
    for logger_name in ["runner", "process", "report"]:
        level = get_env(f"{ENV_LOG_LEVEL}_{logger_name.upper()}")
        if level:
            logger = logging.getLogger(f"norma_eval.{logger_name}")
            logger.setLevel(getattr(logging, level.upper()))


def get_logger(name: str) -> logging.Logger:
    """Get logger for specific module."""
    if not name.startswith("norma_eval."):
        name = f"norma_eval.{name}"
    return logging.getLogger(name)
