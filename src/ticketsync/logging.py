"""Logging setup for the ticketsync CLI and API server.

Everything ticketsync and uvicorn log goes to one rotating file (and
optionally the console). GitHub tokens are redacted before a record is
written.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "ticketsync.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that share the ticketsync handlers; uvicorn.error and
# uvicorn.access propagate to "uvicorn" when serve leaves log_config unset
MANAGED_LOGGERS = ("ticketsync", "uvicorn")

_SECRET_PATTERNS = [
    (re.compile(r"gh[pos]_[a-zA-Z0-9]{36}"), "[GITHUB_TOKEN]"),
    (re.compile(r"github_pat_[a-zA-Z0-9_]{82}"), "[GITHUB_TOKEN]"),
    (re.compile(r"Bearer [a-zA-Z0-9._-]+"), "Bearer [REDACTED]"),
    (re.compile(r"token=[a-zA-Z0-9._-]+"), "token=[REDACTED]"),
]


def sanitize_for_log(text: str) -> str:
    """Remove GitHub tokens and bearer credentials from text."""
    for pattern, replacement in _SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class RedactingFilter(logging.Filter):
    """Sanitizes the rendered message of every record passing a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        sanitized = sanitize_for_log(message)
        if sanitized != message:
            record.msg = sanitized
            record.args = None
        return True


def _resolve_level(level: str | None) -> tuple[str, int]:
    if level is None:
        level = os.environ.get("TICKETSYNC_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    return level.upper(), getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Route ticketsync and uvicorn logging to a rotating file.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_dir: Directory for log files. Defaults to TICKETSYNC_LOG_DIR,
            then 'logs' in the current directory.
        log_file: Log file name.
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of rotated files to keep.
        level: Log level name. Defaults to TICKETSYNC_LOG_LEVEL, then INFO.
        console: Whether to also log to stderr.

    Returns:
        The ticketsync logger.
    """
    log_dir = Path(log_dir or os.environ.get("TICKETSYNC_LOG_DIR", DEFAULT_LOG_DIR))
    log_dir.mkdir(parents=True, exist_ok=True)
    level_name, log_level = _resolve_level(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    redacting = RedactingFilter()

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_dir / log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(redacting)

    for name in MANAGED_LOGGERS:
        managed = logging.getLogger(name)
        managed.setLevel(log_level)
        for old in list(managed.handlers):
            managed.removeHandler(old)
            old.close()
        for handler in handlers:
            managed.addHandler(handler)

    logger = logging.getLogger("ticketsync")
    logger.info("Logging initialized (level=%s, file=%s)", level_name, log_dir / log_file)
    return logger
