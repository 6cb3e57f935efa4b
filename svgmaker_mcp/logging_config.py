# svgmaker_mcp/logging_config.py
"""
Stderr-only JSON logging configuration.

CRITICAL: MCP uses stdio transport, so ALL logging must go to stderr.
No print() statements, no stdout handlers.

When debug logging is enabled, a second handler writes DEBUG records to a
timestamped file under the platform log directory.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from platformdirs import user_log_path

APP_NAME = "svgmaker-mcp"
SESSION_START = datetime.now(timezone.utc)

_THIRD_PARTY_LOGGERS = ["httpx", "httpcore", "fastmcp", "mcp"]

_log_file: Path | None = None


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON line."""
        log_data: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        # Include exception info if present
        if record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def debug_enabled_from_env() -> bool:
    """True when SVGMAKER_DEBUG=true or NODE_ENV-style development mode is set."""
    return (
        os.environ.get("SVGMAKER_DEBUG", "").lower() == "true"
        or os.environ.get("SVGMAKER_ENV", "").lower() == "development"
    )


def get_log_directory() -> Path:
    """Platform-specific directory for debug log files."""
    return user_log_path(APP_NAME)


def get_log_file() -> Path | None:
    """Path of the active debug log file (None if debug logging is off)."""
    return _log_file


def configure_logging(debug: bool | None = None, log_dir: Path | None = None) -> None:
    """
    Configure logging to output JSON to stderr only.

    MUST be called before any imports that might create loggers.
    Clears existing handlers to prevent stdout pollution.

    Args:
        debug: Enable the DEBUG file handler (defaults to SVGMAKER_DEBUG env var)
        log_dir: Override directory for the debug log file
    """
    global _log_file

    if debug is None:
        debug = debug_enabled_from_env()

    # Create stderr handler with JSON formatter
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    handler.setLevel(logging.INFO)
    handlers: list[logging.Handler] = [handler]

    _log_file = None
    if debug:
        directory = log_dir or get_log_directory()
        directory.mkdir(parents=True, exist_ok=True)
        stamp = SESSION_START.isoformat().replace(":", "-").replace(".", "-")
        _log_file = directory / f"mcp-debug-{stamp}.log"

        file_handler = logging.FileHandler(_log_file, encoding="utf-8")
        file_handler.setFormatter(JsonFormatter())
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    level = logging.DEBUG if debug else logging.INFO

    # Get root logger and clear all existing handlers
    root = logging.getLogger()
    root.handlers.clear()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)

    # Configure third-party loggers to use same handlers
    for logger_name in _THIRD_PARTY_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.handlers.clear()
        for h in handlers:
            logger.addHandler(h)
        logger.setLevel(level)
        logger.propagate = False  # Don't propagate to root to avoid double logging


def log_session_start() -> None:
    """Log a banner marking server startup."""
    logger = logging.getLogger("svgmaker_mcp")
    logger.info("=" * 60)
    logger.info(f"SVGMaker MCP server starting - session: {SESSION_START.isoformat()}")
    if _log_file is not None:
        logger.info(f"Debug log file: {_log_file}")
    logger.info("=" * 60)


def log_session_end() -> None:
    """Log a banner marking server shutdown with session duration."""
    logger = logging.getLogger("svgmaker_mcp")
    duration = datetime.now(timezone.utc) - SESSION_START
    logger.info("=" * 60)
    logger.info(
        f"SVGMaker MCP server shutting down - session duration: "
        f"{round(duration.total_seconds())}s"
    )
    logger.info("=" * 60)


def log_fatal_error(error: BaseException) -> None:
    """Log an unrecoverable startup/runtime error with its traceback."""
    logging.getLogger("svgmaker_mcp").critical(
        f"FATAL ERROR: {error}", exc_info=(type(error), error, error.__traceback__)
    )
