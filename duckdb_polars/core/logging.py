"""Structured logging configuration for duckdb_polars."""

import logging
import sys

from json_log_formatter import JSONFormatter

LOGGER_NAME = "duckdb_polars"


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure logging for duckdb_polars.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, use JSON format; otherwise use normal format
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = StructuredFormatter()

    handler.setFormatter(formatter)
    logger.addHandler(handler)


class StructuredFormatter(logging.Formatter):
    """Structured formatter that adds conversion context to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with context."""
        context = getattr(record, "context", {})

        parts = [f"[{record.levelname}]"]

        if hasattr(record, "batch_index"):
            parts.append(f"batch={record.batch_index}")

        if hasattr(record, "column_index"):
            parts.append(f"column={record.column_index}")

        for key, value in context.items():
            parts.append(f"{key}={value}")

        parts.append(record.getMessage())

        return " ".join(parts)
