# PATH: core/logging.py
"""
core/logging.py - Structured logging.

All logs include:
- timestamp (ISO 8601)
- level
- logger
- message
- context (direction, tx_hash, gas_used, etc.)

Contextual fields are passed only via extra={"context": {...}}.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Global context that gets added to all log entries
_global_context: dict[str, Any] = {}


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Output format:
    {
        "timestamp": "2026-01-04T12:00:00.000+00:00",
        "level": "INFO",
        "logger": "teleport.flow",
        "message": "Transaction sent",
        "context": {
            "direction": "TOKEN_TO_NATIVE",
            "tx_hash": "0xabc...",
            "gas_used": 123456
        }
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {}
        context.update(_global_context)

        if hasattr(record, "context") and record.context:
            context.update(record.context)

        if record.exc_info:
            context["exception"] = self.formatException(record.exc_info)

        if context:
            log_entry["context"] = context

        return json.dumps(log_entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable formatter for console output.

    Prefixes every line with an ISO 8601 UTC timestamp in brackets.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        base = f"[{timestamp}] {record.levelname:<7} {record.getMessage()}"

        if hasattr(record, "context") and record.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in list(record.context.items())[:3])
            if len(record.context) > 3:
                ctx_str += f", ... (+{len(record.context) - 3} more)"
            base += f" | {ctx_str}"

        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)

        return base


class ContextAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds context to all log entries.
    """

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        # Merge adapter context with call context
        extra = kwargs.get("extra", {})
        context = {**self.extra, **extra.get("context", {})}

        kwargs["extra"] = {"context": context}
        return msg, kwargs


def set_global_context(**kwargs: Any) -> None:
    """
    Set global context that gets added to all JSON log entries.

    Example:
        set_global_context(service="teleport", direction="TOKEN_TO_NATIVE")
    """
    _global_context.update(kwargs)


def clear_global_context() -> None:
    """Clear global logging context."""
    _global_context.clear()


def get_logger(name: str, **context: Any) -> ContextAdapter:
    """
    Get a logger with optional default context.

    Args:
        name: Logger name (e.g., "teleport.flow")
        **context: Default context for all log entries from this logger

    Returns:
        ContextAdapter with structured logging

    Example:
        logger = get_logger("teleport.submitter", network="remote")
        logger.info("Transaction sent", extra={"context": {"tx_hash": "0x.."}})
    """
    logger = logging.getLogger(name)
    return ContextAdapter(logger, context)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: str | None = None,
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON formatting instead of the console transcript
        log_file: Optional file path; always written as JSON lines
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter() if json_output else ConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def log_transfer(
    logger: ContextAdapter,
    label: str,
    tx_hash: str,
    status: str,
    gas_used: int | None = None,
    **extra: Any,
) -> None:
    """Log a submitted transaction with standard context."""
    logger.info(
        f"{label} transaction {status}. Transaction Hash: {tx_hash}",
        extra={
            "context": {
                "tx_hash": tx_hash,
                "status": status,
                "gas_used": gas_used,
                **extra,
            }
        },
    )


def log_error(
    logger: ContextAdapter,
    error_code: str,
    message: str,
    **extra: Any,
) -> None:
    """Log an error with standard context."""
    logger.error(
        f"[{error_code}] {message}",
        extra={
            "context": {
                "error_code": error_code,
                **extra,
            }
        },
    )
