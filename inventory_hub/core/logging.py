"""
Logging helpers for the Inventory Hub.

Two context variables travel with every log record: the correlation id of
the transfer or query being served, and the warehouse currently being read.
Aggregation runs each warehouse read in its own task, so the warehouse id is
isolated per read.
"""
import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from inventory_hub.core.config import get_settings

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
warehouse_id: ContextVar[str] = ContextVar("warehouse_id", default="")

# Attributes every LogRecord has; anything else was passed via ``extra``
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message", "asctime", "correlation_id", "warehouse", "data"
}


class StructuredLogFormatter(logging.Formatter):
    """Renders each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        for key, var in (("correlation_id", correlation_id), ("warehouse", warehouse_id)):
            value = getattr(record, key, "") or var.get()
            if value:
                entry[key] = value

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info),
            }

        # Fields passed through ``extra=`` on the logging call
        entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        )

        static = getattr(record, "data", None)
        if isinstance(static, dict):
            entry.update(static)

        return json.dumps(entry, default=str)


class ContextFilter(logging.Filter):
    """Copies the context variables, and optional static fields, onto records."""

    def __init__(self, extra: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.extra = extra or {}

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get()
        record.warehouse = warehouse_id.get()
        if self.extra:
            record.data = self.extra
        return True


def configure_logging() -> None:
    """
    Install a single stdout handler on the root logger.

    Output is JSON when ``ENABLE_STRUCTURED_LOGGING`` is set and a plain
    one-line format otherwise. Applications embedding the hub call this once.
    """
    settings = get_settings()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ContextFilter())
    if settings.ENABLE_STRUCTURED_LOGGING:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] [%(correlation_id)s] [%(warehouse)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
    root_logger.addHandler(handler)

    # Partner calls are logged by the connector itself
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> logging.Logger:
    """
    Module logger with the context filter attached.

    Args:
        name: Logger name, usually ``__name__``
        **extra: Static fields added to every record of this logger
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, ContextFilter) for f in logger.filters):
        logger.addFilter(ContextFilter(extra))
    return logger


def set_correlation_id(corr_id: Optional[str] = None) -> str:
    """Set the correlation id of the current context, generating a UUID if none is given."""
    corr_id = corr_id or str(uuid.uuid4())
    correlation_id.set(corr_id)
    return corr_id


def bind_warehouse(warehouse: str) -> None:
    """Tag subsequent records of the current context with a warehouse id."""
    warehouse_id.set(warehouse)
