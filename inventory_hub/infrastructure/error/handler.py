"""
Failure reporting for errors the hub absorbs instead of raising.

A warehouse that cannot be read during aggregation contributes no items; the
reason still has to go somewhere. ``ErrorHandler`` classifies it, logs it at a
level matching its severity, counts it against the warehouse and optionally
hands it to a notification hook.
"""
import logging
from collections import Counter
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Type
import traceback

import httpx
from pydantic import BaseModel, Field

from inventory_hub.core.exceptions import (
    ConfigurationError,
    InsufficientStockError,
    IntegrationException,
    NotFoundError,
    ValidationError,
)


class ErrorCategory(str, Enum):
    """What kind of failure occurred."""
    CONNECTION = "connection"
    TIMEOUT = "timeout"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    CONFIGURATION = "configuration"
    EXTERNAL_API = "external_api"
    UNKNOWN = "unknown"


class ErrorSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorDetails(BaseModel):
    """One classified failure, as logged and passed to the notify hook."""
    timestamp: datetime
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    source: str
    error_code: Optional[str] = None
    http_status_code: Optional[int] = None
    context: Dict[str, Any] = Field(default_factory=dict)
    stacktrace: Optional[str] = None
    should_notify: bool = False


# First matching type wins
EXCEPTION_CLASSIFICATION: Tuple[Tuple[Type[BaseException], ErrorCategory, ErrorSeverity], ...] = (
    (ValidationError, ErrorCategory.VALIDATION, ErrorSeverity.LOW),
    (NotFoundError, ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.LOW),
    (InsufficientStockError, ErrorCategory.INSUFFICIENT_STOCK, ErrorSeverity.LOW),
    (ConfigurationError, ErrorCategory.CONFIGURATION, ErrorSeverity.HIGH),
    (IntegrationException, ErrorCategory.EXTERNAL_API, ErrorSeverity.MEDIUM),
    (httpx.TimeoutException, ErrorCategory.TIMEOUT, ErrorSeverity.MEDIUM),
    (httpx.TransportError, ErrorCategory.CONNECTION, ErrorSeverity.MEDIUM),
)

_LOG_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


class ErrorHandler:
    """
    Classifies, logs and counts absorbed failures per source.

    ``failure_counts`` maps a source (a warehouse id) to the number of failures
    reported for it since the handler was created.
    """

    def __init__(
        self,
        logger: logging.Logger,
        notify_callback: Optional[Callable[[ErrorDetails], None]] = None
    ):
        """
        Args:
            logger: Where classified failures are logged
            notify_callback: Called with the details of every high or critical failure
        """
        self.logger = logger
        self.notify_callback = notify_callback
        self.failure_counts: Counter = Counter()

    def handle_error(
        self,
        exception: BaseException,
        source: str,
        context: Optional[Dict[str, Any]] = None
    ) -> ErrorDetails:
        """
        Report one failure of ``source``.

        Args:
            exception: What went wrong
            source: Warehouse id (or other component name) that failed
            context: Call details such as the UPC being read

        Returns:
            ErrorDetails: The classified failure
        """
        error_details = self.categorize_error(exception, source, context or {})
        self.failure_counts[source] += 1
        self.log_error(error_details)

        if self.should_notify(error_details):
            error_details.should_notify = True
            self.notify_error(error_details)

        return error_details

    def categorize_error(
        self,
        exception: BaseException,
        source: str,
        context: Dict[str, Any]
    ) -> ErrorDetails:
        """Build ``ErrorDetails`` for an exception without logging or counting it."""
        category, severity = ErrorCategory.UNKNOWN, ErrorSeverity.HIGH
        for exception_type, mapped_category, mapped_severity in EXCEPTION_CLASSIFICATION:
            if isinstance(exception, exception_type):
                category, severity = mapped_category, mapped_severity
                break

        error_code = getattr(exception, "code", None)
        http_status_code = getattr(exception, "status_code", None)
        merged_context = {**(getattr(exception, "context", None) or {}), **context}

        # Connector failures carry the finer-grained cause in their code
        if isinstance(exception, IntegrationException):
            remote_status = merged_context.get("remote_status_code")
            if remote_status is not None and remote_status >= 500:
                severity = ErrorSeverity.HIGH
            elif error_code == "integration_timeout":
                category = ErrorCategory.TIMEOUT
            elif error_code == "integration_connection_error":
                category = ErrorCategory.CONNECTION

        stacktrace = None
        if exception.__traceback__ is not None:
            stacktrace = "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))

        return ErrorDetails(
            timestamp=datetime.now(timezone.utc),
            category=category,
            severity=severity,
            message=str(exception) or type(exception).__name__,
            source=source,
            error_code=error_code if isinstance(error_code, str) else None,
            http_status_code=http_status_code if isinstance(http_status_code, int) else None,
            context=merged_context,
            stacktrace=stacktrace,
        )

    def should_notify(self, error_details: ErrorDetails) -> bool:
        return error_details.severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL)

    def log_error(self, error_details: ErrorDetails) -> None:
        extra: Dict[str, Any] = {
            "source": error_details.source,
            "category": error_details.category.value,
            "severity": error_details.severity.value,
        }
        for key in ("error_code", "http_status_code", "context"):
            value = getattr(error_details, key)
            if value:
                extra[key] = value

        self.logger.log(
            _LOG_LEVELS[error_details.severity],
            f"{error_details.source}: {error_details.message}",
            extra=extra
        )
        if error_details.severity == ErrorSeverity.HIGH and error_details.stacktrace:
            self.logger.debug(f"Stacktrace:\n{error_details.stacktrace}")

    def notify_error(self, error_details: ErrorDetails) -> None:
        if not self.notify_callback:
            return
        try:
            self.notify_callback(error_details)
        except Exception as e:
            # A broken hook must not hide the failure being reported
            self.logger.error(
                f"Failure notification for {error_details.source} failed: {str(e)}",
                extra={"error_source": error_details.source}
            )
