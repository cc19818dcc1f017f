"""
Error handling package for the Inventory Hub.
Provides centralized error categorization and failure reporting.
"""

from inventory_hub.infrastructure.error.handler import (
    ErrorHandler,
    ErrorDetails,
    ErrorCategory,
    ErrorSeverity
)

__all__ = [
    "ErrorHandler",
    "ErrorDetails",
    "ErrorCategory",
    "ErrorSeverity",
]
