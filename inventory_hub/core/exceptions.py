from fastapi import status
from typing import Any, Dict, Optional, Union


class InventoryHubError(Exception):
    """
    Base exception for inventory errors.

    Subclasses set ``status_code``, ``code`` and ``default_detail`` at class
    level. The status code is what an HTTP layer in front of the hub should
    answer with.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: Optional[str] = None,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        self.detail = detail or self.default_detail
        self.code = code or self.code
        self.status_code = status_code or self.status_code
        self.context = dict(context or {})
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Error envelope shared by every failure the hub reports."""
        return {
            "error": {
                "code": self.code,
                "message": self.detail,
                "status_code": self.status_code,
                "context": self.context
            }
        }


def _with(context: Optional[Dict[str, Any]], **fields: Any) -> Dict[str, Any]:
    """Known fields first (skipping None), caller context on top."""
    merged = {key: value for key, value in fields.items() if value is not None}
    merged.update(context or {})
    return merged


class ValidationError(InventoryHubError):
    """A transfer request or warehouse registration is invalid."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_detail = "Validation error"

    def __init__(
        self,
        detail: Optional[str] = None,
        code: Optional[str] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(detail, code, _with(context, field=field))


class NotFoundError(InventoryHubError):
    """No warehouse, item or inventory matched."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found_error"

    def __init__(
        self,
        resource_type: str,
        resource_id: Union[str, int],
        detail: Optional[str] = None,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            detail or f"{resource_type} with id '{resource_id}' not found",
            code,
            _with(context, resource_type=resource_type, resource_id=str(resource_id))
        )


class InsufficientStockError(InventoryHubError):
    """The chosen or any candidate source holds less stock than requested."""

    status_code = status.HTTP_409_CONFLICT
    code = "insufficient_stock"
    default_detail = "Insufficient stock"

    def __init__(
        self,
        detail: Optional[str] = None,
        requested: Optional[int] = None,
        available: Optional[int] = None,
        warehouse_id: Optional[str] = None,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.requested = requested
        self.available = available
        self.warehouse_id = warehouse_id
        super().__init__(
            detail,
            code,
            _with(context, requested=requested, available=available, warehouse_id=warehouse_id)
        )


class ConfigurationError(InventoryHubError):
    """A warehouse configuration cannot be served (unknown type, missing collaborator)."""

    code = "configuration_error"
    default_detail = "Configuration error"


class IntegrationException(InventoryHubError):
    """A partner warehouse API call failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
    code = "integration_error"
    default_detail = "External API integration error"

    def __init__(
        self,
        detail: Optional[str] = None,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(detail, code, context, status_code)
        self.original_exception = original_exception
        if original_exception is not None:
            self.context["original_error"] = str(original_exception)
