"""
Classification and validation of inventory lookup queries.

A lookup is either a UPC (numeric, at least ``MIN_UPC_LENGTH`` digits) or one
of the known category names.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar

from inventory_hub.core.constants import MIN_UPC_LENGTH, VALID_CATEGORIES
from inventory_hub.core.exceptions import NotFoundError, ValidationError

T = TypeVar("T")

QUERY_TYPE_UPC = "upc"
QUERY_TYPE_CATEGORY = "category"


@dataclass(frozen=True)
class QueryClassification:
    type: str
    value: str

    @property
    def is_upc(self) -> bool:
        return self.type == QUERY_TYPE_UPC


def validate_and_classify_query(query: Optional[str]) -> QueryClassification:
    """
    Determine whether a query is a UPC or a category and validate it.

    Raises:
        ValidationError: If the query is empty
        NotFoundError: If a non-UPC query names no known category
    """
    if not query or not query.strip():
        raise ValidationError("Query cannot be empty.", field="query")

    trimmed = query.strip()
    if trimmed.isdigit() and len(trimmed) >= MIN_UPC_LENGTH:
        validate_upc(trimmed)
        return QueryClassification(QUERY_TYPE_UPC, trimmed)

    return QueryClassification(QUERY_TYPE_CATEGORY, validate_and_normalize_category(trimmed))


def validate_upc(upc: str) -> None:
    """Raise ValidationError unless ``upc`` is all digits and long enough."""
    if not upc.isdigit():
        raise ValidationError("UPC must contain only numeric characters.", field="upc")
    if len(upc) < MIN_UPC_LENGTH:
        raise ValidationError("Invalid UPC code.", field="upc")


def validate_and_normalize_category(category: str) -> str:
    normalized = category.strip().lower()
    if normalized not in VALID_CATEGORIES:
        raise NotFoundError("category", category, detail="Invalid category.")
    return normalized


def validate_result_not_empty(items: Optional[Sequence[T]], resource_type: str,
                              resource_id: str, message: str) -> List[T]:
    """Return ``items`` as a list, raising NotFoundError when there are none."""
    if not items:
        raise NotFoundError(resource_type, resource_id, detail=message)
    return list(items)


def upc_not_found_message(upc: str, warehouse_id: Optional[str] = None) -> str:
    if warehouse_id:
        return f'No inventory found for UPC "{upc}" in warehouse {warehouse_id}.'
    return f'No inventory found for UPC "{upc}".'


def category_not_found_message(category: str, warehouse_id: Optional[str] = None) -> str:
    if warehouse_id:
        return f'No items found in category "{category}" for warehouse {warehouse_id}.'
    return f'No items found in category "{category}".'


def get_valid_categories() -> List[str]:
    return list(VALID_CATEGORIES)
