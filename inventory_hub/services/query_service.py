from typing import List

from inventory_hub.core.logging import get_logger
from inventory_hub.domain.models.inventory import NormalizedInventoryItem
from inventory_hub.services.inventory_aggregator import InventoryAggregator
from inventory_hub.utils.query import (
    category_not_found_message,
    upc_not_found_message,
    validate_and_classify_query,
    validate_result_not_empty,
)

logger = get_logger(__name__)


class InventoryQueryService:
    """Answers free-form inventory lookups (a UPC or a category name)."""

    def __init__(self, aggregator: InventoryAggregator):
        self.aggregator = aggregator

    async def get_inventory_by_query(self, query: str) -> List[NormalizedInventoryItem]:
        """
        Look a query up across all warehouses.

        Raises:
            ValidationError: If the query is empty
            NotFoundError: If the category is unknown or nothing matched
        """
        classification = validate_and_classify_query(query)
        logger.debug(f"Query {query!r} classified as {classification.type}")

        if classification.is_upc:
            items = await self.aggregator.get_all(upc=classification.value)
            return validate_result_not_empty(
                items, "inventory", classification.value, upc_not_found_message(classification.value)
            )

        items = await self.aggregator.get_all(category=classification.value)
        return validate_result_not_empty(
            items, "category", classification.value, category_not_found_message(classification.value)
        )

    async def get_inventory_from_warehouse_by_query(self,
                                                    warehouse_id: str,
                                                    query: str) -> List[NormalizedInventoryItem]:
        """
        Look a query up in one warehouse.

        Raises:
            ValidationError: If the query is empty
            NotFoundError: If the warehouse is not registered, the category is
                unknown or nothing matched
        """
        classification = validate_and_classify_query(query)

        if classification.is_upc:
            items = await self.aggregator.get_from_one(warehouse_id, upc=classification.value)
            return validate_result_not_empty(
                items, "inventory", classification.value,
                upc_not_found_message(classification.value, warehouse_id)
            )

        items = await self.aggregator.get_from_one(warehouse_id, category=classification.value)
        return validate_result_not_empty(
            items, "category", classification.value,
            category_not_found_message(classification.value, warehouse_id)
        )
