"""
Concurrent inventory reads across every registered warehouse.

Each warehouse is read independently; a warehouse whose adapter raises is
reported as a failed ``WarehouseFetchResult`` and contributes no items, so the
aggregate call itself never fails because of one warehouse.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from inventory_hub.adapters.factory import AdapterFactory
from inventory_hub.adapters.interfaces.warehouse import WarehouseAdapter
from inventory_hub.core.exceptions import NotFoundError
from inventory_hub.core.logging import bind_warehouse, get_logger
from inventory_hub.domain.models.inventory import NormalizedInventoryItem
from inventory_hub.domain.models.warehouse import WarehouseConfig
from inventory_hub.infrastructure.error.handler import ErrorDetails, ErrorHandler
from inventory_hub.services.warehouse_registry import WarehouseRegistry

logger = get_logger(__name__)


@dataclass
class WarehouseFetchResult:
    """Outcome of reading one warehouse."""

    warehouse_id: str
    items: List[NormalizedInventoryItem] = field(default_factory=list)
    error: Optional[ErrorDetails] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class AggregationReport:
    items: List[NormalizedInventoryItem]
    results: List[WarehouseFetchResult]

    @property
    def failed(self) -> List[str]:
        return [result.warehouse_id for result in self.results if not result.success]

    @property
    def empty(self) -> List[str]:
        return [result.warehouse_id for result in self.results if result.success and not result.items]


class InventoryAggregator:
    """Fans inventory reads out to all registered warehouses."""

    def __init__(self,
                 registry: WarehouseRegistry,
                 factory: AdapterFactory,
                 error_handler: Optional[ErrorHandler] = None):
        self.registry = registry
        self.factory = factory
        self.error_handler = error_handler or ErrorHandler(logger)

    def adapter_for(self, warehouse_id: str) -> WarehouseAdapter:
        """
        Build the adapter of a registered warehouse.

        Raises:
            NotFoundError: If the warehouse is not registered
            ConfigurationError: If no adapter can be built for its type
        """
        config = self.registry.get(warehouse_id)
        if config is None:
            raise NotFoundError("warehouse", warehouse_id, detail=f"Warehouse {warehouse_id} not found.")
        return self.factory.create(config)

    async def get_all(self,
                      upc: Optional[str] = None,
                      category: Optional[str] = None) -> List[NormalizedInventoryItem]:
        report = await self.collect(upc=upc, category=category)
        return report.items

    async def collect(self,
                      upc: Optional[str] = None,
                      category: Optional[str] = None) -> AggregationReport:
        """
        Read every warehouse concurrently and join the per-warehouse results.

        Items are concatenated in registration order, each warehouse's items in
        the order its adapter returned them.
        """
        configs = self.registry.list()
        results = await asyncio.gather(
            *(self._fetch_one(config, upc, category) for config in configs)
        )

        items = [item for result in results for item in result.items]
        report = AggregationReport(items=items, results=list(results))

        if report.failed:
            logger.warning(
                f"Inventory aggregation finished with failures from {', '.join(report.failed)}",
                extra={"upc": upc, "category": category}
            )
        logger.debug(f"Aggregated {len(items)} items from {len(configs)} warehouses")
        return report

    async def get_from_one(self,
                           warehouse_id: str,
                           upc: Optional[str] = None,
                           category: Optional[str] = None) -> List[NormalizedInventoryItem]:
        """
        Read a single warehouse.

        Raises:
            NotFoundError: If the warehouse is not registered
        """
        adapter = self.adapter_for(warehouse_id)
        return await adapter.fetch(upc=upc, category=category)

    @property
    def failure_counts(self) -> Dict[str, int]:
        """Number of failed reads per warehouse since start-up."""
        return dict(self.error_handler.failure_counts)

    async def _fetch_one(self,
                         config: WarehouseConfig,
                         upc: Optional[str],
                         category: Optional[str]) -> WarehouseFetchResult:
        # Each gathered read runs in its own task context
        bind_warehouse(config.id)
        try:
            adapter = self.factory.create(config)
            items = await adapter.fetch(upc=upc, category=category)
        except Exception as e:
            details = self.error_handler.handle_error(
                e, config.id, {"operation": "fetch", "upc": upc, "category": category}
            )
            return WarehouseFetchResult(warehouse_id=config.id, error=details)

        return WarehouseFetchResult(warehouse_id=config.id, items=items)
