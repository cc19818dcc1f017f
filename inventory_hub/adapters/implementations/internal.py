from typing import Any, Dict, List, Optional

from inventory_hub.adapters.interfaces.warehouse import InventoryStore, WarehouseAdapter
from inventory_hub.core.constants import DEFAULT_ITEM_TRANSFER_TIME, FALLBACK_COST_PER_MILE, TYPE_INTERNAL
from inventory_hub.core.logging import get_logger
from inventory_hub.domain.models.inventory import InternalInventoryItem, NormalizedInventoryItem
from inventory_hub.domain.models.warehouse import WarehouseConfig

logger = get_logger(__name__)


class InternalWarehouseAdapter(WarehouseAdapter):
    """Adapter for warehouses backed by our own inventory store."""

    def __init__(self, config: WarehouseConfig, store: InventoryStore):
        super().__init__(config)
        self.store = store

    async def fetch(self,
                    upc: Optional[str] = None,
                    category: Optional[str] = None) -> List[NormalizedInventoryItem]:
        rows = await self.store.fetch_all()

        if upc:
            rows = [row for row in rows if row.upc == upc]
        if category:
            wanted = category.lower()
            rows = [row for row in rows if row.category.lower() == wanted]

        return [self._normalize(row) for row in rows]

    async def apply_delta(self, upc: str, delta: int) -> int:
        actual = await self.store.apply_delta(upc, delta)
        if actual != delta:
            logger.warning(
                f"Warehouse {self.warehouse_id}: requested change {delta} for UPC {upc} "
                f"was clamped to {actual}"
            )
        else:
            logger.info(f"Warehouse {self.warehouse_id}: applied change {actual} to UPC {upc}")
        return actual

    def get_capabilities(self) -> Dict[str, Any]:
        capabilities = super().get_capabilities()
        capabilities.update({"writes": True, "requires_upc": False})
        return capabilities

    def _normalize(self, row: InternalInventoryItem) -> NormalizedInventoryItem:
        api = self.config.api
        return NormalizedInventoryItem(
            source=self.warehouse_id,
            upc=row.upc,
            category=row.category,
            name=row.name,
            quantity=row.quantity,
            location_details={"coords": [self.config.location.lat, self.config.location.long]},
            transfer_cost=api.default_transfer_cost or FALLBACK_COST_PER_MILE[TYPE_INTERNAL],
            transfer_time=api.default_transfer_time or DEFAULT_ITEM_TRANSFER_TIME[TYPE_INTERNAL],
        )
