"""
Adapters for third-party partner warehouses.

Partners are read-only: stock deductions are logged but never sent, and any
failure while reading degrades to an empty result so one unavailable partner
cannot fail an aggregate query.
"""
from abc import abstractmethod
from typing import Any, List, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PayloadValidationError

from inventory_hub.adapters.interfaces.connector import APIConnector, HttpMethod
from inventory_hub.adapters.interfaces.warehouse import WarehouseAdapter
from inventory_hub.core.constants import (
    DEFAULT_ITEM_TRANSFER_TIME,
    PARTNER_B_INVENTORY_PATH,
    PARTNER_B_LOOKUP_PATH,
    PARTNER_C_ITEMS_PATH,
    TYPE_PARTNER_B,
    TYPE_PARTNER_C,
)
from inventory_hub.core.exceptions import IntegrationException
from inventory_hub.core.logging import get_logger
from inventory_hub.domain.models.inventory import NormalizedInventoryItem, PartnerBItem, PartnerCItem
from inventory_hub.domain.models.warehouse import WarehouseConfig
from inventory_hub.utils.category import CategoryClassifier

logger = get_logger(__name__)

_SKU_LIST = TypeAdapter(List[str])
_B_ITEMS = TypeAdapter(List[PartnerBItem])
_C_ITEMS = TypeAdapter(List[PartnerCItem])


class PartnerWarehouseAdapter(WarehouseAdapter):
    """Shared behaviour of read-only partner adapters."""

    warehouse_type: str = ""

    def __init__(self, config: WarehouseConfig, connector: APIConnector):
        super().__init__(config)
        self.connector = connector

    async def fetch(self,
                    upc: Optional[str] = None,
                    category: Optional[str] = None) -> List[NormalizedInventoryItem]:
        # Partner protocols are keyed by UPC
        if not upc or not self.config.api.base_url:
            return []
        if not self.connector.validate_url(self.config.api.base_url):
            logger.warning(f"Warehouse {self.warehouse_id} has an invalid base URL: {self.config.api.base_url}")
            return []

        try:
            items = await self._fetch_remote(upc)
        except (IntegrationException, PayloadValidationError) as e:
            logger.warning(
                f"Failed to fetch inventory from warehouse {self.warehouse_id} for UPC {upc}: {str(e)}",
                extra={"warehouse_id": self.warehouse_id, "upc": upc}
            )
            return []

        if category:
            wanted = category.lower()
            items = [item for item in items if item.category == wanted]
        return items

    async def apply_delta(self, upc: str, delta: int) -> int:
        # No write access to partner systems
        logger.info(
            f"External API call would be made to update warehouse {self.warehouse_id} "
            f"inventory for UPC {upc}, changing by {delta} units"
        )
        return 0

    @property
    def baseline_transfer_time(self) -> float:
        return self.config.api.default_transfer_time or DEFAULT_ITEM_TRANSFER_TIME[self.warehouse_type]

    @abstractmethod
    async def _fetch_remote(self, upc: str) -> List[NormalizedInventoryItem]:
        """Call the partner API and normalize its records."""


class PartnerTypeBAdapter(PartnerWarehouseAdapter):
    """
    Two-step partner protocol.

    ``POST {base}{lookup}/{upc}`` resolves the UPC into SKUs, then
    ``GET {base}{inventory}/{sku}`` returns the stock records of each SKU.
    """

    warehouse_type = TYPE_PARTNER_B

    async def _fetch_remote(self, upc: str) -> List[NormalizedInventoryItem]:
        api = self.config.api
        lookup_url = self.connector.build_url(
            api.base_url, api.endpoint("lookup", PARTNER_B_LOOKUP_PATH), upc
        )
        skus = _SKU_LIST.validate_python(await self.connector.request(HttpMethod.POST, lookup_url))

        items: List[NormalizedInventoryItem] = []
        for sku in skus:
            inventory_url = self.connector.build_url(
                api.base_url, api.endpoint("inventory", PARTNER_B_INVENTORY_PATH), sku
            )
            records = _B_ITEMS.validate_python(
                await self.connector.request(HttpMethod.GET, inventory_url)
            )
            items.extend(self._normalize(upc, record) for record in records)

        logger.debug(f"Warehouse {self.warehouse_id} returned {len(items)} items for {len(skus)} SKUs")
        return items

    def _normalize(self, upc: str, record: PartnerBItem) -> NormalizedInventoryItem:
        return NormalizedInventoryItem(
            source=self.warehouse_id,
            upc=upc,
            category=CategoryClassifier.get_category_from_label(record.label),
            name=record.label,
            quantity=record.stock,
            location_details={
                "sku": record.sku,
                "coords": list(record.coords),
                "mileageCostPerMile": record.mileage_cost_per_mile,
            },
            transfer_cost=record.mileage_cost_per_mile,
            transfer_time=self.baseline_transfer_time,
        )


class PartnerTypeCAdapter(PartnerWarehouseAdapter):
    """One-step partner protocol: ``GET {base}{items}?upc={upc}``."""

    warehouse_type = TYPE_PARTNER_C

    async def _fetch_remote(self, upc: str) -> List[NormalizedInventoryItem]:
        api = self.config.api
        items_url = self.connector.build_url(api.base_url, api.endpoint("items", PARTNER_C_ITEMS_PATH))
        payload: Any = await self.connector.request(HttpMethod.GET, items_url, params={"upc": upc})
        return [self._normalize(record) for record in _C_ITEMS.validate_python(payload)]

    def _normalize(self, record: PartnerCItem) -> NormalizedInventoryItem:
        return NormalizedInventoryItem(
            source=self.warehouse_id,
            upc=record.upc,
            category=CategoryClassifier.get_category_from_label(record.desc),
            name=record.desc,
            quantity=record.qty,
            location_details={
                "position": record.position.model_dump(),
                "transfer_fee_mile": record.transfer_fee_mile,
            },
            transfer_cost=record.transfer_fee_mile,
            transfer_time=self.baseline_transfer_time,
        )
