"""
Per-mile cost and transfer-time models.

Both models resolve their rate in tiers, first match wins: values carried by
the item, then the warehouse configuration, then a fallback for the
warehouse's type, then a generic default.
"""
from typing import Optional

from inventory_hub.core.constants import (
    CONFIGURED_TIME_SPEED_MPH,
    FALLBACK_COST_PER_MILE,
    FALLBACK_TIME_PROFILE,
    GENERIC_COST_PER_MILE,
    GENERIC_SPEED_MPH,
)
from inventory_hub.domain.models.inventory import NormalizedInventoryItem
from inventory_hub.services.warehouse_registry import WarehouseRegistry


class CostModel:
    """Transfer cost = distance × per-mile rate."""

    def __init__(self, registry: WarehouseRegistry):
        self.registry = registry

    def cost(self, warehouse_id: str, distance: float,
             item: Optional[NormalizedInventoryItem] = None) -> float:
        return distance * self.cost_per_mile(warehouse_id, item)

    def cost_per_mile(self, warehouse_id: str,
                      item: Optional[NormalizedInventoryItem] = None) -> float:
        # A zero rate on the item counts as "not provided"
        if item is not None and item.transfer_cost:
            return item.transfer_cost

        config = self.registry.get(warehouse_id)
        if config is None:
            return GENERIC_COST_PER_MILE

        if config.api.default_transfer_cost:
            return config.api.default_transfer_cost

        return FALLBACK_COST_PER_MILE.get(config.api.type, GENERIC_COST_PER_MILE)


class TimeModel:
    """Transfer time = base hours + distance / assumed speed."""

    def __init__(self, registry: WarehouseRegistry):
        self.registry = registry

    def time(self, warehouse_id: str, distance: float) -> float:
        config = self.registry.get(warehouse_id)
        if config is None:
            return distance / GENERIC_SPEED_MPH

        if config.api.default_transfer_time:
            return config.api.default_transfer_time + distance / CONFIGURED_TIME_SPEED_MPH

        profile = FALLBACK_TIME_PROFILE.get(config.api.type)
        if profile is None:
            return distance / GENERIC_SPEED_MPH

        base_hours, speed_mph = profile
        return base_hours + distance / speed_mph
