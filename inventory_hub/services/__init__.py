"""
Services package for the Inventory Hub.

Services coordinate the registry, the warehouse adapters and the pricing
strategies to answer inventory queries and execute transfers.
"""

from inventory_hub.services.calculators import CostModel, TimeModel
from inventory_hub.services.inventory_aggregator import (
    AggregationReport,
    InventoryAggregator,
    WarehouseFetchResult,
)
from inventory_hub.services.query_service import InventoryQueryService
from inventory_hub.services.strategies import (
    CheapestTransferStrategy,
    FastestTransferStrategy,
    StrategyResult,
    TransferStrategy,
    TransferStrategyFactory,
)
from inventory_hub.services.transfer_orchestrator import TransferOrchestrator
from inventory_hub.services.validation import TransferRequestValidator
from inventory_hub.services.warehouse_registry import WarehouseRegistry

__all__ = [
    "AggregationReport",
    "CheapestTransferStrategy",
    "CostModel",
    "FastestTransferStrategy",
    "InventoryAggregator",
    "InventoryQueryService",
    "StrategyResult",
    "TimeModel",
    "TransferOrchestrator",
    "TransferRequestValidator",
    "TransferStrategy",
    "TransferStrategyFactory",
    "WarehouseFetchResult",
    "WarehouseRegistry",
]
