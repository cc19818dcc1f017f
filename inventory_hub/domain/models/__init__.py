from inventory_hub.domain.models.inventory import (
    InternalInventoryItem,
    NormalizedInventoryItem,
    PartnerBItem,
    PartnerCItem,
    PartnerCPosition,
)
from inventory_hub.domain.models.transfer import (
    TransferOutcome,
    TransferRequest,
    TransferResult,
    TransferRule,
)
from inventory_hub.domain.models.warehouse import (
    WarehouseApiConfig,
    WarehouseConfig,
    WarehouseLocation,
    WarehouseType,
)

__all__ = [
    "InternalInventoryItem",
    "NormalizedInventoryItem",
    "PartnerBItem",
    "PartnerCItem",
    "PartnerCPosition",
    "TransferOutcome",
    "TransferRequest",
    "TransferResult",
    "TransferRule",
    "WarehouseApiConfig",
    "WarehouseConfig",
    "WarehouseLocation",
    "WarehouseType",
]
