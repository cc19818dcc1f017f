"""
Adapter implementations for each supported warehouse style.
"""

from inventory_hub.adapters.implementations.internal import InternalWarehouseAdapter
from inventory_hub.adapters.implementations.partner import (
    PartnerTypeBAdapter,
    PartnerTypeCAdapter,
    PartnerWarehouseAdapter,
)
from inventory_hub.adapters.implementations.http_connector import HttpxConnector
from inventory_hub.domain.models.warehouse import WarehouseType

# Mapping of warehouse type tags to their implementation classes
ADAPTOR_IMPLEMENTATIONS = {
    WarehouseType.INTERNAL.value: InternalWarehouseAdapter,
    WarehouseType.PARTNER_B.value: PartnerTypeBAdapter,
    WarehouseType.PARTNER_C.value: PartnerTypeCAdapter,
}

__all__ = [
    "InternalWarehouseAdapter",
    "PartnerWarehouseAdapter",
    "PartnerTypeBAdapter",
    "PartnerTypeCAdapter",
    "HttpxConnector",
    "ADAPTOR_IMPLEMENTATIONS",
]
