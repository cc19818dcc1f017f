"""
Interfaces package for the adapter layer.

Abstract contracts shared by every warehouse adapter and by the transport
used to reach partner warehouses.
"""

from .warehouse import WarehouseAdapter, InventoryStore
from .connector import APIConnector, HttpMethod, RequestConfig

__all__ = [
    # Warehouse adapter interface
    'WarehouseAdapter',
    'InventoryStore',

    # Connector interface
    'APIConnector',
    'HttpMethod',
    'RequestConfig',
]
