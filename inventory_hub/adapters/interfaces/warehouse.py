from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from inventory_hub.domain.models.inventory import InternalInventoryItem, NormalizedInventoryItem
from inventory_hub.domain.models.warehouse import WarehouseConfig


class WarehouseAdapter(ABC):
    """
    Abstract base interface for warehouse adapters.

    Every warehouse style (internal store, partner APIs) is wrapped by an
    adapter that translates its native inventory shape into
    ``NormalizedInventoryItem`` rows and applies stock deductions.
    """

    def __init__(self, config: WarehouseConfig):
        """
        Initialize the adapter for one registered warehouse.

        Args:
            config: Registry entry for the warehouse this adapter serves
        """
        self.config = config

    @property
    def warehouse_id(self) -> str:
        return self.config.id

    @abstractmethod
    async def fetch(self,
                    upc: Optional[str] = None,
                    category: Optional[str] = None) -> List[NormalizedInventoryItem]:
        """
        Retrieves normalized inventory from the warehouse.

        Args:
            upc: Optional UPC to filter on
            category: Optional category to filter on

        Returns:
            List[NormalizedInventoryItem]: Matching rows, possibly empty. Partner
            adapters return an empty list when the remote call fails.
        """

    @abstractmethod
    async def apply_delta(self, upc: str, delta: int) -> int:
        """
        Applies a signed stock change for a UPC.

        Args:
            upc: UPC whose stock changes
            delta: Requested signed change (negative for a deduction)

        Returns:
            int: The change actually applied. Its magnitude never exceeds
            ``abs(delta)`` and its sign is that of ``delta`` or zero.

        Raises:
            NotFoundError: If the warehouse does not stock the UPC
        """

    def get_capabilities(self) -> Dict[str, Any]:
        """
        Returns the capabilities supported by this adapter.

        Returns:
            Dict[str, Any]: Warehouse style and whether writes reach the warehouse.
        """
        return {
            "type": self.config.api.type,
            "writes": False,
            "requires_upc": True,
        }


class InventoryStore(ABC):
    """Storage backing an internal warehouse."""

    @abstractmethod
    async def fetch_all(self) -> List[InternalInventoryItem]:
        """Return a snapshot of every stored row."""

    @abstractmethod
    async def apply_delta(self, upc: str, delta: int) -> int:
        """
        Change the quantity of ``upc`` by ``delta``.

        Deductions are clamped to the available quantity and the applied change
        is returned.

        Raises:
            NotFoundError: If no row exists for ``upc``
        """
