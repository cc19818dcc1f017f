import threading
from typing import Any, Dict, Iterable, List, Optional

from inventory_hub.adapters.interfaces.warehouse import InventoryStore
from inventory_hub.core.exceptions import NotFoundError
from inventory_hub.core.logging import get_logger
from inventory_hub.domain.models.inventory import InternalInventoryItem

logger = get_logger(__name__)


class MemoryInventoryStore(InventoryStore):
    """In-memory implementation of the InventoryStore interface."""

    def __init__(self, rows: Optional[Iterable[Any]] = None):
        """
        Initialize the store.

        Args:
            rows: Initial rows, as ``InternalInventoryItem`` or plain dicts
        """
        self._items: Dict[str, InternalInventoryItem] = {}

        # Lock for thread safety
        self._lock = threading.RLock()

        for row in rows or []:
            self.upsert(row)

        logger.info(f"In-memory inventory store initialized with {len(self._items)} rows")

    def upsert(self, row: Any) -> InternalInventoryItem:
        """Insert or replace the row for a UPC."""
        item = row if isinstance(row, InternalInventoryItem) else InternalInventoryItem.model_validate(row)
        with self._lock:
            self._items[item.upc] = item.model_copy()
        return item

    async def fetch_all(self) -> List[InternalInventoryItem]:
        with self._lock:
            return [item.model_copy() for item in self._items.values()]

    async def apply_delta(self, upc: str, delta: int) -> int:
        with self._lock:
            item = self._items.get(upc)
            if item is None:
                raise NotFoundError(
                    "inventory item",
                    upc,
                    detail=f"Item with UPC {upc} not found in internal inventory."
                )

            # A deduction larger than the stock only removes what is there
            actual = max(delta, -item.quantity) if delta < 0 else delta
            item.quantity += actual

        logger.debug(f"UPC {upc}: requested {delta}, applied {actual}, now {item.quantity}")
        return actual

    def get_quantity(self, upc: str) -> Optional[int]:
        """Current quantity for a UPC, or None if it is not stocked."""
        with self._lock:
            item = self._items.get(upc)
            return item.quantity if item else None
