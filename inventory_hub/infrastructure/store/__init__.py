from inventory_hub.infrastructure.store.memory_store import MemoryInventoryStore

__all__ = ["MemoryInventoryStore"]
