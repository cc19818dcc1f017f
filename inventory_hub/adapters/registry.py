from typing import Dict, List, Optional, Type

from inventory_hub.adapters.interfaces.warehouse import WarehouseAdapter
from inventory_hub.core.logging import get_logger

logger = get_logger(__name__)


class AdaptorRegistry:
    """
    Maps warehouse type tags (``config.api.type``) to adapter classes.

    Supporting a new warehouse style means registering one more tag here; the
    aggregator and the orchestrator stay unchanged.
    """

    def __init__(self):
        self._classes: Dict[str, Type[WarehouseAdapter]] = {}

    def register(self, warehouse_type: str, adaptor_class: Type[WarehouseAdapter]) -> None:
        """
        Bind a type tag to an adapter class.

        Raises:
            ValueError: If the tag is empty or taken, or the class is not a
                WarehouseAdapter
        """
        if not isinstance(warehouse_type, str) or not warehouse_type:
            raise ValueError("Warehouse type tag must be a non-empty string")
        if not (isinstance(adaptor_class, type) and issubclass(adaptor_class, WarehouseAdapter)):
            raise ValueError(f"{adaptor_class!r} is not a WarehouseAdapter subclass")
        if warehouse_type in self._classes:
            raise ValueError(f"Warehouse type '{warehouse_type}' already has an adapter")

        self._classes[warehouse_type] = adaptor_class
        logger.debug(f"Adapter {adaptor_class.__name__} registered for type '{warehouse_type}'")

    def get(self, warehouse_type: str) -> Optional[Type[WarehouseAdapter]]:
        return self._classes.get(warehouse_type)

    def list(self) -> List[str]:
        """Registered type tags in registration order."""
        return list(self._classes)

    def is_registered(self, warehouse_type: str) -> bool:
        return warehouse_type in self._classes

    def clear(self) -> None:
        self._classes.clear()

    @classmethod
    def with_builtin_adaptors(cls) -> "AdaptorRegistry":
        """Registry pre-populated with the internal and partner adapters."""
        from inventory_hub.adapters.implementations import ADAPTOR_IMPLEMENTATIONS

        registry = cls()
        for warehouse_type, adaptor_class in ADAPTOR_IMPLEMENTATIONS.items():
            registry.register(warehouse_type, adaptor_class)
        return registry
