from typing import List, Optional

from inventory_hub.adapters.implementations.internal import InternalWarehouseAdapter
from inventory_hub.adapters.implementations.partner import PartnerWarehouseAdapter
from inventory_hub.adapters.interfaces.connector import APIConnector
from inventory_hub.adapters.interfaces.warehouse import InventoryStore, WarehouseAdapter
from inventory_hub.adapters.registry import AdaptorRegistry
from inventory_hub.core.exceptions import ConfigurationError
from inventory_hub.core.logging import get_logger
from inventory_hub.domain.models.warehouse import WarehouseConfig

logger = get_logger(__name__)


class AdapterFactory:
    """
    Factory for creating warehouse adapter instances.
    Uses a registry to instantiate the appropriate adapter based on the
    warehouse's API type.
    """

    def __init__(
        self,
        store: Optional[InventoryStore] = None,
        connector: Optional[APIConnector] = None,
        registry: Optional[AdaptorRegistry] = None
    ):
        """
        Initialize the adapter factory.

        Args:
            store: Store backing internal warehouses
            connector: Transport shared by partner adapters
            registry: Optional registry of adapter classes; defaults to the
                built-in internal and partner adapters
        """
        self.store = store
        self.connector = connector
        self.registry = registry or AdaptorRegistry.with_builtin_adaptors()
        logger.debug("Initialized AdapterFactory")

    def create(self, config: WarehouseConfig) -> WarehouseAdapter:
        """
        Create the adapter serving a registered warehouse.

        Args:
            config: Registry entry of the warehouse

        Returns:
            An adapter instance for the warehouse

        Raises:
            ConfigurationError: If the warehouse type is unknown or a required
                collaborator (store or connector) was not injected
        """
        adaptor_type = config.api.type
        adaptor_class = self.registry.get(adaptor_type)

        if adaptor_class is None:
            logger.error(f"Unknown warehouse API type '{adaptor_type}' for warehouse {config.id}")
            raise ConfigurationError(
                f"Unknown warehouse API type: {adaptor_type}",
                context={"warehouse_id": config.id, "type": adaptor_type}
            )

        if issubclass(adaptor_class, InternalWarehouseAdapter):
            if self.store is None:
                raise ConfigurationError(
                    "Inventory store required for internal warehouse",
                    context={"warehouse_id": config.id}
                )
            return adaptor_class(config, self.store)

        if issubclass(adaptor_class, PartnerWarehouseAdapter):
            if self.connector is None:
                raise ConfigurationError(
                    "API connector required for partner warehouse",
                    context={"warehouse_id": config.id}
                )
            return adaptor_class(config, self.connector)

        return adaptor_class(config)

    def get_adaptor_types(self) -> List[str]:
        """
        List all available warehouse types.

        Returns:
            List of registered type tags
        """
        return self.registry.list()
