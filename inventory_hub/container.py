"""
Composition root of the Inventory Hub.

Builds every collaborator once and wires them explicitly; there is no
module-level registry or service locator.
"""
from typing import Any, Iterable, Mapping, Optional

from inventory_hub.adapters.factory import AdapterFactory
from inventory_hub.adapters.implementations.http_connector import HttpxConnector
from inventory_hub.adapters.interfaces.connector import APIConnector, RequestConfig
from inventory_hub.adapters.interfaces.warehouse import InventoryStore
from inventory_hub.core.config import Settings, get_settings
from inventory_hub.core.constants import SEED_INTERNAL_INVENTORY
from inventory_hub.core.exceptions import ValidationError
from inventory_hub.core.logging import get_logger
from inventory_hub.domain.models.transfer import TransferOutcome
from inventory_hub.domain.models.warehouse import WarehouseConfig
from inventory_hub.infrastructure.error.handler import ErrorHandler
from inventory_hub.infrastructure.store.memory_store import MemoryInventoryStore
from inventory_hub.services.calculators import CostModel, TimeModel
from inventory_hub.services.inventory_aggregator import InventoryAggregator
from inventory_hub.services.query_service import InventoryQueryService
from inventory_hub.services.strategies import TransferStrategyFactory
from inventory_hub.services.transfer_orchestrator import TransferOrchestrator
from inventory_hub.services.validation import TransferRequestValidator
from inventory_hub.services.warehouse_registry import WarehouseRegistry

logger = get_logger(__name__)


class Container:
    """Owns the registry, the store, the HTTP connector and the services."""

    def __init__(self,
                 settings: Optional[Settings] = None,
                 configs: Optional[Iterable[WarehouseConfig]] = None,
                 store: Optional[InventoryStore] = None,
                 connector: Optional[APIConnector] = None):
        """
        Args:
            settings: Application settings; defaults to ``get_settings()``
            configs: Warehouses to register; defaults to the built-in A, B and C
            store: Store backing internal warehouses; defaults to an in-memory
                store, seeded when ``SEED_INTERNAL_INVENTORY`` is on
            connector: Transport for partner warehouses; defaults to httpx
        """
        self.settings = settings or get_settings()

        if configs is None:
            self.registry = WarehouseRegistry.with_defaults()
        else:
            self.registry = WarehouseRegistry(configs)

        if store is None:
            store = MemoryInventoryStore(
                SEED_INTERNAL_INVENTORY if self.settings.SEED_INTERNAL_INVENTORY else None
            )
        self.store = store

        self._owns_connector = connector is None
        self.connector = connector or HttpxConnector(
            config=RequestConfig(
                max_retries=self.settings.MAX_RETRIES,
                timeout=self.settings.DEFAULT_TIMEOUT,
                backoff_factor=self.settings.RETRY_BACKOFF_FACTOR,
            )
        )

        self.adapter_factory = AdapterFactory(store=self.store, connector=self.connector)
        self.error_handler = ErrorHandler(get_logger("inventory_hub.failures"))
        self.aggregator = InventoryAggregator(self.registry, self.adapter_factory, self.error_handler)

        self.cost_model = CostModel(self.registry)
        self.time_model = TimeModel(self.registry)
        self.strategy_factory = TransferStrategyFactory(self.cost_model, self.time_model)

        self.validator = TransferRequestValidator(
            self.registry,
            strict_rules=self.settings.STRICT_RULE_VALIDATION,
            strict_registration=self.settings.STRICT_REGISTRATION,
        )
        self.query_service = InventoryQueryService(self.aggregator)
        self.orchestrator = TransferOrchestrator(self.registry, self.aggregator, self.strategy_factory)

        logger.info(f"{self.settings.PROJECT_NAME} initialized with warehouses {self.registry.ids()}")

    def register_warehouse(self, payload: Mapping[str, Any]) -> WarehouseConfig:
        """
        Validate and register a warehouse.

        Raises:
            ValidationError: If the payload is invalid or the id is taken
        """
        config = self.validator.validate_warehouse_registration(payload)
        self.registry.register(config)
        return config

    async def request_transfer(self, payload: Mapping[str, Any]) -> TransferOutcome:
        """Validate a raw transfer payload and execute it."""
        try:
            request = self.validator.validate_transfer_request(payload)
        except ValidationError as e:
            return TransferOutcome(success=False, error=e.to_dict())
        return await self.orchestrator.execute(request)

    async def aclose(self) -> None:
        """Release the HTTP connector if the container created it."""
        if self._owns_connector:
            await self.connector.aclose()
