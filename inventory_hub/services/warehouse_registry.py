from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from inventory_hub.core.constants import DEFAULT_WAREHOUSE_CONFIGS
from inventory_hub.core.exceptions import ConfigurationError
from inventory_hub.core.logging import get_logger
from inventory_hub.domain.models.warehouse import WarehouseConfig

logger = get_logger(__name__)


class WarehouseRegistry:
    """
    In-memory map of warehouse id to configuration.

    Lookups never raise; a missing warehouse is reported as ``None`` or
    ``False``. Registering an id that already exists replaces the entry in
    place and keeps its position in ``list()``.
    """

    def __init__(self, configs: Optional[Iterable[WarehouseConfig]] = None):
        self._warehouses: Dict[str, WarehouseConfig] = {}
        for config in configs or []:
            self.register(config)

    def register(self, config: WarehouseConfig) -> None:
        """Insert or overwrite the warehouse with ``config.id``."""
        replaced = config.id in self._warehouses
        self._warehouses[config.id] = config
        logger.info(
            f"{'Updated' if replaced else 'Registered'} warehouse {config.id} "
            f"({config.api.type})"
        )

    def unregister(self, warehouse_id: str) -> bool:
        """Remove a warehouse; returns False if it was not registered."""
        if self._warehouses.pop(warehouse_id, None) is None:
            return False
        logger.info(f"Unregistered warehouse {warehouse_id}")
        return True

    def get(self, warehouse_id: str) -> Optional[WarehouseConfig]:
        return self._warehouses.get(warehouse_id)

    def has(self, warehouse_id: str) -> bool:
        return warehouse_id in self._warehouses

    def list(self) -> List[WarehouseConfig]:
        """All warehouses in registration order."""
        return list(self._warehouses.values())

    def ids(self) -> List[str]:
        return list(self._warehouses.keys())

    def summaries(self) -> List[Dict[str, Any]]:
        return [config.summary() for config in self._warehouses.values()]

    def __len__(self) -> int:
        return len(self._warehouses)

    def __contains__(self, warehouse_id: object) -> bool:
        return warehouse_id in self._warehouses

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "WarehouseRegistry":
        """
        Build a registry from a bootstrap document ``{"warehouses": [...]}``.

        Raises:
            ConfigurationError: If the document has no ``warehouses`` list or an
                entry is malformed
        """
        entries = payload.get("warehouses") if isinstance(payload, Mapping) else None
        if not isinstance(entries, list):
            raise ConfigurationError('Invalid warehouse configuration: missing "warehouses" array')

        try:
            configs = [WarehouseConfig.model_validate(entry) for entry in entries]
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid warehouse configuration: {e.error_count()} validation error(s)",
                context={"errors": e.errors(include_url=False)}
            )

        logger.info(f"Loaded {len(configs)} warehouses from configuration")
        return cls(configs)

    @classmethod
    def with_defaults(cls) -> "WarehouseRegistry":
        """Registry holding the built-in warehouses A, B and C."""
        return cls.from_payload({"warehouses": DEFAULT_WAREHOUSE_CONFIGS})
