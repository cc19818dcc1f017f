"""Pytest fixtures shared across the Inventory Hub test-suite."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from inventory_hub.adapters.factory import AdapterFactory
from inventory_hub.adapters.implementations.http_connector import HttpxConnector
from inventory_hub.adapters.interfaces.connector import RequestConfig
from inventory_hub.adapters.interfaces.warehouse import WarehouseAdapter
from inventory_hub.core.config import Settings
from inventory_hub.domain.models.inventory import NormalizedInventoryItem
from inventory_hub.domain.models.warehouse import WarehouseConfig
from inventory_hub.infrastructure.store.memory_store import MemoryInventoryStore

LA = {"lat": 34.0522, "long": -118.2437}
NYC = {"lat": 40.7128, "long": -74.006}
CT = {"lat": 41.2, "long": -73.7}


def make_config(warehouse_id: str, warehouse_type: str, location: Dict[str, float],
                **api: Any) -> WarehouseConfig:
    """Build a WarehouseConfig from the camelCase document shape."""
    return WarehouseConfig.model_validate({
        "id": warehouse_id,
        "name": f"Warehouse {warehouse_id}",
        "location": location,
        "api": {"type": warehouse_type, **api},
    })


def make_item(source: str, upc: str = "12345678", quantity: int = 10,
              transfer_cost: float = 0.5, transfer_time: float = 1.0,
              name: str = "Super Widget") -> NormalizedInventoryItem:
    return NormalizedInventoryItem(
        source=source,
        upc=upc,
        category="widgets",
        name=name,
        quantity=quantity,
        location_details={},
        transfer_cost=transfer_cost,
        transfer_time=transfer_time,
    )


class StaticWarehouseAdapter(WarehouseAdapter):
    """Adapter serving a fixed list of items and recording deductions."""

    def __init__(self, config: WarehouseConfig, items: Optional[List[NormalizedInventoryItem]] = None,
                 error: Optional[Exception] = None):
        super().__init__(config)
        self.items = items or []
        self.error = error
        self.deltas: List[tuple] = []

    async def fetch(self, upc=None, category=None):
        if self.error is not None:
            raise self.error
        return [
            item for item in self.items
            if (not upc or item.upc == upc) and (not category or item.category == category)
        ]

    async def apply_delta(self, upc, delta):
        self.deltas.append((upc, delta))
        return delta


class StubAdapterFactory:
    """Hands out pre-built adapters by warehouse id."""

    def __init__(self, adapters: Dict[str, WarehouseAdapter]):
        self.adapters = adapters

    def create(self, config: WarehouseConfig) -> WarehouseAdapter:
        return self.adapters[config.id]


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload),
                          headers={"content-type": "application/json"})


def partner_b_routes(skus: Dict[str, List[str]],
                     records: Dict[str, List[Dict[str, Any]]]) -> Callable[[httpx.Request], httpx.Response]:
    """MockTransport handler speaking the type B lookup / inventory protocol."""

    def handler(request: httpx.Request) -> httpx.Response:
        parts = request.url.path.strip("/").split("/")
        if request.method == "POST" and parts[0] == "lookup":
            return json_response(skus.get(parts[1], []))
        if request.method == "GET" and parts[0] == "inventory":
            return json_response(records.get(parts[1], []))
        return httpx.Response(404)

    return handler


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        LOG_LEVEL="DEBUG",
        MAX_RETRIES=0,
        DEFAULT_TIMEOUT=1.0,
        SEED_INTERNAL_INVENTORY=False,
    )


@pytest.fixture
def no_retry() -> RequestConfig:
    return RequestConfig(max_retries=0, timeout=1.0)


@pytest.fixture
def connector_factory(no_retry) -> Callable[[Callable[[httpx.Request], httpx.Response]], HttpxConnector]:
    """Builds an HttpxConnector whose client is backed by an httpx.MockTransport."""

    def build(handler: Callable[[httpx.Request], httpx.Response]) -> HttpxConnector:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpxConnector(client=client, config=no_retry)

    return build


@pytest.fixture
def store() -> MemoryInventoryStore:
    return MemoryInventoryStore([
        {"upc": "12345678", "category": "widgets", "name": "Super Widget", "quantity": 15},
        {"upc": "87654321", "category": "gadgets", "name": "Ultra Gadget", "quantity": 5},
    ])


@pytest.fixture
def internal_config() -> WarehouseConfig:
    return make_config("A", "internal", LA, defaultTransferCost=0.2, defaultTransferTime=1)


@pytest.fixture
def partner_b_config() -> WarehouseConfig:
    return make_config("B", "partner-b", NYC, baseUrl="http://b.api",
                       endpoints={"lookup": "/lookup", "inventory": "/inventory"})


@pytest.fixture
def partner_c_config() -> WarehouseConfig:
    return make_config("C", "partner-c", CT, baseUrl="http://c.api", endpoints={"items": "/api/items"})


@pytest.fixture
def adapter_factory(store) -> AdapterFactory:
    return AdapterFactory(store=store)
