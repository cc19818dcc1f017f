"""Tests for the concurrent inventory aggregator and the query service."""

from unittest.mock import MagicMock

import pytest

from inventory_hub.core.exceptions import IntegrationException, NotFoundError, ValidationError
from inventory_hub.infrastructure.error.handler import ErrorCategory, ErrorHandler
from inventory_hub.services.inventory_aggregator import InventoryAggregator
from inventory_hub.services.query_service import InventoryQueryService
from inventory_hub.services.warehouse_registry import WarehouseRegistry
from tests.conftest import CT, LA, NYC, StaticWarehouseAdapter, StubAdapterFactory, make_config, make_item


@pytest.fixture
def configs():
    return [
        make_config("A", "internal", LA),
        make_config("B", "partner-b", NYC, baseUrl="http://b.api"),
        make_config("C", "partner-c", CT, baseUrl="http://c.api"),
    ]


def build_aggregator(configs, adapters, error_handler=None):
    registry = WarehouseRegistry(configs)
    return InventoryAggregator(registry, StubAdapterFactory(adapters), error_handler)


@pytest.mark.asyncio
async def test_one_failing_warehouse_does_not_abort(configs):
    a, b, c = configs
    aggregator = build_aggregator(configs, {
        "A": StaticWarehouseAdapter(a, [make_item("A", quantity=3)]),
        "B": StaticWarehouseAdapter(b, error=RuntimeError("partner exploded")),
        "C": StaticWarehouseAdapter(c, [make_item("C", quantity=7), make_item("C", quantity=1)]),
    })

    items = await aggregator.get_all(upc="12345678")

    assert [(item.source, item.quantity) for item in items] == [("A", 3), ("C", 7), ("C", 1)]
    assert aggregator.failure_counts == {"B": 1}


@pytest.mark.asyncio
async def test_collect_reports_per_warehouse_results(configs):
    a, b, c = configs
    notify = MagicMock()
    handler = ErrorHandler(MagicMock(), notify_callback=notify)
    aggregator = build_aggregator(configs, {
        "A": StaticWarehouseAdapter(a, [make_item("A")]),
        "B": StaticWarehouseAdapter(b, error=IntegrationException("down", context={"remote_status_code": 500})),
        "C": StaticWarehouseAdapter(c, []),
    }, handler)

    report = await aggregator.collect(upc="12345678")

    assert [result.success for result in report.results] == [True, False, True]
    assert report.failed == ["B"]
    assert report.empty == ["C"]
    assert report.results[1].error.category == ErrorCategory.EXTERNAL_API
    notify.assert_called_once()


@pytest.mark.asyncio
async def test_results_follow_registration_order(configs):
    a, b, c = configs
    aggregator = build_aggregator([c, a, b], {
        "A": StaticWarehouseAdapter(a, [make_item("A")]),
        "B": StaticWarehouseAdapter(b, [make_item("B")]),
        "C": StaticWarehouseAdapter(c, [make_item("C")]),
    })

    assert [item.source for item in await aggregator.get_all()] == ["C", "A", "B"]


@pytest.mark.asyncio
async def test_get_from_one_unknown_warehouse(configs):
    aggregator = build_aggregator(configs, {})

    with pytest.raises(NotFoundError):
        await aggregator.get_from_one("Z", upc="12345678")


@pytest.mark.asyncio
async def test_get_from_one_reads_single_adapter(configs):
    a, b, _ = configs
    aggregator = build_aggregator(configs, {
        "A": StaticWarehouseAdapter(a, [make_item("A")]),
        "B": StaticWarehouseAdapter(b, [make_item("B")]),
    })

    items = await aggregator.get_from_one("B", upc="12345678")
    assert [item.source for item in items] == ["B"]


@pytest.mark.asyncio
async def test_query_service_by_upc_and_category(configs):
    a, b, c = configs
    aggregator = build_aggregator(configs, {
        "A": StaticWarehouseAdapter(a, [make_item("A")]),
        "B": StaticWarehouseAdapter(b, []),
        "C": StaticWarehouseAdapter(c, []),
    })
    service = InventoryQueryService(aggregator)

    assert len(await service.get_inventory_by_query("12345678")) == 1
    assert len(await service.get_inventory_by_query("widgets")) == 1

    with pytest.raises(NotFoundError) as exc_info:
        await service.get_inventory_by_query("gadgets")
    assert exc_info.value.detail == 'No items found in category "gadgets".'

    with pytest.raises(NotFoundError) as exc_info:
        await service.get_inventory_from_warehouse_by_query("B", "12345678")
    assert exc_info.value.detail == 'No inventory found for UPC "12345678" in warehouse B.'

    with pytest.raises(ValidationError):
        await service.get_inventory_by_query("  ")
