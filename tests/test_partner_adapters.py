"""Tests for the partner warehouse adapters and the httpx connector."""

import httpx
import pytest

from inventory_hub.adapters.implementations.http_connector import HttpxConnector
from inventory_hub.adapters.implementations.partner import PartnerTypeBAdapter, PartnerTypeCAdapter
from inventory_hub.adapters.interfaces.connector import HttpMethod, RequestConfig
from inventory_hub.core.exceptions import IntegrationException
from tests.conftest import NYC, json_response, make_config, partner_b_routes

UPC = "12345678"

B_RECORDS = {
    "SKU-1": [{"sku": "SKU-1", "label": "Super Widget", "stock": 8,
               "coords": [40.7128, -74.006], "mileageCostPerMile": 0.7}],
    "SKU-2": [{"sku": "SKU-2", "label": "Widget Refurb", "stock": 2,
               "coords": [40.7128, -74.006], "mileageCostPerMile": 0.9}],
}

C_RECORDS = [
    {"upc": UPC, "desc": "Ultra Gadget", "qty": 4,
     "position": {"lat": 41.2, "long": -73.7}, "transfer_fee_mile": 0.65},
]


@pytest.mark.asyncio
async def test_partner_b_resolves_skus_then_inventory(connector_factory, partner_b_config):
    connector = connector_factory(partner_b_routes({UPC: ["SKU-1", "SKU-2"]}, B_RECORDS))
    adapter = PartnerTypeBAdapter(partner_b_config, connector)

    items = await adapter.fetch(upc=UPC)

    assert [item.quantity for item in items] == [8, 2]
    first = items[0]
    assert first.source == "B"
    assert first.upc == UPC
    assert first.category == "widgets"
    assert first.transfer_cost == 0.7
    assert first.transfer_time == 1.5
    assert first.location_details == {"sku": "SKU-1", "coords": [40.7128, -74.006], "mileageCostPerMile": 0.7}


@pytest.mark.asyncio
async def test_partner_b_sends_post_lookup(connector_factory, partner_b_config):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, str(request.url)))
        return json_response([])

    adapter = PartnerTypeBAdapter(partner_b_config, connector_factory(handler))
    assert await adapter.fetch(upc=UPC) == []
    assert seen == [("POST", f"http://b.api/lookup/{UPC}")]


@pytest.mark.asyncio
async def test_partner_b_filters_category_after_classification(connector_factory, partner_b_config):
    connector = connector_factory(partner_b_routes({UPC: ["SKU-1"]}, B_RECORDS))
    adapter = PartnerTypeBAdapter(partner_b_config, connector)

    assert await adapter.fetch(upc=UPC, category="gadgets") == []
    assert len(await adapter.fetch(upc=UPC, category="Widgets")) == 1


@pytest.mark.asyncio
async def test_partner_c_single_lookup(connector_factory, partner_c_config):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return json_response(C_RECORDS)

    adapter = PartnerTypeCAdapter(partner_c_config, connector_factory(handler))
    items = await adapter.fetch(upc=UPC)

    assert seen[0].path == "/api/items"
    assert seen[0].params["upc"] == UPC
    assert len(items) == 1
    item = items[0]
    assert item.category == "gadgets"
    assert item.quantity == 4
    assert item.transfer_cost == 0.65
    assert item.transfer_time == 2.5
    assert item.location_details == {"position": {"lat": 41.2, "long": -73.7}, "transfer_fee_mile": 0.65}


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 404, 500, 503])
async def test_non_2xx_degrades_to_empty(connector_factory, partner_c_config, status_code):
    adapter = PartnerTypeCAdapter(partner_c_config, connector_factory(lambda request: httpx.Response(status_code)))
    assert await adapter.fetch(upc=UPC) == []


@pytest.mark.asyncio
async def test_network_error_degrades_to_empty(connector_factory, partner_b_config):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    adapter = PartnerTypeBAdapter(partner_b_config, connector_factory(handler))
    assert await adapter.fetch(upc=UPC) == []


@pytest.mark.asyncio
async def test_timeout_degrades_to_empty(connector_factory, partner_c_config):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    adapter = PartnerTypeCAdapter(partner_c_config, connector_factory(handler))
    assert await adapter.fetch(upc=UPC) == []


@pytest.mark.asyncio
async def test_malformed_payload_degrades_to_empty(connector_factory, partner_c_config):
    adapter = PartnerTypeCAdapter(partner_c_config, connector_factory(lambda request: json_response({"items": 1})))
    assert await adapter.fetch(upc=UPC) == []


@pytest.mark.asyncio
async def test_fetch_without_upc_makes_no_call(connector_factory, partner_b_config):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    adapter = PartnerTypeBAdapter(partner_b_config, connector_factory(handler))
    assert await adapter.fetch(category="widgets") == []


@pytest.mark.asyncio
async def test_fetch_without_base_url_returns_empty(connector_factory):
    config = make_config("B2", "partner-b", NYC)
    adapter = PartnerTypeBAdapter(config, connector_factory(lambda request: json_response(["SKU-1"])))
    assert await adapter.fetch(upc=UPC) == []


@pytest.mark.asyncio
async def test_partner_apply_delta_is_a_no_op(connector_factory, partner_b_config):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("partners are never written to")

    adapter = PartnerTypeBAdapter(partner_b_config, connector_factory(handler))
    assert await adapter.apply_delta(UPC, -5) == 0
    assert adapter.get_capabilities()["writes"] is False


@pytest.mark.asyncio
async def test_connector_retries_retryable_status():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(503)
        return json_response(["SKU-1"])

    connector = HttpxConnector(
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        config=RequestConfig(max_retries=1, backoff_factor=0),
    )

    assert await connector.request(HttpMethod.POST, "http://b.api/lookup/1") == ["SKU-1"]
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_connector_does_not_retry_client_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(404)

    connector = HttpxConnector(
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        config=RequestConfig(max_retries=2, backoff_factor=0),
    )

    with pytest.raises(IntegrationException) as exc_info:
        await connector.request(HttpMethod.GET, "http://c.api/api/items")

    assert exc_info.value.context["remote_status_code"] == 404
    assert len(calls) == 1


def test_build_url_joins_segments():
    connector = HttpxConnector()
    assert connector.build_url("http://b.api/", "/lookup", "123") == "http://b.api/lookup/123"
    assert connector.build_url("http://c.api", "/api/items") == "http://c.api/api/items"


@pytest.mark.asyncio
async def test_fetch_with_invalid_base_url_returns_empty(connector_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    config = make_config("B3", "partner-b", NYC, baseUrl="b-api-without-scheme")
    adapter = PartnerTypeBAdapter(config, connector_factory(handler))
    assert await adapter.fetch(upc=UPC) == []
