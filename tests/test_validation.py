"""Tests for transfer and registration payload validation."""

import pytest

from inventory_hub.core.exceptions import ValidationError
from inventory_hub.services.validation import TransferRequestValidator
from inventory_hub.services.warehouse_registry import WarehouseRegistry


@pytest.fixture
def validator():
    return TransferRequestValidator(WarehouseRegistry.with_defaults())


def test_valid_payload_becomes_request(validator):
    request = validator.validate_transfer_request(
        {"from": "A", "to": "B", "UPC": "12345678", "quantity": 5, "rule": "Fastest"}
    )

    assert request.from_ == "A"
    assert request.to == "B"
    assert request.upc == "12345678"
    assert request.quantity == 5
    assert request.rule == "fastest"
    assert request.auto_select is False


def test_missing_source_means_auto_select(validator):
    request = validator.validate_transfer_request({"to": "C", "upc": "12345678", "quantity": 1})

    assert request.auto_select is True
    assert request.rule == "cheapest"


def test_missing_fields_are_listed(validator):
    with pytest.raises(ValidationError) as exc_info:
        validator.validate_transfer_request({"to": "B"})
    assert exc_info.value.context["missing"] == ["UPC", "quantity"]


@pytest.mark.parametrize("payload, field", [
    ({"to": "Z", "UPC": "12345678", "quantity": 1}, "to"),
    ({"from": "Z", "to": "B", "UPC": "12345678", "quantity": 1}, "from"),
    ({"from": "B", "to": "B", "UPC": "12345678", "quantity": 1}, "from"),
    ({"to": "B", "UPC": "1234", "quantity": 1}, "upc"),
    ({"to": "B", "UPC": "12345678", "quantity": 0}, "quantity"),
    ({"to": "B", "UPC": "12345678", "quantity": "5"}, "quantity"),
    ({"to": "B", "UPC": "12345678", "quantity": True}, "quantity"),
    ({"to": "B", "UPC": "12345678", "quantity": 1, "rule": "teleport"}, "rule"),
])
def test_invalid_payloads(validator, payload, field):
    with pytest.raises(ValidationError) as exc_info:
        validator.validate_transfer_request(payload)
    assert exc_info.value.context["field"] == field


def test_unknown_warehouse_lists_valid_options(validator):
    with pytest.raises(ValidationError) as exc_info:
        validator.validate_transfer_request({"to": "Z", "UPC": "12345678", "quantity": 1})
    assert exc_info.value.detail == "Invalid destination warehouse ID. Valid options are: A, B, C."


def test_lenient_rules_pass_unknown_rule_through():
    validator = TransferRequestValidator(WarehouseRegistry.with_defaults(), strict_rules=False)

    request = validator.validate_transfer_request({"to": "B", "UPC": "12345678", "quantity": 1, "rule": "teleport"})

    assert request.rule == "teleport"


def test_registration_payload_is_validated(validator):
    config = validator.validate_warehouse_registration({
        "id": "D",
        "name": "Warehouse D",
        "location": {"lat": 47.6, "long": -122.3},
        "api": {"type": "partner-c", "baseUrl": "http://d.api"},
    })

    assert config.id == "D"
    assert config.api.base_url == "http://d.api"


def test_registration_rejects_missing_fields(validator):
    with pytest.raises(ValidationError) as exc_info:
        validator.validate_warehouse_registration({"id": "D", "name": "Warehouse D"})
    assert exc_info.value.context["missing"] == ["location", "api"]


def test_registration_rejects_malformed_location(validator):
    with pytest.raises(ValidationError) as exc_info:
        validator.validate_warehouse_registration({
            "id": "D", "name": "Warehouse D", "location": {"lat": "north"}, "api": {"type": "internal"},
        })
    assert exc_info.value.context["errors"]


def test_duplicate_registration_depends_on_strictness():
    payload = {"id": "A", "name": "Again", "location": {"lat": 0, "long": 0}, "api": {"type": "internal"}}

    with pytest.raises(ValidationError):
        TransferRequestValidator(WarehouseRegistry.with_defaults()).validate_warehouse_registration(payload)

    lenient = TransferRequestValidator(WarehouseRegistry.with_defaults(), strict_registration=False)
    assert lenient.validate_warehouse_registration(payload).name == "Again"
