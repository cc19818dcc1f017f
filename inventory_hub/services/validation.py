"""
Validation of inbound transfer and warehouse-registration payloads.

Payloads are plain dicts as an HTTP layer would hand them over; the validators
turn them into domain objects or raise ``ValidationError`` with a message that
can be shown to the caller.
"""
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from inventory_hub.core.exceptions import ValidationError
from inventory_hub.core.logging import get_logger
from inventory_hub.domain.models.transfer import TransferRequest, TransferRule
from inventory_hub.domain.models.warehouse import WarehouseConfig
from inventory_hub.services.warehouse_registry import WarehouseRegistry
from inventory_hub.utils.query import validate_upc

logger = get_logger(__name__)

VALID_RULES = [rule.value for rule in TransferRule]


class TransferRequestValidator:
    def __init__(self,
                 registry: WarehouseRegistry,
                 strict_rules: bool = True,
                 strict_registration: bool = True):
        self.registry = registry
        self.strict_rules = strict_rules
        self.strict_registration = strict_registration

    def validate_transfer_request(self, payload: Mapping[str, Any]) -> TransferRequest:
        """
        Validate a transfer payload with keys ``from`` (optional), ``to``,
        ``UPC`` (or ``upc``), ``quantity`` and ``rule``.

        Raises:
            ValidationError: On a missing field, unknown warehouse, identical
                source and destination, bad UPC, non-positive quantity or, in
                strict mode, an unknown rule
        """
        source = self._optional_str(payload.get("from"))
        destination = self._optional_str(payload.get("to"))
        upc = self._optional_str(payload.get("UPC", payload.get("upc")))
        quantity = payload.get("quantity")
        rule = self._optional_str(payload.get("rule")) or TransferRule.CHEAPEST.value

        missing = [name for name, value in (("to", destination), ("UPC", upc), ("quantity", quantity))
                   if value is None]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}.",
                context={"missing": missing}
            )

        valid_warehouses = self.registry.ids()
        if destination not in self.registry:
            raise ValidationError(
                f"Invalid destination warehouse ID. Valid options are: {', '.join(valid_warehouses)}.",
                field="to",
                context={"valid_options": valid_warehouses}
            )

        if source is not None:
            if source not in self.registry:
                raise ValidationError(
                    f"Invalid source warehouse ID. Valid options are: {', '.join(valid_warehouses)}.",
                    field="from",
                    context={"valid_options": valid_warehouses}
                )
            if source == destination:
                raise ValidationError("Source and destination warehouses must be different.", field="from")

        validate_upc(upc)

        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Quantity must be a positive integer.", field="quantity")

        rule = rule.lower()
        if rule not in VALID_RULES:
            if self.strict_rules:
                raise ValidationError(
                    f"Invalid rule. Valid options are: {', '.join(VALID_RULES)}.",
                    field="rule",
                    context={"valid_options": VALID_RULES}
                )
            logger.debug(f"Accepting unknown rule {rule!r}; strategy defaults to cheapest")

        return TransferRequest(to=destination, upc=upc, quantity=quantity, rule=rule, from_=source)

    def validate_warehouse_registration(self, payload: Mapping[str, Any]) -> WarehouseConfig:
        """
        Validate a warehouse registration payload.

        Raises:
            ValidationError: On a missing or malformed field, or a duplicate id
                while strict registration is on
        """
        missing = [name for name in ("id", "name", "location", "api") if not payload.get(name)]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}.",
                context={"missing": missing}
            )

        try:
            config = WarehouseConfig.model_validate(dict(payload))
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid warehouse configuration.",
                context={"errors": self._error_fields(e.errors(include_url=False))}
            )

        if self.strict_registration and config.id in self.registry:
            raise ValidationError(f"Warehouse with ID {config.id} already exists.", field="id")

        return config

    @staticmethod
    def _optional_str(value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def _error_fields(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
        return [
            {"field": ".".join(str(part) for part in error.get("loc", ())), "message": error.get("msg", "")}
            for error in errors
        ]
