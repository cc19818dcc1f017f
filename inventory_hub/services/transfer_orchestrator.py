"""
Transfer orchestration: source selection, stock checks and the deduction.

A transfer makes exactly one mutating call, ``apply_delta`` on the source
warehouse's adapter. The destination is not credited.
"""
import asyncio
from collections import Counter, OrderedDict
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Tuple

from inventory_hub.core.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from inventory_hub.core.logging import get_logger, set_correlation_id
from inventory_hub.domain.models.inventory import NormalizedInventoryItem
from inventory_hub.domain.models.transfer import TransferOutcome, TransferRequest, TransferResult
from inventory_hub.domain.models.warehouse import WarehouseConfig
from inventory_hub.services.inventory_aggregator import InventoryAggregator
from inventory_hub.services.strategies import StrategyResult, TransferStrategy, TransferStrategyFactory
from inventory_hub.services.warehouse_registry import WarehouseRegistry
from inventory_hub.utils.distance import distance_between
from inventory_hub.utils.query import upc_not_found_message

logger = get_logger(__name__)


class TransferOrchestrator:
    """Moves stock of one UPC between registered warehouses."""

    def __init__(self,
                 registry: WarehouseRegistry,
                 aggregator: InventoryAggregator,
                 strategy_factory: TransferStrategyFactory):
        self.registry = registry
        self.aggregator = aggregator
        self.strategy_factory = strategy_factory
        # Per-UPC locks, kept only while some transfer holds or awaits one
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Counter = Counter()

    async def execute(self, request: TransferRequest) -> TransferOutcome:
        """
        Run a transfer and report client errors as a failed outcome.

        Validation, not-found and insufficient-stock errors become
        ``TransferOutcome(success=False)``; any other exception, including a
        failure of the deduction itself, propagates.
        """
        try:
            result = await self.transfer(request)
        except (ValidationError, NotFoundError, InsufficientStockError) as e:
            logger.info(f"Transfer rejected: {e.detail}", extra={"error_code": e.code})
            return TransferOutcome(success=False, error=e.to_dict())
        return TransferOutcome(success=True, result=result)

    async def transfer(self, request: TransferRequest) -> TransferResult:
        """
        Validate, pick a source, check stock and deduct.

        Raises:
            ValidationError: Bad quantity or unknown / identical warehouses
            NotFoundError: No warehouse holds the UPC
            InsufficientStockError: The source cannot cover the quantity
        """
        set_correlation_id()
        destination = self._validate(request)
        strategy = self.strategy_factory.create(request.rule)

        # Stock check and deduction must not interleave for the same UPC
        async with self._upc_lock(request.upc):
            items = await self.aggregator.get_all(upc=request.upc)
            if not items:
                raise NotFoundError("inventory", request.upc, detail=upc_not_found_message(request.upc))

            by_source = self._group_by_source(items)

            if request.auto_select:
                source_id = self._select_source(by_source, destination, request.quantity, strategy)
                logger.info(f"Auto-selected warehouse {source_id} as source for UPC {request.upc}")
            else:
                source_id = request.from_

            source_items = by_source.get(source_id, [])
            available = sum(item.quantity for item in source_items)
            if available < request.quantity:
                raise InsufficientStockError(
                    f"Insufficient stock at warehouse {source_id}. Available: {available}.",
                    requested=request.quantity,
                    available=available,
                    warehouse_id=source_id
                )

            source = self.registry.get(source_id)
            if source is None:
                raise NotFoundError("warehouse", source_id, detail=f"Source warehouse {source_id} not found.")

            distance = distance_between(source, destination)
            outcome = strategy.calculate(distance, source_items[0])

            adapter = self.aggregator.adapter_for(source_id)
            actual_delta = await adapter.apply_delta(request.upc, -request.quantity)

        result = TransferResult(
            quantity=request.quantity,
            upc=request.upc,
            source=source_id,
            destination=destination.id,
            distance=distance,
            metric=outcome.metric,
            label=outcome.label,
            rule=strategy.rule.value,
            auto_selected=request.auto_select,
            actual_delta=actual_delta,
        )
        logger.info(
            f"Transfer completed: {result.quantity} units of UPC {result.upc} "
            f"from warehouse {result.source} to {result.destination}. "
            f"Distance: {distance:.2f} miles, rule: {result.rule}, {result.label}"
        )
        return result

    def _validate(self, request: TransferRequest) -> WarehouseConfig:
        if request.quantity <= 0:
            raise ValidationError("Quantity must be a positive integer.", field="quantity")

        destination = self.registry.get(request.to)
        if destination is None:
            raise ValidationError(f"Destination warehouse {request.to} not found.", field="to")

        if request.from_ is not None:
            if not self.registry.has(request.from_):
                raise ValidationError(f"Source warehouse {request.from_} not found.", field="from")
            if request.from_ == request.to:
                raise ValidationError("Source and destination warehouses must be different.", field="from")

        return destination

    @staticmethod
    def _group_by_source(items: List[NormalizedInventoryItem]) -> Dict[str, List[NormalizedInventoryItem]]:
        grouped: Dict[str, List[NormalizedInventoryItem]] = OrderedDict()
        for item in items:
            grouped.setdefault(item.source, []).append(item)
        return grouped

    def _select_source(self,
                       by_source: Dict[str, List[NormalizedInventoryItem]],
                       destination: WarehouseConfig,
                       quantity: int,
                       strategy: TransferStrategy) -> str:
        """
        Pick the candidate with the lowest metric among warehouses that hold
        at least ``quantity`` units. Ties keep the first candidate seen.

        Raises:
            InsufficientStockError: If no candidate holds enough stock
        """
        best: Optional[Tuple[str, StrategyResult]] = None

        for source_id, items in by_source.items():
            if source_id == destination.id:
                continue
            if sum(item.quantity for item in items) < quantity:
                continue

            source = self.registry.get(source_id)
            if source is None:
                continue

            candidate = strategy.calculate(distance_between(source, destination), items[0])
            logger.debug(f"Candidate {source_id}: {candidate.label}")
            if best is None or candidate.metric < best[1].metric:
                best = (source_id, candidate)

        if best is None:
            raise InsufficientStockError(
                "No warehouse has sufficient stock to fulfill the request.",
                requested=quantity,
                available=max(
                    (sum(item.quantity for item in items)
                     for source_id, items in by_source.items() if source_id != destination.id),
                    default=0
                )
            )
        return best[0]

    @asynccontextmanager
    async def _upc_lock(self, upc: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(upc, asyncio.Lock())
        self._lock_users[upc] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[upc] -= 1
            if not self._lock_users[upc]:
                del self._lock_users[upc]
                del self._locks[upc]
