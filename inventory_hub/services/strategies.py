from abc import ABC, abstractmethod
from typing import Dict, NamedTuple, Optional

from inventory_hub.core.logging import get_logger
from inventory_hub.domain.models.inventory import NormalizedInventoryItem
from inventory_hub.domain.models.transfer import TransferRule
from inventory_hub.services.calculators import CostModel, TimeModel

logger = get_logger(__name__)


class StrategyResult(NamedTuple):
    metric: float
    label: str


class TransferStrategy(ABC):
    """Turns a distance and a candidate item into a comparable metric."""

    rule: TransferRule

    @abstractmethod
    def calculate(self, distance: float, item: NormalizedInventoryItem) -> StrategyResult:
        """
        Compute the metric for moving ``item`` over ``distance`` miles.

        Lower is better.
        """


class CheapestTransferStrategy(TransferStrategy):
    rule = TransferRule.CHEAPEST

    def __init__(self, cost_model: CostModel):
        self.cost_model = cost_model

    def calculate(self, distance: float, item: NormalizedInventoryItem) -> StrategyResult:
        metric = self.cost_model.cost(item.source, distance, item)
        return StrategyResult(metric, f"Cost: ${metric:.2f}")


class FastestTransferStrategy(TransferStrategy):
    rule = TransferRule.FASTEST

    def __init__(self, time_model: TimeModel):
        self.time_model = time_model

    def calculate(self, distance: float, item: NormalizedInventoryItem) -> StrategyResult:
        metric = self.time_model.time(item.source, distance)
        return StrategyResult(metric, f"Time: {metric:.2f} hours")


class TransferStrategyFactory:
    """
    Resolves a rule name to its strategy.

    Unknown rule names fall back to the cheapest strategy instead of being
    rejected; strict rule checking belongs to request validation.
    """

    def __init__(self, cost_model: CostModel, time_model: TimeModel):
        self._default = CheapestTransferStrategy(cost_model)
        self._strategies: Dict[str, TransferStrategy] = {
            TransferRule.CHEAPEST.value: self._default,
            TransferRule.FASTEST.value: FastestTransferStrategy(time_model),
        }

    def create(self, rule: Optional[str]) -> TransferStrategy:
        strategy = self._strategies.get(str(rule or "").strip().lower())
        if strategy is None:
            logger.debug(f"Unknown transfer rule {rule!r}, defaulting to cheapest")
            return self._default
        return strategy
