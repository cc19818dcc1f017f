from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, Optional


class TransferRule(str, Enum):
    """Objective used to rank candidate source warehouses."""
    CHEAPEST = "cheapest"
    FASTEST = "fastest"


@dataclass
class TransferRequest:
    """Domain model for a stock movement request.

    ``from_`` is optional; without it the orchestrator picks the source.
    """

    to: str
    upc: str
    quantity: int
    rule: str = TransferRule.CHEAPEST.value
    from_: Optional[str] = None

    @property
    def auto_select(self) -> bool:
        return not self.from_


@dataclass
class TransferResult:
    """Confirmation of an executed transfer."""

    quantity: int
    upc: str
    source: str
    destination: str
    distance: float
    metric: float
    label: str
    rule: str
    auto_selected: bool = False
    actual_delta: int = 0

    @property
    def rounded_distance(self) -> int:
        """Whole miles, halves rounded up."""
        return int(Decimal(self.distance).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    @property
    def message(self) -> str:
        return (
            f"Transfer of {self.quantity} units of UPC {self.upc} from {self.source} "
            f"to {self.destination} completed successfully. "
            f"Distance: {self.rounded_distance} miles, {self.label}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "quantity": self.quantity,
            "upc": self.upc,
            "from": self.source,
            "to": self.destination,
            "distance": round(self.distance, 2),
            "metric": round(self.metric, 2),
            "label": self.label,
            "rule": self.rule,
            "auto_selected": self.auto_selected,
            "actual_delta": self.actual_delta,
        }

    def __str__(self) -> str:
        return self.message


@dataclass
class TransferOutcome:
    """Success or typed failure returned at the orchestrator boundary."""

    success: bool
    result: Optional[TransferResult] = None
    error: Dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        if self.result is not None:
            return self.result.message
        return self.error.get("error", {}).get("message", "")
