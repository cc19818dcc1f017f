from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class NormalizedInventoryItem(BaseModel):
    """
    Canonical inventory row every warehouse adapter emits.

    ``location_details`` differs per warehouse style and is opaque to the
    transfer logic. ``transfer_cost`` is a per-mile rate and ``transfer_time``
    a baseline in hours.
    """

    model_config = ConfigDict(populate_by_name=True)

    source: str
    upc: str
    category: str
    name: str
    quantity: int = Field(ge=0)
    location_details: Dict[str, Any] = Field(default_factory=dict, alias="locationDetails")
    transfer_cost: float = Field(ge=0, alias="transferCost")
    transfer_time: float = Field(ge=0, alias="transferTime")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the public camelCase field names."""
        return self.model_dump(by_alias=True)


class InternalInventoryItem(BaseModel):
    """Row shape of the internal inventory store."""
    upc: str
    category: str
    name: str
    quantity: int = Field(ge=0)


class PartnerBItem(BaseModel):
    """Inventory record returned by a type B partner for one SKU."""

    model_config = ConfigDict(populate_by_name=True)

    sku: str
    label: str
    stock: int = Field(ge=0)
    coords: List[float] = Field(min_length=2, max_length=2)
    mileage_cost_per_mile: float = Field(ge=0, alias="mileageCostPerMile")


class PartnerCPosition(BaseModel):
    lat: float
    long: float


class PartnerCItem(BaseModel):
    """Inventory record returned by a type C partner."""
    upc: str
    desc: str
    qty: int = Field(ge=0)
    position: PartnerCPosition
    transfer_fee_mile: float = Field(ge=0)
