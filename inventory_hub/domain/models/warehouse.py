from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inventory_hub.core.constants import (
    LEGACY_TYPE_ALIASES,
    TYPE_INTERNAL,
    TYPE_PARTNER_B,
    TYPE_PARTNER_C,
)


class WarehouseType(str, Enum):
    """Enum of the warehouse API styles the adapter layer understands."""
    INTERNAL = TYPE_INTERNAL
    PARTNER_B = TYPE_PARTNER_B
    PARTNER_C = TYPE_PARTNER_C


class WarehouseLocation(BaseModel):
    """Geographic position of a warehouse."""
    lat: float
    long: float


class WarehouseApiConfig(BaseModel):
    """How to reach a warehouse and its default transfer economics."""

    model_config = ConfigDict(populate_by_name=True)

    # Kept as a plain string: unknown tags must reach the adapter factory
    type: str
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    endpoints: Dict[str, str] = Field(default_factory=dict)
    default_transfer_cost: Optional[float] = Field(default=None, alias="defaultTransferCost", ge=0)
    default_transfer_time: Optional[float] = Field(default=None, alias="defaultTransferTime", ge=0)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> str:
        """Lower-case the tag and map legacy tags onto the current ones."""
        tag = str(v).strip().lower()
        return LEGACY_TYPE_ALIASES.get(tag, tag)

    def endpoint(self, name: str, default: str) -> str:
        """Return a configured endpoint path or the protocol default."""
        return self.endpoints.get(name) or default


class WarehouseConfig(BaseModel):
    """Registry entry describing one warehouse."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    location: WarehouseLocation
    api: WarehouseApiConfig

    @property
    def type(self) -> str:
        return self.api.type

    def summary(self) -> Dict[str, Any]:
        """Short public description of the warehouse."""
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location.model_dump(),
            "type": self.api.type,
        }
