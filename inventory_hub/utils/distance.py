"""
Utility functions for geographical distance calculations.
"""
import math

from inventory_hub.core.constants import EARTH_RADIUS_MILES
from inventory_hub.domain.models.warehouse import WarehouseConfig


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points using the Haversine formula.

    Inputs are not range-checked.

    Args:
        lat1: Latitude of point 1 in degrees
        lon1: Longitude of point 1 in degrees
        lat2: Latitude of point 2 in degrees
        lon2: Longitude of point 2 in degrees

    Returns:
        float: Distance in miles
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def distance_between(source: WarehouseConfig, destination: WarehouseConfig) -> float:
    """Haversine distance in miles between two registered warehouses."""
    return haversine(
        source.location.lat,
        source.location.long,
        destination.location.lat,
        destination.location.long,
    )
