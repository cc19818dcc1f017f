"""Static values shared across the inventory hub."""

from typing import Any, Dict, List

# === Geographic Constants ===
EARTH_RADIUS_MILES = 3958.8

# === Validation Constants ===
VALID_CATEGORIES = ("widgets", "gadgets", "accessories")
DEFAULT_CATEGORY = "accessories"
MIN_UPC_LENGTH = 8

# === Warehouse type tags ===
TYPE_INTERNAL = "internal"
TYPE_PARTNER_B = "partner-b"
TYPE_PARTNER_C = "partner-c"

# Tags used by older warehouse configuration documents
LEGACY_TYPE_ALIASES = {
    "external-b-style": TYPE_PARTNER_B,
    "external-c-style": TYPE_PARTNER_C,
}

# === Cost / time fallbacks ===
# Per-mile rate used when neither the item nor the warehouse config has one
FALLBACK_COST_PER_MILE = {
    TYPE_INTERNAL: 0.2,
    TYPE_PARTNER_B: 0.7,
    TYPE_PARTNER_C: 0.65,
}
GENERIC_COST_PER_MILE = 0.5

# (base hours, assumed mph) per warehouse type
FALLBACK_TIME_PROFILE = {
    TYPE_INTERNAL: (0.0, 60.0),
    TYPE_PARTNER_B: (1.0, 30.0),
    TYPE_PARTNER_C: (2.0, 25.0),
}
CONFIGURED_TIME_SPEED_MPH = 30.0
GENERIC_SPEED_MPH = 30.0

# Baseline transfer hours stamped on normalized items when unconfigured
DEFAULT_ITEM_TRANSFER_TIME = {
    TYPE_INTERNAL: 1.0,
    TYPE_PARTNER_B: 1.5,
    TYPE_PARTNER_C: 2.5,
}

# === Partner endpoint defaults ===
PARTNER_B_LOOKUP_PATH = "/lookup"
PARTNER_B_INVENTORY_PATH = "/inventory"
PARTNER_C_ITEMS_PATH = "/api/items"

# === Default warehouses ===
DEFAULT_WAREHOUSE_CONFIGS: List[Dict[str, Any]] = [
    {
        "id": "A",
        "name": "Internal Warehouse",
        "location": {"lat": 34.0522, "long": -118.2437},  # Los Angeles
        "api": {
            "type": TYPE_INTERNAL,
            "defaultTransferCost": 0.2,
            "defaultTransferTime": 1,
        },
    },
    {
        "id": "B",
        "name": "Warehouse B",
        "location": {"lat": 40.7128, "long": -74.006},  # New York
        "api": {
            "type": TYPE_PARTNER_B,
            "baseUrl": "http://b.api",
            "endpoints": {"lookup": "/lookup", "inventory": "/inventory"},
            "defaultTransferCost": 0.7,
            "defaultTransferTime": 1.5,
        },
    },
    {
        "id": "C",
        "name": "Warehouse C",
        "location": {"lat": 41.2, "long": -73.7},  # Connecticut
        "api": {
            "type": TYPE_PARTNER_C,
            "baseUrl": "http://c.api",
            "endpoints": {"items": "/api/items"},
            "defaultTransferCost": 0.65,
            "defaultTransferTime": 2.5,
        },
    },
]

# Rows loaded into the in-memory internal store
SEED_INTERNAL_INVENTORY: List[Dict[str, Any]] = [
    {"upc": "12345678", "category": "widgets", "name": "Super Widget", "quantity": 15},
    {"upc": "87654321", "category": "gadgets", "name": "Ultra Gadget", "quantity": 20},
    {"upc": "44445555", "category": "widgets", "name": "Mini Widget", "quantity": 50},
    {"upc": "99990000", "category": "accessories", "name": "Accessory 1", "quantity": 5},
]
