"""
Inventory Hub - multi-warehouse inventory aggregation and transfer orchestration.

This package normalizes heterogeneous warehouse APIs into one inventory model,
fans inventory reads out to every registered warehouse, and moves stock between
warehouses under a cost or time objective.
"""

__version__ = "0.1.0"
