"""
Adapters package for the Inventory Hub.

This package contains components for integrating with warehouses, including:
- Abstract interfaces that define the contracts for adapters
- Concrete implementations for the internal store and partner APIs
- Factory and registry for managing adapter instances
"""

from . import interfaces

from .factory import AdapterFactory
from .registry import AdaptorRegistry

__all__ = [
    'interfaces',
    'AdapterFactory',
    'AdaptorRegistry',
]
