"""
Domain package for the Inventory Hub.

Warehouse configuration, normalized inventory and transfer models. The domain
layer is independent of partner APIs and transport concerns.
"""
