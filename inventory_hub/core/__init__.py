"""
Core package for the Inventory Hub.

Configuration, logging helpers, the exception hierarchy and shared constants.
"""
