"""
Infrastructure package for the Inventory Hub.
Contains the internal inventory store and centralized error handling.
"""
