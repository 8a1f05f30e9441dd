"""Subsidiary management service: multi-tenant inventory, sales and staff."""

__version__ = "1.0.0"
