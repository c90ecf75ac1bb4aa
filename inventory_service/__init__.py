"""Inventory management HTTP service with PostgreSQL storage and an in-memory fallback."""

__version__ = "1.0.0"
