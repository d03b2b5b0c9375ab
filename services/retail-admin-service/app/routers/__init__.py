"""API routers for the retail admin service."""

from . import customers, health, orders, products, uploads

__all__ = ["customers", "health", "orders", "products", "uploads"]
