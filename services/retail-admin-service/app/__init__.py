"""
Retail Admin Service Package.

Administration backend for ABC Retailers customers, products and orders,
with a resilient access layer that falls back to direct storage when the
Functions API is unreachable.
"""

__version__ = "1.0.0"
__description__ = "Administration backend for ABC Retailers"

__all__ = ["__version__"]
