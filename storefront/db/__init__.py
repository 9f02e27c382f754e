"""
External data access for the storefront.

Squarespace is the only backend: products, orders, inventory and customer
profiles all live on the remote service.
"""

from storefront.db.squarespace_client import SquarespaceClient

__all__ = ["SquarespaceClient"]
