"""
Pydantic schemas for the Squarespace wire format and the storefront API.
"""

from .squarespace_schemas import (
    ApiResponse,
    CustomerProfile,
    InventoryItem,
    Money,
    Order,
    OrderDraft,
    OrderStatus,
    Pagination,
    Product,
    ProductVariant,
    SquarespaceErrorBody,
)

__all__ = [
    "ApiResponse",
    "CustomerProfile",
    "InventoryItem",
    "Money",
    "Order",
    "OrderDraft",
    "OrderStatus",
    "Pagination",
    "Product",
    "ProductVariant",
    "SquarespaceErrorBody",
]
