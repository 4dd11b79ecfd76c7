# Harvest Direct Models

from .base import APIModel
from .product import (
    Product,
    ProductCategory,
    ProductCreateRequest,
    ProductUpdateRequest,
    ProductDeleted,
)
from .cart import (
    CartLine,
    StoredCart,
    CartItemView,
    CartView,
    AddToCartRequest,
    UpdateCartItemRequest,
)
from .stock import (
    ValidateStockRequest,
    StockCheckResult,
    StockUpdateRequest,
    LowStockEntry,
    LowStockResponse,
    StockSummary,
)

__all__ = [
    "APIModel",
    "Product",
    "ProductCategory",
    "ProductCreateRequest",
    "ProductUpdateRequest",
    "ProductDeleted",
    "CartLine",
    "StoredCart",
    "CartItemView",
    "CartView",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "ValidateStockRequest",
    "StockCheckResult",
    "StockUpdateRequest",
    "LowStockEntry",
    "LowStockResponse",
    "StockSummary",
]
