# Service layer

from .cart_service import CartService, cart_service, get_cart_service
from .stock_service import StockService, stock_service, get_stock_service

__all__ = [
    "CartService",
    "cart_service",
    "get_cart_service",
    "StockService",
    "stock_service",
    "get_stock_service",
]
