# Database modules

from .products import product_db, ProductDatabase, get_product_db
from .carts import cart_db, CartBackend, InMemoryCartBackend

__all__ = [
    "product_db",
    "ProductDatabase",
    "get_product_db",
    "cart_db",
    "CartBackend",
    "InMemoryCartBackend",
]
