"""Cart models"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import APIModel
from .product import Product


class CartLine(APIModel):
    """Stored line item: a product reference and its quantity"""
    product_id: int
    quantity: int = Field(ge=1)


class StoredCart(APIModel):
    """Cart as kept by a storage backend, keyed by session token"""
    session_id: str
    items: list[CartLine] = []
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def find_line(self, product_id: int) -> Optional[CartLine]:
        return next(
            (line for line in self.items if line.product_id == product_id),
            None,
        )


class CartItemView(APIModel):
    """Line item enriched with the current product"""
    product: Product
    quantity: int
    line_total: float


class CartView(APIModel):
    """Cart as returned to clients; totals are derived on every read"""
    session_id: str
    items: list[CartItemView] = []
    total_items: int = 0
    subtotal: float = 0.0
    shipping: float = 0.0
    total: float = 0.0


class AddToCartRequest(APIModel):
    """Request to add item to cart"""
    product_id: int
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(APIModel):
    """Request to update cart item quantity; zero or less removes the item"""
    quantity: int
