"""Shopping cart operations keyed by session token"""

import logging
import time
from datetime import datetime
from typing import Callable, Optional

from ..core.config import settings
from ..core.errors import InvalidRequest, ERROR_INVALID_QUANTITY
from ..core.locks import KeyedLock
from ..database.carts import CartBackend, cart_db
from ..database.products import ProductDatabase, product_db
from ..models.cart import CartItemView, CartLine, CartView, StoredCart

logger = logging.getLogger(__name__)


class CartService:
    """
    Manages session carts on top of a storage backend.

    Features:
    - Quantities for the same product merge into one line
    - Prices and totals re-derived from the catalog on every read
    - Lines for products removed from the catalog are pruned on read
    - Operations on one session are serialized; sessions never share a lock
    """

    def __init__(
        self,
        backend: CartBackend,
        catalog: ProductDatabase,
        shipping_fee: Optional[float] = None,
        purge_interval_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.backend = backend
        self.catalog = catalog
        self.shipping_fee = settings.shipping_fee if shipping_fee is None else shipping_fee
        self.purge_interval = (
            settings.cart_purge_interval_seconds
            if purge_interval_seconds is None
            else purge_interval_seconds
        )
        self._clock = clock
        self._last_purge = clock()
        self._locks = KeyedLock()

    def get_cart(self, session_id: str) -> CartView:
        """Get the session's cart, creating an empty one if needed"""
        with self._locks.hold(session_id):
            cart = self._load(session_id)
            return self._build_view(cart)

    def add_item(self, session_id: str, product_id: int, quantity: int = 1) -> CartView:
        """Add a product, merging with an existing line for the same product"""
        if quantity < 1:
            raise InvalidRequest(ERROR_INVALID_QUANTITY)

        if not self.catalog.get_product(product_id):
            raise InvalidRequest(f"Product {product_id} does not exist")

        with self._locks.hold(session_id):
            cart = self._load(session_id)
            line = cart.find_line(product_id)

            if line:
                line.quantity += quantity
            else:
                cart.items.append(CartLine(product_id=product_id, quantity=quantity))

            self._save(cart)
            logger.debug(f"Cart {session_id}: added {quantity}x product {product_id}")
            return self._build_view(cart)

    def update_item_quantity(
        self,
        session_id: str,
        product_id: int,
        quantity: int,
    ) -> CartView:
        """
        Set a line's quantity in place.

        A quantity below one removes the line. Updating a product that is
        not in the cart leaves the cart unchanged.
        """
        if quantity < 1:
            return self.remove_item(session_id, product_id)

        with self._locks.hold(session_id):
            cart = self._load(session_id)
            line = cart.find_line(product_id)

            if line and line.quantity != quantity:
                line.quantity = quantity
                self._save(cart)
                logger.debug(f"Cart {session_id}: product {product_id} set to {quantity}")

            return self._build_view(cart)

    def remove_item(self, session_id: str, product_id: int) -> CartView:
        """Remove a product's line; a no-op if it is not in the cart"""
        with self._locks.hold(session_id):
            cart = self._load(session_id)
            remaining = [line for line in cart.items if line.product_id != product_id]

            if len(remaining) != len(cart.items):
                cart.items = remaining
                self._save(cart)
                logger.debug(f"Cart {session_id}: removed product {product_id}")

            return self._build_view(cart)

    def clear_cart(self, session_id: str) -> CartView:
        """Remove all lines from the cart"""
        with self._locks.hold(session_id):
            cart = self._load(session_id)
            if cart.items:
                cart.items = []
                self._save(cart)
            return self._build_view(cart)

    def _load(self, session_id: str) -> StoredCart:
        cart = self.backend.get(session_id)
        if cart is None:
            cart = StoredCart(session_id=session_id)
            self._save(cart)
        return cart

    def _save(self, cart: StoredCart) -> None:
        cart.updated_at = datetime.utcnow()
        self.backend.put(cart)
        self._maybe_purge()

    def _maybe_purge(self) -> None:
        now = self._clock()
        if now - self._last_purge >= self.purge_interval:
            self._last_purge = now
            self.backend.purge_expired()

    def _build_view(self, cart: StoredCart) -> CartView:
        """Enrich lines with current products and derive totals"""
        items: list[CartItemView] = []
        stale: list[int] = []

        for line in cart.items:
            product = self.catalog.get_product(line.product_id)
            if not product:
                stale.append(line.product_id)
                continue
            items.append(
                CartItemView(
                    product=product,
                    quantity=line.quantity,
                    line_total=round(product.price * line.quantity, 2),
                )
            )

        if stale:
            logger.warning(
                f"Cart {cart.session_id}: dropping stale products {stale}"
            )
            cart.items = [line for line in cart.items if line.product_id not in stale]
            self._save(cart)

        subtotal = round(sum(item.product.price * item.quantity for item in items), 2)
        shipping = self.shipping_fee if items else 0.0

        return CartView(
            session_id=cart.session_id,
            items=items,
            total_items=sum(item.quantity for item in items),
            subtotal=subtotal,
            shipping=shipping,
            total=round(subtotal + shipping, 2),
        )


# Singleton instance
cart_service = CartService(cart_db, product_db)


def get_cart_service() -> CartService:
    """FastAPI dependency returning the cart service"""
    return cart_service
