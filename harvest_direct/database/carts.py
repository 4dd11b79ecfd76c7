"""Cart storage backends"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..core.config import settings
from ..models.cart import StoredCart

logger = logging.getLogger(__name__)


class CartBackend(ABC):
    """
    Key-value storage for carts, keyed by session token.

    Implementations raise StorageUnavailable when the underlying store
    cannot be reached. Totals are never stored; only lines are.
    """

    @abstractmethod
    def get(self, session_id: str) -> Optional[StoredCart]:
        """Get a cart, or None if absent or expired"""

    @abstractmethod
    def put(self, cart: StoredCart) -> None:
        """Store a cart under its session id"""

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Delete a cart; returns True if one was stored"""

    @abstractmethod
    def purge_expired(self) -> int:
        """Remove expired carts; returns how many were removed"""

    @abstractmethod
    def __len__(self) -> int:
        """Number of live carts"""


class InMemoryCartBackend(CartBackend):
    """
    In-memory cart storage with a sliding idle TTL.

    Every put refreshes the cart's expiry. Expired carts read as absent
    and are removed lazily on access or in bulk by purge_expired.
    """

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = settings.cart_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._guard = threading.Lock()
        self._carts: dict[str, tuple[StoredCart, float]] = {}  # id -> (cart, expires_at)

    def get(self, session_id: str) -> Optional[StoredCart]:
        with self._guard:
            entry = self._carts.get(session_id)
            if entry is None:
                return None

            cart, expires_at = entry
            if expires_at <= self._clock():
                del self._carts[session_id]
                logger.debug(f"Cart {session_id} expired")
                return None

            return cart.model_copy(deep=True)

    def put(self, cart: StoredCart) -> None:
        with self._guard:
            self._carts[cart.session_id] = (
                cart.model_copy(deep=True),
                self._clock() + self.ttl_seconds,
            )

    def delete(self, session_id: str) -> bool:
        with self._guard:
            return self._carts.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        with self._guard:
            now = self._clock()
            expired = [
                sid for sid, (_, expires_at) in self._carts.items()
                if expires_at <= now
            ]
            for sid in expired:
                del self._carts[sid]

        if expired:
            logger.info(f"Purged {len(expired)} expired carts")
        return len(expired)

    def __len__(self) -> int:
        with self._guard:
            return len(self._carts)


# Singleton instance
cart_db = InMemoryCartBackend()
