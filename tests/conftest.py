"""Pytest configuration and fixtures"""
import os

import pytest
from fastapi.testclient import TestClient

# Set test environment variables
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-for-the-harvest-suite")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from harvest_direct.database.carts import InMemoryCartBackend
from harvest_direct.database.products import ProductDatabase, get_product_db
from harvest_direct.main import app
from harvest_direct.models.product import Product, ProductCategory
from harvest_direct.security.tokens import issue_access_token
from harvest_direct.services.cart_service import CartService, get_cart_service
from harvest_direct.services.stock_service import StockService, get_stock_service


SHIPPING_FEE = 5.99
CART_TTL = 3600


class FakeClock:
    """Monotonic clock advanced by hand"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_product(product_id: int, stock: int, price: float = 10.0, **kwargs) -> Product:
    """Build a catalog product for tests"""
    return Product(
        id=product_id,
        name=kwargs.pop("name", f"Product {product_id}"),
        price=price,
        category=kwargs.pop("category", ProductCategory.SPICES),
        stock_quantity=stock,
        **kwargs,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def catalog():
    """Fresh copy of the seeded farm catalog"""
    return ProductDatabase()


@pytest.fixture
def cart_backend(clock):
    return InMemoryCartBackend(ttl_seconds=CART_TTL, clock=clock)


@pytest.fixture
def cart_service(cart_backend, catalog, clock):
    return CartService(
        cart_backend,
        catalog,
        shipping_fee=SHIPPING_FEE,
        purge_interval_seconds=300,
        clock=clock,
    )


@pytest.fixture
def stock_service(catalog):
    return StockService(catalog, low_stock_threshold=20)


@pytest.fixture
def client(catalog, cart_service, stock_service):
    """API client wired to the fresh catalog and stores"""
    app.dependency_overrides[get_product_db] = lambda: catalog
    app.dependency_overrides[get_cart_service] = lambda: cart_service
    app.dependency_overrides[get_stock_service] = lambda: stock_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    """Authorization header carrying an admin token"""
    token = issue_access_token("admin-1", role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    """Authorization header carrying a regular user's token"""
    token = issue_access_token("user-42", role="user")
    return {"Authorization": f"Bearer {token}"}
