"""Product catalog for the storefront"""

import logging
import threading
from datetime import datetime
from typing import Optional

from ..core.errors import InsufficientStock, NotFound, ERROR_PRODUCT_NOT_FOUND
from ..core.locks import KeyedLock
from ..models.product import Product, ProductCategory

logger = logging.getLogger(__name__)

# Farm product catalog
PRODUCTS: dict[int, Product] = {
    1: Product(
        id=1,
        name="Mountain Coffee Beans",
        description="Hand-picked arabica beans from 5000ft elevation, sun-dried and small-batch roasted.",
        price=12.50,
        category=ProductCategory.COFFEE_TEA,
        image_url="/static/images/mountain-coffee.jpg",
        stock_quantity=100,
        featured=True,
    ),
    2: Product(
        id=2,
        name="Organic Black Pepper",
        description="Bold, aromatic peppercorns from heritage vines, traditionally sun-dried to preserve natural oils.",
        price=8.95,
        category=ProductCategory.SPICES,
        image_url="/static/images/black-pepper.jpg",
        stock_quantity=120,
        featured=True,
    ),
    3: Product(
        id=3,
        name="Premium Cardamom",
        description="Large, intensely aromatic green cardamom pods grown in virgin forest shade.",
        price=9.25,
        category=ProductCategory.SPICES,
        image_url="/static/images/cardamom.jpg",
        stock_quantity=85,
        featured=True,
    ),
    4: Product(
        id=4,
        name="Heirloom Rice",
        description="Ancient grain variety cultivated in terraced paddies using traditional methods for exceptional flavor.",
        price=7.50,
        category=ProductCategory.GRAINS,
        image_url="/static/images/heirloom-rice.jpg",
        stock_quantity=150,
        featured=True,
    ),
    5: Product(
        id=5,
        name="Premium Tea Leaves",
        description="Tender top leaves hand-plucked from high-altitude tea gardens for exceptional aroma and flavor.",
        price=14.75,
        category=ProductCategory.COFFEE_TEA,
        image_url="/static/images/tea-leaves.jpg",
        stock_quantity=90,
        featured=True,
    ),
    6: Product(
        id=6,
        name="Organic Ragi",
        description="Nutrient-rich finger millet grown using traditional dryland farming techniques.",
        price=6.95,
        category=ProductCategory.GRAINS,
        image_url="/static/images/ragi.jpg",
        stock_quantity=110,
        featured=True,
    ),
    7: Product(
        id=7,
        name="Pure Moringa Leaves",
        description="Naturally dried moringa leaves, grown without chemicals in mineral-rich soil.",
        price=8.25,
        category=ProductCategory.OTHERS,
        image_url="/static/images/moringa.jpg",
        stock_quantity=75,
        featured=True,
    ),
    8: Product(
        id=8,
        name="Areca Catechu",
        description="Traditional, naturally grown areca nuts harvested at optimal ripeness.",
        price=10.50,
        category=ProductCategory.OTHERS,
        image_url="/static/images/areca.jpg",
        stock_quantity=60,
        featured=True,
    ),
    9: Product(
        id=9,
        name="Organic Dry Corn",
        description="Sun-dried, non-GMO corn kernels grown using traditional farming methods.",
        price=5.95,
        category=ProductCategory.GRAINS,
        image_url="/static/images/dry-corn.jpg",
        stock_quantity=130,
        featured=False,
    ),
    10: Product(
        id=10,
        name="Highland White Pepper",
        description="Subtle, aromatic white peppercorns cultivated at high elevations.",
        price=10.25,
        category=ProductCategory.SPICES,
        image_url="/static/images/white-pepper.jpg",
        stock_quantity=70,
        featured=False,
    ),
    11: Product(
        id=11,
        name="Dark Forest Coffee",
        description="Robust, dark-roasted coffee grown in the shade of ancient forest canopies.",
        price=13.75,
        category=ProductCategory.COFFEE_TEA,
        image_url="/static/images/dark-forest-coffee.jpg",
        stock_quantity=85,
        featured=False,
    ),
    12: Product(
        id=12,
        name="Traditional Brown Rice",
        description="Unpolished, nutrient-rich brown rice grown using ancient farming techniques.",
        price=8.95,
        category=ProductCategory.GRAINS,
        image_url="/static/images/brown-rice.jpg",
        stock_quantity=120,
        featured=False,
    ),
}


class ProductDatabase:
    """
    In-memory product catalog.

    Readers get copies. Every write to a product, stock included, holds
    that product's lock, so an edit never resurrects a deleted product.
    """

    def __init__(self, products: Optional[dict[int, Product]] = None):
        source = PRODUCTS if products is None else products
        self.products: dict[int, Product] = {
            product_id: product.model_copy(deep=True)
            for product_id, product in source.items()
        }
        self._stock_locks = KeyedLock()
        self._id_lock = threading.Lock()

    def get_product(self, product_id: int) -> Optional[Product]:
        """Get a product by ID"""
        product = self.products.get(product_id)
        return product.model_copy() if product else None

    def require_product(self, product_id: int) -> Product:
        """Get a product by ID or raise NotFound"""
        product = self.get_product(product_id)
        if not product:
            raise NotFound(ERROR_PRODUCT_NOT_FOUND)
        return product

    def get_all_products(self) -> list[Product]:
        """Get all products ordered by ID"""
        snapshot = self.products.copy()
        return [snapshot[pid].model_copy() for pid in sorted(snapshot)]

    def list_products(
        self,
        category: Optional[ProductCategory] = None,
        featured: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> list[Product]:
        """List products, optionally filtered by category, featured flag and search term"""
        results = self.search_products(search) if search else self.get_all_products()

        if category:
            results = [p for p in results if p.category == category]

        if featured is not None:
            results = [p for p in results if p.featured == featured]

        return results

    def search_products(self, term: str) -> list[Product]:
        """
        Case-insensitive substring search over name and description.

        Name matches come first, then description-only matches, each in ID order.
        """
        needle = term.strip().lower()
        name_matches = []
        description_matches = []

        for product in self.get_all_products():
            if needle in product.name.lower():
                name_matches.append(product)
            elif needle in product.description.lower():
                description_matches.append(product)

        return name_matches + description_matches

    def add_product(self, product: Product) -> Product:
        """Add or replace a product"""
        with self._stock_locks.hold(product.id):
            self.products[product.id] = product.model_copy(deep=True)
        return product

    def create_product(self, fields: dict) -> Product:
        """Create a product under the next free ID"""
        with self._id_lock:
            product_id = max(self.products, default=0) + 1
            product = Product(id=product_id, **fields)
            self.add_product(product)

        logger.info(f"Product {product_id} added to catalog: {product.name}")
        return product.model_copy()

    def update_product(self, product_id: int, changes: dict) -> Product:
        """Apply a partial update to a product"""
        with self._stock_locks.hold(product_id):
            product = self.products.get(product_id)
            if not product:
                raise NotFound(ERROR_PRODUCT_NOT_FOUND)

            updated = product.model_copy(update={**changes, "updated_at": datetime.utcnow()})
            self.products[product_id] = updated

        logger.info(f"Product {product_id} updated: {', '.join(sorted(changes)) or 'no fields'}")
        return updated.model_copy()

    def delete_product(self, product_id: int) -> bool:
        """Delete a product; carts referencing it drop it on their next read"""
        with self._stock_locks.hold(product_id):
            if product_id not in self.products:
                return False
            del self.products[product_id]

        logger.info(f"Product {product_id} removed from catalog")
        return True

    def set_stock(self, product_id: int, quantity: int) -> Product:
        """Overwrite a product's stock quantity"""
        with self._stock_locks.hold(product_id):
            product = self.products.get(product_id)
            if not product:
                raise NotFound(ERROR_PRODUCT_NOT_FOUND)

            updated = product.model_copy(
                update={"stock_quantity": quantity, "updated_at": datetime.utcnow()}
            )
            self.products[product_id] = updated
            return updated.model_copy()

    def decrement_stock(self, product_id: int, quantity: int) -> Product:
        """
        Remove stock only if enough is available.

        Check and write happen under the product's lock, so concurrent
        decrements can never drive stock negative.
        """
        with self._stock_locks.hold(product_id):
            product = self.products.get(product_id)
            if not product:
                raise NotFound(ERROR_PRODUCT_NOT_FOUND)

            if product.stock_quantity < quantity:
                raise InsufficientStock(product_id, quantity, product.stock_quantity)

            updated = product.model_copy(
                update={
                    "stock_quantity": product.stock_quantity - quantity,
                    "updated_at": datetime.utcnow(),
                }
            )
            self.products[product_id] = updated
            return updated.model_copy()


# Singleton instance
product_db = ProductDatabase()


def get_product_db() -> ProductDatabase:
    """FastAPI dependency returning the product catalog"""
    return product_db
