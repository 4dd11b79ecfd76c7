"""Stock checks and administrative stock changes"""

import logging
from typing import Optional

from ..core.config import settings
from ..core.errors import (
    InvalidRequest,
    ERROR_INVALID_QUANTITY,
    ERROR_NEGATIVE_STOCK,
    ERROR_NEGATIVE_THRESHOLD,
)
from ..database.products import ProductDatabase, product_db
from ..models.product import Product
from ..models.stock import LowStockEntry, LowStockResponse, StockCheckResult, StockSummary

logger = logging.getLogger(__name__)


class StockService:
    """
    Answers "can N units of product P be fulfilled?" and owns writes to
    the catalog's stock counter.

    Carts never reserve stock; it is only changed here, by administrators
    or at order placement.
    """

    def __init__(self, catalog: ProductDatabase, low_stock_threshold: Optional[int] = None):
        self.catalog = catalog
        self.low_stock_threshold = (
            settings.low_stock_threshold if low_stock_threshold is None else low_stock_threshold
        )

    def validate_stock(self, product_id: int, requested_quantity: int) -> StockCheckResult:
        """Check current stock against a requested quantity"""
        if requested_quantity < 0:
            raise InvalidRequest("Requested quantity cannot be negative")

        product = self.catalog.require_product(product_id)
        return StockCheckResult(
            product_id=product_id,
            requested_quantity=requested_quantity,
            current_stock=product.stock_quantity,
            available=product.stock_quantity >= requested_quantity,
        )

    def set_stock(self, product_id: int, quantity: int) -> Product:
        """
        Overwrite a product's stock.

        This is not a decrement: concurrent overwrites are last-writer-wins.
        Use decrement_stock to take stock for a sale.
        """
        if quantity < 0:
            raise InvalidRequest(ERROR_NEGATIVE_STOCK)

        product = self.catalog.set_stock(product_id, quantity)
        logger.info(f"Stock for product {product_id} set to {quantity}")
        return product

    def decrement_stock(self, product_id: int, quantity: int) -> Product:
        """Take stock for a sale, failing with InsufficientStock if short"""
        if quantity < 1:
            raise InvalidRequest(ERROR_INVALID_QUANTITY)

        product = self.catalog.decrement_stock(product_id, quantity)
        logger.info(
            f"Stock for product {product_id} decremented by {quantity} "
            f"to {product.stock_quantity}"
        )
        return product

    def low_stock_report(self, threshold: Optional[int] = None) -> LowStockResponse:
        """Products at or below the threshold, most urgent first, with the threshold used"""
        threshold = self._resolve_threshold(threshold)

        products = [
            p for p in self.catalog.get_all_products()
            if p.stock_quantity <= threshold
        ]
        products.sort(key=lambda p: (p.stock_quantity, p.id))

        return LowStockResponse(
            threshold=threshold,
            low_stock_products=[
                LowStockEntry(product_id=p.id, name=p.name, stock_quantity=p.stock_quantity)
                for p in products
            ],
        )

    def stock_summary(self, threshold: Optional[int] = None) -> StockSummary:
        """Count products in stock, low on stock, and out of stock"""
        threshold = self._resolve_threshold(threshold)
        products = self.catalog.get_all_products()

        return StockSummary(
            threshold=threshold,
            in_stock=sum(1 for p in products if p.stock_quantity > threshold),
            low_stock=sum(1 for p in products if 0 < p.stock_quantity <= threshold),
            out_of_stock=sum(1 for p in products if p.stock_quantity == 0),
        )

    def _resolve_threshold(self, threshold: Optional[int]) -> int:
        if threshold is None:
            return self.low_stock_threshold
        if threshold < 0:
            raise InvalidRequest(ERROR_NEGATIVE_THRESHOLD)
        return threshold


# Singleton instance
stock_service = StockService(product_db)


def get_stock_service() -> StockService:
    """FastAPI dependency returning the stock service"""
    return stock_service
