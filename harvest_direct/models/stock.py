"""Inventory models"""

from pydantic import Field

from .base import APIModel


class ValidateStockRequest(APIModel):
    """Request to check whether a quantity can be fulfilled"""
    product_id: int
    quantity: int = Field(ge=0)


class StockCheckResult(APIModel):
    """Outcome of a stock check; computed per call, never stored"""
    product_id: int
    requested_quantity: int
    current_stock: int
    available: bool


class StockUpdateRequest(APIModel):
    """Administrative overwrite of a product's stock"""
    stock_quantity: int = Field(ge=0)


class LowStockEntry(APIModel):
    product_id: int
    name: str
    stock_quantity: int


class LowStockResponse(APIModel):
    threshold: int
    low_stock_products: list[LowStockEntry]


class StockSummary(APIModel):
    """Product counts by stock level"""
    threshold: int
    in_stock: int
    low_stock: int
    out_of_stock: int
