"""Back-office catalog and inventory routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.config import settings
from ..core.errors import NotFound, ERROR_PRODUCT_NOT_FOUND
from ..database.products import ProductDatabase, get_product_db
from ..models.product import (
    Product,
    ProductCreateRequest,
    ProductDeleted,
    ProductUpdateRequest,
)
from ..models.stock import (
    LowStockResponse,
    StockCheckResult,
    StockSummary,
    StockUpdateRequest,
    ValidateStockRequest,
)
from ..security.admin_auth import require_admin
from ..services.stock_service import StockService, get_stock_service

router = APIRouter(
    prefix=f"{settings.api_prefix}/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


@router.post("/validate-stock", response_model=StockCheckResult)
async def validate_stock(
    request: ValidateStockRequest,
    service: StockService = Depends(get_stock_service),
):
    """Check whether a quantity of a product can currently be fulfilled"""
    return service.validate_stock(request.product_id, request.quantity)


@router.put("/products/{product_id}/stock", response_model=Product)
async def update_product_stock(
    product_id: int,
    request: StockUpdateRequest,
    service: StockService = Depends(get_stock_service),
):
    """Overwrite a product's stock quantity"""
    return service.set_stock(product_id, request.stock_quantity)


@router.get("/low-stock", response_model=LowStockResponse)
async def list_low_stock(
    threshold: Optional[int] = Query(None, ge=0, description="Stock level at or below which a product is low"),
    service: StockService = Depends(get_stock_service),
):
    """
    List products at or below the threshold, lowest stock first.

    Defaults to the configured low stock threshold.
    """
    return service.low_stock_report(threshold)


@router.get("/stock-summary", response_model=StockSummary)
async def stock_summary(
    threshold: Optional[int] = Query(None, ge=0),
    service: StockService = Depends(get_stock_service),
):
    """Count products in stock, low on stock, and out of stock"""
    return service.stock_summary(threshold)


@router.post("/products", response_model=Product, status_code=201)
async def create_product(
    request: ProductCreateRequest,
    catalog: ProductDatabase = Depends(get_product_db),
):
    """Add a product to the catalog"""
    return catalog.create_product(request.model_dump())


@router.put("/products/{product_id}", response_model=Product)
async def update_product(
    product_id: int,
    request: ProductUpdateRequest,
    catalog: ProductDatabase = Depends(get_product_db),
):
    """Update product details; only the fields sent are changed"""
    return catalog.update_product(product_id, request.changes())


@router.delete("/products/{product_id}", response_model=ProductDeleted)
async def delete_product(
    product_id: int,
    catalog: ProductDatabase = Depends(get_product_db),
):
    """
    Remove a product from the catalog.

    Carts holding it are not touched here; the line drops out on each
    cart's next read.
    """
    if not catalog.delete_product(product_id):
        raise NotFound(ERROR_PRODUCT_NOT_FOUND)
    return ProductDeleted(product_id=product_id)
