"""Product API routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..core.config import settings
from ..core.errors import InvalidRequest
from ..database.products import ProductDatabase, get_product_db
from ..models.product import Product, ProductCategory

router = APIRouter(prefix=f"{settings.api_prefix}/products", tags=["Products"])


@router.get("", response_model=list[Product])
async def list_products(
    category: Optional[ProductCategory] = Query(None, description="Filter by category"),
    featured: Optional[bool] = Query(None, description="Filter by featured flag"),
    search: Optional[str] = Query(None, description="Match against name or description"),
    catalog: ProductDatabase = Depends(get_product_db),
):
    """List products in the catalog"""
    return catalog.list_products(category=category, featured=featured, search=search)


@router.get("/search", response_model=list[Product])
async def search_products(
    q: Optional[str] = Query(None, description="Search term"),
    catalog: ProductDatabase = Depends(get_product_db),
):
    """Search products by name or description; name matches rank first"""
    if not q or not q.strip():
        raise InvalidRequest("Search term is required")
    return catalog.search_products(q)

@router.get("/featured", response_model=list[Product])
async def list_featured_products(catalog: ProductDatabase = Depends(get_product_db)):
    """Products highlighted on the storefront home page"""
    return catalog.list_products(featured=True)


@router.get("/categories", response_model=list[str])
async def list_categories():
    """List all product categories"""
    return [c.value for c in ProductCategory]


@router.get("/category/{category}", response_model=list[Product])
async def get_products_by_category(
    category: ProductCategory,
    catalog: ProductDatabase = Depends(get_product_db),
):
    """Get products in a specific category"""
    return catalog.list_products(category=category)


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: int,
    catalog: ProductDatabase = Depends(get_product_db),
):
    """Get a product by ID"""
    return catalog.require_product(product_id)
