"""Product models for the catalog"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import APIModel


class ProductCategory(str, Enum):
    COFFEE_TEA = "coffee_tea"
    SPICES = "spices"
    GRAINS = "grains"
    OTHERS = "others"


class Product(APIModel):
    """Product in the catalog"""
    id: int
    name: str
    description: str = ""
    price: float = Field(gt=0)
    category: ProductCategory
    image_url: Optional[str] = None
    stock_quantity: int = Field(ge=0, default=0)
    featured: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class ProductCreateRequest(APIModel):
    """Back-office request to add a product"""
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    price: float = Field(gt=0)
    category: ProductCategory
    image_url: Optional[str] = None
    stock_quantity: int = Field(ge=0, default=0)
    featured: bool = False


class ProductUpdateRequest(APIModel):
    """Partial product update; omitted fields are left unchanged"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    category: Optional[ProductCategory] = None
    image_url: Optional[str] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    featured: Optional[bool] = None

    def changes(self) -> dict:
        """Fields the client actually sent, without explicit nulls"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProductDeleted(APIModel):
    product_id: int
    message: str = "Product deleted"
