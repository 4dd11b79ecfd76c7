"""Cart API routes"""

from fastapi import APIRouter, Depends

from ..core.config import settings
from ..core.session import SessionToken, get_session_token
from ..models.cart import AddToCartRequest, CartView, UpdateCartItemRequest
from ..services.cart_service import CartService, get_cart_service

router = APIRouter(prefix=f"{settings.api_prefix}/cart", tags=["Cart"])


@router.get("", response_model=CartView)
async def get_cart(
    session: SessionToken = Depends(get_session_token),
    service: CartService = Depends(get_cart_service),
):
    """Get the cart for the caller's session"""
    return service.get_cart(session.value)


@router.post("/items", response_model=CartView)
async def add_to_cart(
    request: AddToCartRequest,
    session: SessionToken = Depends(get_session_token),
    service: CartService = Depends(get_cart_service),
):
    """Add an item to the cart, merging with an existing line"""
    return service.add_item(session.value, request.product_id, request.quantity)


@router.put("/items/{product_id}", response_model=CartView)
async def update_cart_item(
    product_id: int,
    request: UpdateCartItemRequest,
    session: SessionToken = Depends(get_session_token),
    service: CartService = Depends(get_cart_service),
):
    """Update item quantity in cart; zero or less removes the item"""
    return service.update_item_quantity(session.value, product_id, request.quantity)


@router.delete("/items/{product_id}", response_model=CartView)
async def remove_from_cart(
    product_id: int,
    session: SessionToken = Depends(get_session_token),
    service: CartService = Depends(get_cart_service),
):
    """Remove an item from the cart"""
    return service.remove_item(session.value, product_id)


@router.delete("", response_model=CartView)
async def clear_cart(
    session: SessionToken = Depends(get_session_token),
    service: CartService = Depends(get_cart_service),
):
    """Clear all items from cart"""
    return service.clear_cart(session.value)
