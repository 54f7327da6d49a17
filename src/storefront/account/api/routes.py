"""FastAPI routes for accounts: registration, login, profile, cart and wishlist."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.account import cart, profile, registration, wishlist
from storefront.account.api.schemas import (
    AddToCartRequest,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
)
from storefront.account.user import Actor, User, WishlistAction
from storefront.api.dependencies import admin_actor, current_user
from storefront.api.presenters import cart_data, envelope, paginated, user_data, wishlist_data
from storefront.config import settings
from storefront.utils.pagination import clamp_limit, offset_for

router = APIRouter(prefix="/api/users", tags=["users"])

DEFAULT_PAGE_LIMIT = 20


@router.post("/register", status_code=201)
async def register(body: RegisterRequest):
    user, token = registration.register(name=body.name, email=body.email, password=body.password)
    return envelope(data=user_data(user), message="User registered successfully", token=token)


@router.post("/login")
async def login(body: LoginRequest):
    user, token = registration.login(email=body.email, password=body.password)
    return envelope(data=user_data(user), message="Login successful", token=token)


@router.get("/profile")
async def get_profile(user: User = Depends(current_user)):
    return envelope(data=user_data(user, include_collections=True))


@router.put("/profile")
async def update_profile(body: UpdateProfileRequest, user: User = Depends(current_user)):
    updated = profile.update_profile(user.id, name=body.name, email=body.email, avatar=body.avatar)
    return envelope(data=user_data(updated), message="Profile updated successfully")


@router.put("/change-password")
async def change_password(body: ChangePasswordRequest, user: User = Depends(current_user)):
    profile.change_password(user.id, current_password=body.current_password, new_password=body.new_password)
    return envelope(message="Password changed successfully")


@router.post("/cart")
async def add_to_cart(body: AddToCartRequest, user: User = Depends(current_user)):
    updated = cart.add_to_cart(user.id, body.product_id, body.quantity)
    return envelope(data=cart_data(updated), message="Item added to cart")


@router.delete("/cart/{product_id}")
async def remove_from_cart(product_id: str, user: User = Depends(current_user)):
    updated = cart.remove_from_cart(user.id, product_id)
    return envelope(data=cart_data(updated), message="Item removed from cart")


@router.post("/wishlist/{product_id}")
async def toggle_wishlist(product_id: str, user: User = Depends(current_user)):
    action, updated = wishlist.toggle_wishlist(user.id, product_id)
    message = "Item added to wishlist" if action == WishlistAction.ADDED else "Item removed from wishlist"
    return envelope(data=wishlist_data(updated), message=message, action=action.value)


@router.get("")
async def list_users(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    actor: Actor = Depends(admin_actor),
):
    limit = clamp_limit(limit, DEFAULT_PAGE_LIMIT, settings.users_page_limit_max)
    results = current_domain.repository_for(User).list_users(offset=offset_for(page, limit), limit=limit)
    return paginated([user_data(u) for u in results.items], results.total, page, limit)
