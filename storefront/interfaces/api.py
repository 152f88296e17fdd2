from typing import Optional

from fastapi import APIRouter, Depends, Request
import logging

from storefront.interfaces.ICommerceStore import ICommerceStore
from storefront.interfaces.schemas import (
    AddItemRequest,
    CartResponse,
    CheckoutRequest,
    DiscountResponse,
    ErrorResponse,
    MetricsResponse,
    OrderResponse,
    ProductsResponse,
)

router = APIRouter(prefix="/api", responses={400: {"model": ErrorResponse}})
logger = logging.getLogger(__name__)


def get_store(request: Request) -> ICommerceStore:
    """The store is created by the composition root and kept on app.state."""
    return request.app.state.store


# ---------------------------------------------------------
# SHOP
# ---------------------------------------------------------
@router.get("/products", response_model=ProductsResponse)
def list_products(store: ICommerceStore = Depends(get_store)):
    return ProductsResponse(products=store.list_products())


@router.get("/cart/{user_id}", response_model=CartResponse)
def get_cart(user_id: str, store: ICommerceStore = Depends(get_store)):
    return CartResponse(cart=store.get_cart(user_id))


@router.post(
    "/cart/{user_id}/items",
    status_code=201,
    response_model=CartResponse,
    responses={404: {"model": ErrorResponse}},
)
def add_item(user_id: str, body: AddItemRequest, store: ICommerceStore = Depends(get_store)):
    cart = store.add_item_to_cart(user_id, body.product_id, body.quantity)
    return CartResponse(cart=cart)


@router.post("/cart/{user_id}/checkout", status_code=201, response_model=OrderResponse)
def checkout(
    user_id: str,
    body: Optional[CheckoutRequest] = None,
    store: ICommerceStore = Depends(get_store),
):
    discount_code = body.discount_code if body else None
    order = store.checkout(user_id, discount_code)
    return OrderResponse(order=order)


# ---------------------------------------------------------
# ADMIN
# ---------------------------------------------------------
@router.post("/admin/discounts", status_code=201, response_model=DiscountResponse)
def generate_discount(store: ICommerceStore = Depends(get_store)):
    discount = store.generate_discount_code()
    logger.info(f"🎟️ Admin generated discount {discount.code}")
    return DiscountResponse(discount=discount)


@router.get("/admin/metrics", response_model=MetricsResponse)
def get_metrics(store: ICommerceStore = Depends(get_store)):
    return MetricsResponse(metrics=store.get_metrics())
