"""Request bodies and ``{resource: value}`` response envelopes for the HTTP API."""

from typing import Any, List, Optional

from pydantic import BaseModel, field_validator

from storefront.domain.models import Cart, CamelModel, DiscountCode, Metrics, Order, Product


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class AddItemRequest(CamelModel):
    # Validated by the store (InvalidQuantity / ProductNotFound).
    product_id: Optional[str] = None
    quantity: Any = None

    model_config = {
        "json_schema_extra": {
            "examples": [{"productId": "p1", "quantity": 1}]
        }
    }

    @field_validator("quantity", mode="before")
    @classmethod
    def parse_numeric_string(cls, value):
        # "2" -> 2, "2.5" -> 2.5; anything else (booleans included) is left for the store.
        if isinstance(value, str):
            for parse in (int, float):
                try:
                    return parse(value)
                except ValueError:
                    continue
        return value


class CheckoutRequest(CamelModel):
    discount_code: Optional[str] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class ProductsResponse(BaseModel):
    products: List[Product]


class CartResponse(BaseModel):
    cart: Cart


class OrderResponse(BaseModel):
    order: Order


class DiscountResponse(BaseModel):
    discount: DiscountCode


class MetricsResponse(BaseModel):
    metrics: Metrics


class ErrorResponse(BaseModel):
    message: str
