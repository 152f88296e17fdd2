from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # Serialized as camelCase on the wire, accepts snake_case too.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Product(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float


class CartItem(CamelModel):
    product_id: str
    quantity: int


class Cart(CamelModel):
    user_id: str
    items: List[CartItem] = []


class OrderItem(CamelModel):
    """One order line. ``price`` is the unit price at checkout time."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int
    price: float


class Order(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: int
    user_id: str
    items: List[OrderItem]
    subtotal: float
    discount_amount: float = 0
    total: float
    discount_code: Optional[str] = None  # only set when a code was redeemed
    created_at: datetime


class DiscountStatus(str, Enum):
    ACTIVE = "active"
    USED = "used"
    EXPIRED = "expired"


class DiscountCode(CamelModel):
    code: str
    percentage: float
    status: DiscountStatus = DiscountStatus.ACTIVE
    created_at: datetime
    used_at: Optional[datetime] = None
    used_on_order: Optional[int] = None
    eligible_order_number: int

    @property
    def is_active(self) -> bool:
        return self.status == DiscountStatus.ACTIVE


class Metrics(CamelModel):
    total_items_purchased: int = 0
    total_purchase_amount: float = 0
    total_discount_amount: float = 0
    discount_codes: List[DiscountCode] = []
