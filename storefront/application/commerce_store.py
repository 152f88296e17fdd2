import logging
import math
import threading
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

import pytz

from storefront.core.config import settings
from storefront.domain.catalog import DEFAULT_CATALOG
from storefront.domain.errors import (
    DiscountAlreadyActive,
    DiscountNotApplicable,
    EmptyCart,
    InvalidDiscount,
    InvalidQuantity,
    NotEligible,
    ProductNotFound,
)
from storefront.domain.models import (
    Cart,
    CartItem,
    DiscountCode,
    DiscountStatus,
    Metrics,
    Order,
    OrderItem,
    Product,
)
from storefront.interfaces.ICommerceStore import ICommerceStore

logger = logging.getLogger(__name__)

BASE36_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
CODE_PREFIX = "SAVE"


def default_clock() -> datetime:
    return datetime.now(pytz.timezone(settings.TIMEZONE))


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def normalize_quantity(quantity) -> int:
    """Returns ``quantity`` as a positive int or raises InvalidQuantity."""
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        raise InvalidQuantity()
    if isinstance(quantity, float):
        if not math.isfinite(quantity):
            raise InvalidQuantity()
        if not quantity.is_integer():
            raise InvalidQuantity("Quantity must be a whole number")
        quantity = int(quantity)
    if quantity <= 0:
        raise InvalidQuantity()
    return quantity


class CommerceStore(ICommerceStore):
    """
    In-memory catalog, carts, orders and discount codes.

    Every public operation runs under one lock, so the store can be shared by
    the threadpool FastAPI runs sync handlers in. Returned models are copies;
    callers never hold references into the store's state.
    """

    def __init__(
        self,
        products: Iterable[Product] = DEFAULT_CATALOG,
        discount_interval: Optional[int] = None,
        discount_percent: Optional[float] = None,
        clock: Callable[[], datetime] = default_clock,
    ):
        if discount_interval is None:
            discount_interval = settings.DISCOUNT_INTERVAL
        if discount_percent is None:
            discount_percent = settings.DISCOUNT_PERCENT
        if discount_interval <= 0:
            raise ValueError("discount_interval must be positive")
        if not 0 < discount_percent <= 1:
            raise ValueError("discount_percent must be in (0, 1]")

        self.discount_interval = discount_interval
        self.discount_percent = discount_percent

        self._products: Dict[str, Product] = {p.id: p for p in products}
        self._clock = clock
        self._lock = threading.RLock()

        self._carts: Dict[str, List[CartItem]] = {}
        self._orders: List[Order] = []
        self._discount_codes: List[DiscountCode] = []

    # --- CATALOG ---

    def list_products(self) -> List[Product]:
        return list(self._products.values())

    # --- CARTS ---

    def get_cart(self, user_id: str) -> Cart:
        with self._lock:
            return self._cart_snapshot(user_id)

    def add_item_to_cart(self, user_id: str, product_id: str, quantity) -> Cart:
        quantity = normalize_quantity(quantity)
        if product_id not in self._products:
            raise ProductNotFound()

        with self._lock:
            items = self._carts.setdefault(user_id, [])
            existing = next((item for item in items if item.product_id == product_id), None)
            if existing:
                existing.quantity += quantity
            else:
                items.append(CartItem(product_id=product_id, quantity=quantity))

            logger.info(f"🛒 Cart {user_id}: +{quantity}x {product_id}")
            return self._cart_snapshot(user_id)

    # --- DISCOUNTS ---

    def generate_discount_code(self) -> DiscountCode:
        with self._lock:
            next_order_number = len(self._orders) + 1
            self._expire_stale_discounts(next_order_number)

            if next_order_number % self.discount_interval != 0:
                raise NotEligible(next_order_number, self.discount_interval)

            if self._active_discount():
                raise DiscountAlreadyActive()

            now = self._clock()
            suffix = to_base36(int(now.timestamp() * 1000))[-6:]
            discount = DiscountCode(
                code=f"{CODE_PREFIX}-{next_order_number}-{suffix}",
                percentage=self.discount_percent,
                status=DiscountStatus.ACTIVE,
                created_at=now,
                eligible_order_number=next_order_number,
            )
            self._discount_codes.append(discount)

            logger.info(f"🎟️ Discount {discount.code} minted for order #{next_order_number}")
            return discount.model_copy()

    # --- CHECKOUT ---

    def checkout(self, user_id: str, discount_code: Optional[str] = None) -> Order:
        # Blank means no code; anything else must match exactly.
        code = discount_code if discount_code and discount_code.strip() else None

        with self._lock:
            cart_items = self._carts.get(user_id)
            if not cart_items:
                raise EmptyCart()

            # Prices are looked up now, not when the items were added.
            order_items = [self._order_item(item) for item in cart_items]
            subtotal = sum(item.price * item.quantity for item in order_items)

            order_number = len(self._orders) + 1
            self._expire_stale_discounts(order_number)

            redeemed = None
            if code:
                active = self._active_discount()
                if active is None or active.code != code:
                    raise InvalidDiscount()
                if active.eligible_order_number != order_number:
                    raise DiscountNotApplicable(active.eligible_order_number)
                redeemed = active

            discount_amount = subtotal * redeemed.percentage if redeemed else 0
            now = self._clock()
            order = Order(
                id=order_number,
                user_id=user_id,
                items=order_items,
                subtotal=subtotal,
                discount_amount=discount_amount,
                total=subtotal - discount_amount,
                discount_code=redeemed.code if redeemed else None,
                created_at=now,
            )

            if redeemed:
                redeemed.status = DiscountStatus.USED
                redeemed.used_at = now
                redeemed.used_on_order = order_number
                logger.info(f"✅ Discount {redeemed.code} used on order #{order_number}")

            self._orders.append(order)
            del self._carts[user_id]

            logger.info(f"📦 Order #{order.id} for {user_id}: total={order.total}")
            return order.model_copy(deep=True)

    # --- METRICS ---

    def get_metrics(self) -> Metrics:
        with self._lock:
            return Metrics(
                total_items_purchased=sum(
                    item.quantity for order in self._orders for item in order.items
                ),
                total_purchase_amount=sum(order.total for order in self._orders),
                total_discount_amount=sum(order.discount_amount for order in self._orders),
                discount_codes=[code.model_copy() for code in self._discount_codes],
            )

    def reset(self) -> None:
        """Drops carts, orders and discount codes. The catalog is kept."""
        with self._lock:
            self._carts.clear()
            self._orders = []
            self._discount_codes = []
            logger.info("🧹 Store reset")

    # --- HELPERS ---

    def _cart_snapshot(self, user_id: str) -> Cart:
        items = self._carts.get(user_id, [])
        return Cart(user_id=user_id, items=[item.model_copy() for item in items])

    def _order_item(self, item: CartItem) -> OrderItem:
        product = self._products.get(item.product_id)
        if product is None:
            raise ProductNotFound("Product not found in catalog")
        return OrderItem(product_id=item.product_id, quantity=item.quantity, price=product.price)

    def _active_discount(self) -> Optional[DiscountCode]:
        return next((code for code in self._discount_codes if code.is_active), None)

    def _expire_stale_discounts(self, current_order_number: int) -> None:
        active = self._active_discount()
        if active and active.eligible_order_number < current_order_number:
            active.status = DiscountStatus.EXPIRED
            active.used_at = self._clock()
            logger.info(
                f"⌛ Discount {active.code} expired "
                f"(order #{active.eligible_order_number} passed)"
            )
