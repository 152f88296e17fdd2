"""Domain errors raised by the commerce store.

The HTTP layer renders these as ``{"message": ...}`` using ``status_code``.
"""


class StoreError(Exception):
    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidQuantity(StoreError):
    default_message = "Quantity must be greater than zero"


class ProductNotFound(StoreError):
    status_code = 404
    default_message = "Product not found"


class EmptyCart(StoreError):
    default_message = "Cart is empty"


class NotEligible(StoreError):
    """The next order number is not a multiple of the discount interval."""

    def __init__(self, order_number: int, interval: int):
        self.order_number = order_number
        self.interval = interval
        super().__init__(
            f"Next order (#{order_number}) is not eligible for a discount. "
            f"Interval is every {interval} orders."
        )


class DiscountAlreadyActive(StoreError):
    default_message = "An active discount code already exists"


class InvalidDiscount(StoreError):
    default_message = "Invalid or expired discount code"


class DiscountNotApplicable(StoreError):
    """The active code belongs to a different order number."""

    def __init__(self, eligible_order_number: int):
        self.eligible_order_number = eligible_order_number
        super().__init__(f"Discount code only applies to order #{eligible_order_number}")
