from abc import ABC, abstractmethod
from typing import List, Optional

from storefront.domain.models import Cart, DiscountCode, Metrics, Order, Product

class ICommerceStore(ABC):
    @abstractmethod
    def list_products(self) -> List[Product]:
        pass

    @abstractmethod
    def get_cart(self, user_id: str) -> Cart:
        pass

    @abstractmethod
    def add_item_to_cart(self, user_id: str, product_id: str, quantity) -> Cart:
        pass

    @abstractmethod
    def generate_discount_code(self) -> DiscountCode:
        pass

    @abstractmethod
    def checkout(self, user_id: str, discount_code: Optional[str] = None) -> Order:
        pass

    @abstractmethod
    def get_metrics(self) -> Metrics:
        pass

    @abstractmethod
    def reset(self) -> None:
        pass
