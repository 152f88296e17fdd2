from typing import Tuple

from storefront.domain.models import Product

# Fixed at process start.
DEFAULT_CATALOG: Tuple[Product, ...] = (
    Product(id="p1", name="Laptop", price=1200),
    Product(id="p2", name="Headphones", price=150),
    Product(id="p3", name="Keyboard", price=90),
)
