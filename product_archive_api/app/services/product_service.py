"""
Business rules for products.

``ProductService`` applies the same validation gate on create and
update: a product needs a non-empty name, a positive finite price and
a non-negative quantity.  A rejected product, like an unknown id, is
reported to the caller as ``None``; the routes turn that into an
error response.
"""

import logging
import math
from typing import Dict, List, Optional

from ..schemas.product import Product
from .product_store import ProductStore


logger = logging.getLogger(__name__)


class ProductService:
    """Validation layer over a :class:`ProductStore`."""

    def __init__(self, store: ProductStore) -> None:
        self.store = store

    @staticmethod
    def _is_valid(product: Product) -> bool:
        if not product.name:
            logger.error("Product name is empty")
            return False
        if not math.isfinite(product.price) or product.price <= 0:
            logger.error("Product price is not a positive number")
            return False
        if product.quantity < 0:
            logger.error("Product quantity is less than zero")
            return False
        return True

    def save_product(self, product: Product) -> Optional[Product]:
        logger.debug("Adding product %s", product)
        if not self._is_valid(product):
            return None
        return self.store.add(product)

    def get_products(self) -> Optional[List[Product]]:
        return self.store.list_products()

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        logger.debug("Searching for product %s", product_id)
        return self.store.find_by_id(product_id)

    def search_products(self, prefix: str) -> List[Product]:
        return self.store.search(prefix)

    def update_product(self, product_id: int, product: Product) -> Optional[Product]:
        logger.debug("Updating product %s with %s", product_id, product)
        if not self._is_valid(product):
            return None
        return self.store.update(product_id, product)

    def delete_product(self, product_id: int) -> bool:
        logger.debug("Deleting product %s", product_id)
        return self.store.delete(product_id)

    def get_products_by_name(self) -> Dict[str, List[Product]]:
        return self.store.group_by_name()

    def get_products_by_price(self) -> Dict[float, List[Product]]:
        return self.store.group_by_price()

    def get_products_by_quantity(self) -> Dict[int, List[Product]]:
        return self.store.group_by_quantity()

    def get_products_by_id(self) -> Dict[int, List[Product]]:
        return self.store.group_by_id()
