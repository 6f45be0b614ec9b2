"""
In-memory product list.

``ProductStore`` exclusively owns the backing list and only hands out
copies of the stored products.  Every public
method takes the store lock, so a read-modify-write such as
``update`` cannot interleave with an ``add`` or ``delete`` issued by
another request.  Nothing is persisted; the list lives as long as the
process.

Lookups return the first match in insertion order.  Ids are supplied
by the caller and are not checked for uniqueness.
"""

import logging
import threading
from typing import Callable, Dict, Hashable, List, Optional

from ..schemas.product import Product


logger = logging.getLogger(__name__)


SAMPLE_PRODUCTS = [
    Product(id=1, name="aproduct 1", quantity=10, price=1000, image_uri=""),
    Product(id=2, name="bproduct 2", quantity=20, price=2000, image_uri=""),
    Product(id=3, name="cproduct 3", quantity=30, price=3000, image_uri=""),
]


class ProductStore:
    """Owns the list of products and the lock guarding it."""

    def __init__(self, products: Optional[List[Product]] = None) -> None:
        self._lock = threading.Lock()
        self._products: List[Product] = [p.model_copy() for p in products or []]

    @classmethod
    def with_sample_products(cls) -> "ProductStore":
        logger.debug("Creating store with sample products")
        return cls(SAMPLE_PRODUCTS)

    def list_products(self) -> Optional[List[Product]]:
        """Return all products, or ``None`` when the store is empty."""
        with self._lock:
            if not self._products:
                return None
            return [p.model_copy() for p in self._products]

    def find_by_id(self, product_id: int) -> Optional[Product]:
        with self._lock:
            for product in self._products:
                if product.id == product_id:
                    return product.model_copy()
        logger.info("No product found by id %s", product_id)
        return None

    def search(self, prefix: str) -> List[Product]:
        """Return products whose name starts with ``prefix``."""
        with self._lock:
            return [p.model_copy() for p in self._products if p.name and p.name.startswith(prefix)]

    def add(self, product: Product) -> Product:
        stored = product.model_copy()
        with self._lock:
            self._products.append(stored)
        logger.debug("Added product %s", stored)
        return stored

    def delete(self, product_id: int) -> bool:
        """Remove every product carrying ``product_id``.

        Returns ``True`` if at least one product was removed.
        """
        with self._lock:
            kept = [p for p in self._products if p.id != product_id]
            removed = len(self._products) - len(kept)
            self._products = kept
        if removed:
            logger.info("Deleted %d product(s) with id %s", removed, product_id)
        else:
            logger.info("Product with id %s not found", product_id)
        return removed > 0

    def update(self, product_id: int, product: Product) -> Optional[Product]:
        """Replace the first product carrying ``product_id``.

        When no product matches, the replacement lands at index 0 and
        the returned summary carries id 0.  A copy of the incoming
        product is stored; the return value is a separate summary
        holding the id that was found.  Returns ``None`` only when the store is
        empty and there is no slot to write to.
        """
        with self._lock:
            index, found_id, matched = 0, 0, False
            for i, existing in enumerate(self._products):
                if existing.id == product_id:
                    index, found_id, matched = i, product_id, True
                    break
            if not self._products:
                logger.info("Cannot update product %s: store is empty", product_id)
                return None
            self._products[index] = product.model_copy()
        if not matched:
            logger.warning("Product %s not found, overwrote the product at index 0", product_id)
        summary = Product(
            id=found_id,
            name=product.name,
            quantity=product.quantity,
            price=product.price,
        )
        logger.debug("Updated product %s", summary)
        return summary

    def _group_by(self, key: Callable[[Product], Hashable]) -> Dict[Hashable, List[Product]]:
        groups: Dict[Hashable, List[Product]] = {}
        with self._lock:
            for product in self._products:
                groups.setdefault(key(product), []).append(product.model_copy())
        return groups

    def group_by_name(self) -> Dict[str, List[Product]]:
        return self._group_by(lambda p: p.name)

    def group_by_price(self) -> Dict[float, List[Product]]:
        return self._group_by(lambda p: p.price)

    def group_by_quantity(self) -> Dict[int, List[Product]]:
        return self._group_by(lambda p: p.quantity)

    def group_by_id(self) -> Dict[int, List[Product]]:
        return self._group_by(lambda p: p.id)
