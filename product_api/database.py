# product_api/database.py
import threading
from typing import List, Optional

from .errors import not_found
from .models import Product

# Records every fresh store starts with. State is process-lifetime only.

SEED_PRODUCTS: List[Product] = [
    Product(id="1", name="Laptop", description="High-performance laptop with 16GB RAM",
            price=1200, category="electronics", in_stock=True),
    Product(id="2", name="Smartphone", description="Latest model with 128GB storage",
            price=800, category="electronics", in_stock=True),
    Product(id="3", name="Coffee Maker", description="Programmable coffee maker with timer",
            price=50, category="kitchen", in_stock=False),
    Product(id="4", name="Desk Chair", description="Ergonomic office chair with lumbar support",
            price=250, category="furniture", in_stock=True),
    Product(id="5", name="Headphones", description="Noise-cancelling wireless headphones",
            price=150, category="electronics", in_stock=True),
]


def _missing(product_id: str):
    return not_found(f"Product with ID {product_id} not found.")


class ProductStore:
    """Ordered in-memory product collection.

    Records are frozen models, so ``list()`` handing out a fresh list is
    enough to keep callers away from the internal state. Mutations hold
    ``_lock`` for their whole duration.
    """

    def __init__(self, products: Optional[List[Product]] = None):
        self._products: List[Product] = list(products or [])
        self._lock = threading.Lock()

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls(SEED_PRODUCTS)

    def __len__(self) -> int:
        return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def list(self) -> List[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def insert(self, product: Product) -> Product:
        with self._lock:
            self._products.append(product)
        return product

    def replace(self, product_id: str, product: Product) -> Product:
        with self._lock:
            idx = self._index_of(product_id)
            if idx == -1:
                raise _missing(product_id)
            self._products[idx] = product
        return product

    def remove(self, product_id: str) -> Product:
        with self._lock:
            idx = self._index_of(product_id)
            if idx == -1:
                raise _missing(product_id)
            return self._products.pop(idx)
