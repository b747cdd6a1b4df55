import threading
import uuid
from typing import List, Optional, Set

from .core import ProductFilter
from .models import Product, ProductIn

# This file holds the in-memory product store and its lock.

SEED_PRODUCTS = [
    Product(id="1", name="Laptop", description="High-performance laptop with 16GB RAM",
            category="electronics", price=1200, in_stock=True),
    Product(id="2", name="Smartphone", description="Latest model with 128GB storage",
            category="electronics", price=800, in_stock=True),
    Product(id="3", name="Coffee Maker", description="Programmable coffee maker with timer",
            category="kitchen", price=50, in_stock=False),
]


class ProductNotFound(LookupError):
    def __init__(self, product_id: str):
        super().__init__(product_id)
        self.product_id = product_id


class ProductStore:
    """Ordered, lock-guarded collection of products.

    Ids are never handed out twice, even after the product is deleted.
    """

    def __init__(self, products: Optional[List[Product]] = None):
        self._lock = threading.RLock()
        self._products: List[Product] = [p.model_copy() for p in (products or [])]
        self._issued_ids: Set[str] = {p.id for p in self._products}

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls(SEED_PRODUCTS)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        raise ProductNotFound(product_id)

    def _new_id(self) -> str:
        pid = str(uuid.uuid4())
        while pid in self._issued_ids:
            pid = str(uuid.uuid4())
        self._issued_ids.add(pid)
        return pid

    def list(self, product_filter: Optional[ProductFilter] = None) -> List[Product]:
        with self._lock:
            if product_filter is None:
                return list(self._products)
            return [p for p in self._products if product_filter.matches(p)]

    def get_by_id(self, product_id: str) -> Product:
        with self._lock:
            return self._products[self._index_of(product_id)]

    def insert(self, payload: ProductIn) -> Product:
        with self._lock:
            product = Product(id=self._new_id(), **payload.model_dump())
            self._products.append(product)
            return product

    def replace(self, product_id: str, payload: ProductIn) -> Product:
        with self._lock:
            idx = self._index_of(product_id)
            product = Product(id=product_id, **payload.model_dump())
            self._products[idx] = product
            return product

    def delete(self, product_id: str) -> Product:
        with self._lock:
            return self._products.pop(self._index_of(product_id))
