import threading
from typing import Dict, List, Optional

import structlog

from .core import DeleteOutcome, DuplicateIDError, EmptyStoreError, NotFoundError
from .models import Product, ProductUpdate

logger = structlog.get_logger(__name__)

# This file holds the in-memory product store.


class ProductStore:
    """
    In-memory collection of products keyed by id.

    Products are copied on the way in and out, so nothing outside the store
    can change a stored product. Each operation runs under one store-wide
    lock.
    """

    def __init__(self, strict_empty: bool = True):
        self._products: Dict[int, Product] = {}
        self._lock = threading.RLock()
        self.strict_empty = strict_empty

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        with self._lock:
            return product_id in self._products

    def exists(self, product_id: int) -> bool:
        with self._lock:
            return product_id in self._products

    def ids(self) -> List[int]:
        with self._lock:
            return sorted(self._products)

    # Create
    def add(self, product: Product) -> Product:
        with self._lock:
            if product.id in self._products:
                logger.warning("add_rejected", product_id=product.id, reason="duplicate_id")
                raise DuplicateIDError(product.id)
            self._products[product.id] = product.model_copy()
            logger.info("product_added", product_id=product.id, name=product.name)
            return product.model_copy()

    # Read
    def get(self, product_id: int) -> Product:
        with self._lock:
            p = self._products.get(product_id)
            if p is None:
                raise NotFoundError(product_id)
            return p.model_copy()

    # Update
    def update(self, product_id: int, changes: Optional[ProductUpdate] = None, **fields) -> Product:
        if changes is None:
            changes = ProductUpdate(**fields)
        elif fields:
            raise TypeError("pass either a ProductUpdate or keyword fields, not both")

        with self._lock:
            current = self._products.get(product_id)
            if current is None:
                logger.warning("update_rejected", product_id=product_id, reason="not_found")
                raise NotFoundError(product_id)

            # Build and validate the whole result before touching the map.
            updated = Product(**{**current.model_dump(), **changes.changes()})
            rekeyed = updated.id != product_id
            if rekeyed and updated.id in self._products:
                logger.warning("update_rejected", product_id=product_id, new_id=updated.id, reason="duplicate_id")
                raise DuplicateIDError(updated.id)

            del self._products[product_id]
            self._products[updated.id] = updated
            logger.info("product_updated", product_id=product_id, new_id=updated.id,
                        fields=sorted(changes.model_fields_set), rekeyed=rekeyed)
            return updated.model_copy()

    # Delete
    def delete_if_confirmed(self, product_id: int, confirmed: bool) -> DeleteOutcome:
        with self._lock:
            if product_id not in self._products:
                logger.warning("delete_rejected", product_id=product_id, reason="not_found")
                raise NotFoundError(product_id)
            if not confirmed:
                logger.info("delete_canceled", product_id=product_id)
                return DeleteOutcome.CANCELED
            del self._products[product_id]
            logger.info("product_deleted", product_id=product_id)
            return DeleteOutcome.REMOVED

    # List
    def list(self) -> List[Product]:
        with self._lock:
            if not self._products and self.strict_empty:
                raise EmptyStoreError()
            return [p.model_copy() for p in self._products.values()]
