from enum import Enum
from typing import Optional


class InventoryError(Exception):
    """
    Base class for store errors.

    Every subclass is recoverable: the caller reports it and carries on.
    """

    def __init__(self, message: str, product_id: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.product_id = product_id

    def __str__(self) -> str:
        return self.message


class DuplicateIDError(InventoryError):
    def __init__(self, product_id: int):
        super().__init__(f"Product ID #{product_id} already exists", product_id)


class NotFoundError(InventoryError):
    def __init__(self, product_id: int):
        super().__init__(f"Product ID #{product_id} not found", product_id)


class EmptyStoreError(InventoryError):
    def __init__(self):
        super().__init__("No products found in the inventory")


class DeleteOutcome(str, Enum):
    REMOVED = "removed"
    CANCELED = "canceled"
