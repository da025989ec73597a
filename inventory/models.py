# inventory/models.py
from pydantic import BaseModel, model_validator
from typing import Optional, Dict, Any


class Product(BaseModel):
    id: int
    name: str
    quantity: int
    price: float


class ProductUpdate(BaseModel):
    """
    Partial update for a Product.

    A field is "absent" when it was never passed (it is not in
    model_fields_set) and "present" otherwise. Zero, 0.0 and "" are real
    values, so absence is never inferred from a falsy value.
    """
    id: Optional[int] = None
    name: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[float] = None

    @model_validator(mode="after")
    def _reject_explicit_none(self):
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} must not be None")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)

    def is_empty(self) -> bool:
        return not self.model_fields_set
