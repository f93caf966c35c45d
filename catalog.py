"""catalog.py
Typed product catalog: a shared `AbstractProduct` base with two concrete
kinds, `Clothes` and `Electronics`.

Every field is declared with its type and re-validated on assignment, so the
generic `set_property` refuses values of the wrong type instead of comparing
runtime types by hand.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator

import product
from reviews import DATE_FORMAT, PropertyAccess, Review, ReviewedItem, parse_date


class AbstractProduct(PropertyAccess, ReviewedItem):
    """Base of all catalog products; instantiate a concrete subclass instead."""

    id: str = Field(default_factory=product.new_product_id)
    name: str
    description: str
    price: float
    quantity: int
    images: List[str]
    date: datetime = Field(default_factory=datetime.now)
    brand: str

    def __init__(self, **data: Any):
        if type(self) is AbstractProduct:
            raise TypeError("Cannot instantiate abstract class AbstractProduct")
        super().__init__(**data)

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v):
        return parse_date(v)

    # ------------------------------------------------------------------ #
    def get_full_information(self) -> str:
        """One ``field:<TAB>value`` line per field, reviews listed after quantity."""
        names = [name for name in type(self).model_fields if name != "reviews"]
        names.insert(names.index("quantity") + 1, "reviews")
        lines = [f"{name}:\t{_format_value(getattr(self, name))}" for name in names]
        return "\n".join(lines)

    def get_price_for_quantity(self, quantity: int) -> str:
        """Cost of *quantity* units formatted as ``$0.00``."""
        return f"${quantity * self.price:.2f}"

    def get_image(self, index: int = 0) -> Optional[str]:
        if 0 <= index < len(self.images):
            return self.images[index]
        return None


class Clothes(AbstractProduct):
    material: str
    color: str


class Electronics(AbstractProduct):
    warranty: str
    power: str


def _format_value(value: Any) -> str:
    if isinstance(value, datetime):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join(v.id if isinstance(v, Review) else str(v) for v in value)
    return str(value)


# --------------------------------------------------------------------------- #

def _check_products(products: List[AbstractProduct]) -> None:
    for p in products:
        if not isinstance(p, AbstractProduct):
            raise TypeError(f"Incompatible types: expected AbstractProduct, got {type(p).__name__}")


def search_products(products: List[AbstractProduct], search: str) -> List[AbstractProduct]:
    """Catalog products whose name or description contains *search*."""
    _check_products(products)
    return product.search_products(products, search)


def sort_products(products: List[AbstractProduct], sort_rule: str) -> List[AbstractProduct]:
    _check_products(products)
    return product.sort_products(products, sort_rule)
