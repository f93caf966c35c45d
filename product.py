"""product.py
Single product type with a list of sizes and one active size.

Sizes are always stored upper-case. Deleting the active size moves the active
marker to the first remaining size.

    shirt = Product(name="AT-shirt", description="A red T-shirt", price=20.5,
                    brand="MyBrand", active_size="xl", quantity=4, images=["image1"])
    shirt.add_size("l")          # sizes == ["XL", "L"]
"""
from __future__ import annotations

import random
import string
from datetime import datetime
from operator import attrgetter
from typing import Any, List, Optional

from pydantic import Field, field_validator, model_validator

from reviews import DATE_FORMAT, ReviewedItem, parse_date

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 8

SORT_RULES = ("name", "price", "id")


def new_product_id() -> str:
    """Random 8-character base-36 identifier."""
    return "".join(random.choices(ID_ALPHABET, k=ID_LENGTH))


class Product(ReviewedItem):
    id: str = Field(default_factory=new_product_id)
    name: str
    description: str
    price: float
    brand: str
    sizes: List[str]
    active_size: str
    quantity: int
    date: datetime = Field(default_factory=datetime.now)
    images: List[str]

    @model_validator(mode="before")
    @classmethod
    def default_sizes(cls, data: Any) -> Any:
        # a new product starts with its active size as the only size
        if isinstance(data, dict) and "sizes" not in data:
            data = {**data, "sizes": [data.get("active_size")]}
        return data

    @field_validator("sizes")
    @classmethod
    def upper_sizes(cls, v: List[str]) -> List[str]:
        return [s.upper() for s in v]

    @field_validator("active_size")
    @classmethod
    def upper_active_size(cls, v: str) -> str:
        return v.upper()

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v):
        return parse_date(v)

    # ------------------------------------------------------------------ #
    def formatted_date(self) -> str:
        return self.date.strftime(DATE_FORMAT)

    def get_image(self, index: int = 0) -> Optional[str]:
        if 0 <= index < len(self.images):
            return self.images[index]
        return None

    def add_size(self, size: str) -> None:
        self.sizes = self.sizes + [size]

    def delete_size(self, size: str) -> None:
        size = size.upper()
        if size in self.sizes:
            self.sizes.remove(size)
        if size == self.active_size and self.sizes:
            self.active_size = self.sizes[0]


# --------------------------------------------------------------------------- #

def search_products(products: List[Product], search: str) -> List[Product]:
    """Products whose name or description contains *search* (case-insensitive)."""
    search = search.lower()
    return [p for p in products if search in p.name.lower() or search in p.description.lower()]


def sort_products(products: List[Product], sort_rule: str) -> List[Product]:
    """Sort ascending by name, price or id; other rules return *products* unchanged."""
    if sort_rule not in SORT_RULES:
        return products
    return sorted(products, key=attrgetter(sort_rule))
