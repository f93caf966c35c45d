"""reviews.py
Customer review records shared by both product models.

A review carries four scores (service, price, value, quality), each clamped
into 0..5 on construction and on every assignment. `ReviewedItem` is the
review-list capability mixed into `product.Product` and
`catalog.AbstractProduct`.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

RATING_MIN = 0.0
RATING_MAX = 5.0

# uk-UA rendering of Date.toLocaleString, e.g. "11.09.2023, 10:10:10"
DATE_FORMAT = "%d.%m.%Y, %H:%M:%S"


def adjust_rating(rating: float) -> float:
    """Clamp *rating* into the 0..5 range."""
    return max(RATING_MIN, min(RATING_MAX, rating))


def parse_date(value):
    """Accept ISO text ("2023-09-11 10:10:10") wherever a datetime is expected."""
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


class PropertyAccess:
    """Generic get/set by field name for pydantic models."""

    def get_property(self, name: str) -> Any:
        self._check_property(name)
        return getattr(self, name)

    def set_property(self, name: str, value: Any) -> None:
        """Assign a declared field; a value of the wrong type raises ValidationError."""
        self._check_property(name)
        setattr(self, name, value)

    def _check_property(self, name: str) -> None:
        if name not in type(self).model_fields:
            raise AttributeError(f"{type(self).__name__} has no property {name!r}")


class Rating(BaseModel):
    model_config = ConfigDict(strict=True, validate_assignment=True)

    service: float
    price: float
    value: float
    quality: float

    @field_validator("service", "price", "value", "quality")
    @classmethod
    def clamp(cls, v: float) -> float:
        return adjust_rating(v)

    def average(self) -> float:
        return (self.service + self.price + self.value + self.quality) / 4


class Review(PropertyAccess, BaseModel):
    model_config = ConfigDict(strict=True, validate_assignment=True)

    id: str
    author: str
    date: datetime
    comment: str
    rating: Rating

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v):
        return parse_date(v)

    @classmethod
    def create(
        cls,
        review_id: str,
        author: str,
        date: str | datetime,
        comment: str,
        service: float,
        price: float,
        value: float,
        quality: float,
    ) -> "Review":
        """Positional constructor mirroring the four-score review form."""
        return cls(
            id=review_id,
            author=author,
            date=date,
            comment=comment,
            rating=Rating(service=service, price=price, value=value, quality=quality),
        )

    def set_rating(self, service: float, price: float, value: float, quality: float) -> None:
        self.rating = Rating(service=service, price=price, value=value, quality=quality)

    def formatted_date(self) -> str:
        return self.date.strftime(DATE_FORMAT)

    def average(self) -> float:
        return self.rating.average()


class ReviewedItem(BaseModel):
    """Anything that collects reviews."""

    model_config = ConfigDict(strict=True, validate_assignment=True)

    reviews: List[Review] = Field(default_factory=list)

    def get_review_by_id(self, review_id: str) -> Optional[Review]:
        for review in self.reviews:
            if review.id == review_id:
                return review
        return None

    def add_review(
        self,
        review_id: str,
        author: str,
        date: str | datetime,
        comment: str,
        service: float,
        price: float,
        value: float,
        quality: float,
    ) -> Review:
        review = Review.create(review_id, author, date, comment, service, price, value, quality)
        self.reviews.append(review)
        return review

    def delete_review(self, review_id: str) -> None:
        """Remove the first review with *review_id*; unknown ids are ignored."""
        for i, review in enumerate(self.reviews):
            if review.id == review_id:
                del self.reviews[i]
                return

    def get_average_rating(self) -> Optional[float]:
        """Mean of the per-review averages, ``None`` while there are no reviews."""
        if not self.reviews:
            return None
        return sum(r.average() for r in self.reviews) / len(self.reviews)
