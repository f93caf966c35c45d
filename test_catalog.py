"""
test_catalog.py
---------------
Typed catalog products: abstract base, generic property access, reviews and
the type-checked search / sort helpers.
"""
from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from catalog import AbstractProduct, Clothes, Electronics, search_products, sort_products
from product import Product
from reviews import Review


@pytest.fixture
def shirt() -> Clothes:
    return Clothes(
        name="Shirt",
        description="A blue shirt",
        price=15.30,
        brand="MyClothesBrand",
        quantity=5,
        images=["image 1"],
        material="Syntetic",
        color="Blue",
    )


@pytest.fixture
def kettle() -> Electronics:
    return Electronics(
        name="Kettle",
        description="Electric kettle",
        price=35.0,
        brand="Heat",
        quantity=2,
        images=[],
        warranty="2 years",
        power="2200W",
    )


def test_abstract_product_cannot_be_instantiated():
    with pytest.raises(TypeError):
        AbstractProduct(
            name="x", description="y", price=1.0, brand="b", quantity=1, images=[],
        )


@pytest.mark.parametrize("name, value", [
    ("id", "245s62"),
    ("name", "Shirt"),
    ("description", "Pretty shirt"),
    ("price", 520.35),
    ("brand", "Guchi"),
    ("quantity", 24),
    ("images", ["images1"]),
    ("material", "silk"),
    ("color", "pink"),
])
def test_set_and_get_property(shirt, name, value):
    shirt.set_property(name, value)
    assert shirt.get_property(name) == value


def test_set_date_property(shirt):
    shirt.set_property("date", datetime(2023, 9, 11, 10, 10, 10))
    assert shirt.get_property("date").strftime("%d.%m.%Y, %H:%M:%S") == "11.09.2023, 10:10:10"

    shirt.set_property("date", "2024-01-02 03:04:05")
    assert shirt.get_property("date") == datetime(2024, 1, 2, 3, 4, 5)


def test_set_property_rejects_wrong_type(shirt):
    with pytest.raises(ValidationError):
        shirt.set_property("price", "cheap")
    with pytest.raises(ValidationError):
        shirt.set_property("quantity", 2.5)
    assert shirt.price == 15.30


def test_unknown_property_raises(shirt, kettle):
    with pytest.raises(AttributeError):
        shirt.set_property("warranty", "1 year")
    with pytest.raises(AttributeError):
        kettle.get_property("color")


def test_full_information(shirt):
    shirt.set_property("id", "abc12345")
    shirt.set_property("date", "2023-09-11 10:10:10")
    shirt.add_review("12", "Tom", "2023-05-03 11:03:24", "Very Good", 1, 2, 3, 4)

    info = shirt.get_full_information()
    lines = info.split("\n")

    assert not info.endswith("\n")
    assert "id:\tabc12345" in lines
    assert "name:\tShirt" in lines
    assert "price:\t15.3" in lines
    assert "quantity:\t5" in lines
    assert "images:\timage 1" in lines
    assert "date:\t11.09.2023, 10:10:10" in lines
    assert "reviews:\t12" in lines
    assert "material:\tSyntetic" in lines
    assert "color:\tBlue" in lines
    assert [line.split(":\t")[0] for line in lines] == [
        "id", "name", "description", "price", "quantity", "reviews",
        "images", "date", "brand", "material", "color",
    ]


def test_whole_price_prints_without_decimals(kettle):
    assert "price:\t35" in kettle.get_full_information().split("\n")


def test_price_for_quantity(shirt):
    assert shirt.get_price_for_quantity(3) == "$45.90"
    assert shirt.get_price_for_quantity(0) == "$0.00"


def test_get_image(shirt):
    assert shirt.get_image(0) == "image 1"
    assert shirt.get_image(3) is None


def test_reviews(shirt):
    shirt.set_property("reviews", [Review.create("52", "Anna", "2023-09-11 10:10:10", "Any comment", 5, 2, 5, 7)])
    assert shirt.get_review_by_id("52") == Review.create(
        "52", "Anna", "2023-09-11 10:10:10", "Any comment", 5, 2, 5, 7
    )

    shirt.add_review("12", "Tom", "2023-05-03 11:03:24", "Very Good", 1, 2, 3, 4)
    shirt.delete_review("52")
    assert shirt.get_property("reviews") == [
        Review.create("12", "Tom", "2023-05-03 11:03:24", "Very Good", 1, 2, 3, 4)
    ]
    assert shirt.get_average_rating() == 2.5


def test_search_and_sort_mixed_kinds(shirt, kettle):
    products = [kettle, shirt]
    assert search_products(products, "BLUE") == [shirt]
    assert sort_products(products, "price") == [shirt, kettle]
    assert sort_products(products, "name") == [kettle, shirt]
    assert sort_products(products, "color") is products


def test_search_and_sort_reject_foreign_items(shirt):
    plain = Product(
        name="Shirt", description="d", price=1.0, brand="b",
        active_size="m", quantity=1, images=[],
    )
    with pytest.raises(TypeError):
        search_products([shirt, plain], "shirt")
    with pytest.raises(TypeError):
        sort_products([shirt, "not a product"], "name")
