"""Tests for the catalog service."""

import logging
import random
import pytest
from dataclasses import replace
from decimal import Decimal

from veira.domain.cart import Cart
from veira.domain.entities import Category, PaymentMethod, Product
from veira.domain.errors import NotFoundError, ValidationError


def test_list_products_keeps_order(catalog_service):
    assert [p.id for p in catalog_service.list_products()] == ["A", "B", "G"]


def test_get_product(catalog_service):
    assert catalog_service.get_product("B").name == "Broadways Bread 400g"
    assert catalog_service.get_product("missing") is None


def test_require_product_missing(catalog_service):
    with pytest.raises(NotFoundError, match="Product missing not found"):
        catalog_service.require_product("missing")


def test_add_product_appends(catalog_service):
    product = Product("Z", "Kabras Sugar 2kg", Decimal("360"), Decimal("310"), 12, Category.FOOD)

    catalog_service.add_product(product)

    assert catalog_service.list_products()[-1] == product


def test_add_product_duplicate_id(catalog_service, product_a):
    with pytest.raises(ValidationError, match="already exists"):
        catalog_service.add_product(replace(product_a, name="Other"))


@pytest.mark.parametrize(
    "changes, message",
    [
        ({"name": "  "}, "name cannot be empty"),
        ({"price": Decimal("-1")}, "Price cannot be negative"),
        ({"cost": Decimal("-0.01")}, "Cost cannot be negative"),
        ({"stock": -1}, "Stock cannot be negative"),
        ({"price": Decimal("1e27")}, "Price cannot exceed"),
        ({"cost": Decimal("1000000000000.01")}, "Cost cannot exceed"),
        ({"stock": 10**12 + 1}, "Stock cannot exceed"),
    ],
)
def test_add_product_validation(catalog_service, product_a, changes, message):
    invalid = replace(product_a, id="new", **changes)

    with pytest.raises(ValidationError, match=message):
        catalog_service.add_product(invalid)

    assert catalog_service.get_product("new") is None


def test_create_product_assigns_next_numeric_id(catalog_service):
    first = catalog_service.create_product(
        "Kabras Sugar 2kg", Decimal("360"), Decimal("310"), 12, Category.FOOD
    )
    second = catalog_service.create_product(
        "Omo 1kg", Decimal("280"), Decimal("240"), 6, Category.HOUSEHOLD
    )

    assert first.id == "1"
    assert second.id == "2"
    assert "Kabras" in first.image_url


def test_update_product(catalog_service, product_a):
    updated = catalog_service.update_product(replace(product_a, price=Decimal("220")))

    assert updated.price == Decimal("220")
    assert catalog_service.list_products()[0].price == Decimal("220")


def test_update_missing_product(catalog_service, product_a):
    with pytest.raises(NotFoundError):
        catalog_service.update_product(replace(product_a, id="missing"))


def test_remove_product(catalog_service):
    assert catalog_service.remove_product("B") is True
    assert [p.id for p in catalog_service.list_products()] == ["A", "G"]


def test_remove_unknown_product_is_noop(catalog_service):
    assert catalog_service.remove_product("missing") is False
    assert len(catalog_service.list_products()) == 3


def test_decrement_stock(catalog_service):
    updated = catalog_service.decrement_stock("A", 5)

    assert updated.stock == 40
    assert catalog_service.get_product("A").stock == 40


def test_decrement_stock_clamps_at_zero(catalog_service, caplog):
    """Stock 3 less 10 ends at 0."""
    with caplog.at_level(logging.WARNING):
        updated = catalog_service.decrement_stock("G", 10)

    assert updated.stock == 0
    assert "Oversold product G" in caplog.text


def test_decrement_unknown_product(catalog_service):
    assert catalog_service.decrement_stock("missing", 1) is None


def test_decrement_negative_quantity(catalog_service):
    with pytest.raises(ValidationError):
        catalog_service.decrement_stock("A", -1)


def test_search_is_case_insensitive(catalog_service):
    assert [p.id for p in catalog_service.search("BREAD")] == ["B"]


def test_search_empty_term_matches_all(catalog_service):
    assert len(catalog_service.search("")) == 3


def test_search_with_category(catalog_service):
    assert [p.id for p in catalog_service.search("", Category.HOUSEHOLD)] == ["G"]
    assert catalog_service.search("bread", Category.HOUSEHOLD) == []


def test_stock_never_negative_across_decrements(catalog_service):
    rng = random.Random(20231114)
    on_hand = {p.id: p.stock for p in catalog_service.list_products()}

    for _ in range(500):
        product_id = rng.choice(sorted(on_hand))
        quantity = rng.randint(0, 8)

        updated = catalog_service.decrement_stock(product_id, quantity)

        on_hand[product_id] = max(0, on_hand[product_id] - quantity)
        assert updated.stock == on_hand[product_id]
        assert all(p.stock >= 0 for p in catalog_service.list_products())


def test_checkouts_never_drive_stock_negative(ledger_service, catalog_service):
    rng = random.Random(7)

    for _ in range(100):
        cart = Cart()
        for _ in range(rng.randint(1, 6)):
            cart.add_item(rng.choice(catalog_service.list_products()))
        ledger_service.complete(cart, PaymentMethod.CASH, Decimal("16"))

        assert all(p.stock >= 0 for p in catalog_service.list_products())

    assert len(ledger_service.state.transactions) == 100
    assert catalog_service.get_product("G").stock == 0
