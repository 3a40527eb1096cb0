"""Tests for pricing and the cart."""

import pytest
from decimal import Decimal

from veira.domain.cart import Cart
from veira.domain.entities import CartItem
from veira.domain.errors import NotFoundError, ValidationError
from veira.domain.pricing import compute_totals, tax_for


def test_compute_totals_example(product_a, product_b):
    """Two maize flour and one bread at 16% VAT."""
    items = [CartItem(product_a, 2), CartItem(product_b, 1)]

    totals = compute_totals(items, 16)

    assert totals.subtotal == Decimal("485")
    assert totals.tax == Decimal("77.6")
    assert totals.total == Decimal("562.6")
    assert totals.cost_of_goods == Decimal("422")


def test_compute_totals_empty():
    totals = compute_totals([], 16)

    assert totals.subtotal == 0
    assert totals.tax == 0
    assert totals.total == 0
    assert totals.cost_of_goods == 0


def test_zero_tax_rate(product_a):
    totals = compute_totals([CartItem(product_a, 1)], 0)
    assert totals.tax == 0
    assert totals.total == totals.subtotal


def test_rate_above_hundred_is_accepted(product_b):
    totals = compute_totals([CartItem(product_b, 1)], 150)
    assert totals.tax == Decimal("97.5")


def test_fractional_rate_keeps_full_precision(product_b):
    assert tax_for(Decimal("65"), "7.5") == Decimal("4.875")


def test_negative_rate_rejected(product_a):
    with pytest.raises(ValidationError, match="cannot be negative"):
        compute_totals([CartItem(product_a, 1)], -1)


class TestCart:
    """Tests for cart line handling."""

    def test_add_item_increments(self, product_a):
        cart = Cart()
        cart.add_item(product_a)
        item = cart.add_item(product_a)

        assert item.quantity == 2
        assert len(cart) == 1
        assert "A" in cart

    def test_add_keeps_first_snapshot(self, product_a):
        from dataclasses import replace

        cart = Cart()
        cart.add_item(product_a)
        cart.add_item(replace(product_a, price=Decimal("999")))

        assert cart.items[0].price == Decimal("210")
        assert cart.subtotal == Decimal("420")

    def test_adjust_quantity(self, product_a):
        cart = Cart()
        cart.add_item(product_a)

        item = cart.adjust_quantity("A", 4)

        assert item.quantity == 5

    def test_adjust_to_zero_removes_line(self, product_a, product_b):
        cart = Cart()
        cart.add_item(product_a)
        cart.add_item(product_b)

        assert cart.adjust_quantity("A", -1) is None
        assert "A" not in cart
        assert [i.product_id for i in cart.items] == ["B"]

    def test_adjust_below_zero_clamps(self, product_a):
        cart = Cart()
        cart.add_item(product_a)

        assert cart.adjust_quantity("A", -10) is None
        assert cart.is_empty

    def test_adjust_unknown_line(self):
        with pytest.raises(NotFoundError, match="not in the cart"):
            Cart().adjust_quantity("missing", 1)

    def test_totals_match_pricing(self, product_a, product_b):
        cart = Cart()
        cart.add_item(product_a)
        cart.add_item(product_a)
        cart.add_item(product_b)

        totals = cart.totals(16)

        assert totals.total == Decimal("562.6")
        assert cart.cost_of_goods == Decimal("422")

    def test_clear(self, product_a):
        cart = Cart()
        cart.add_item(product_a)
        cart.clear()

        assert cart.is_empty
        assert cart.items == ()
