"""Tests for seed data generation."""

import random
from collections import Counter
from decimal import Decimal

from veira.domain.anomaly import expected_total
from veira.domain.entities import AnomalyKind
from veira.domain.seed import (
    DAY_MS,
    INITIAL_PRODUCTS,
    VARIANCE_OVERAGE,
    generate_seed_transactions,
)
from conftest import FIXED_NOW


def _generate(seed=7, **kwargs):
    return generate_seed_transactions(
        INITIAL_PRODUCTS, now=FIXED_NOW, rng=random.Random(seed), **kwargs
    )


def _position(txn_id):
    digits = txn_id.split("-")[1]
    return int(digits[:2]), int(digits[2:])


def test_initial_catalog():
    assert [p.id for p in INITIAL_PRODUCTS] == [str(n) for n in range(1, 9)]
    flour = INITIAL_PRODUCTS[0]
    assert flour.name == "Jogoo Maize Flour 2kg"
    assert (flour.price, flour.cost, flour.stock) == (Decimal("210"), Decimal("185"), 45)


def test_sorted_newest_first():
    txns = _generate()
    timestamps = [t.timestamp for t in txns]
    assert timestamps == sorted(timestamps, reverse=True)


def test_sales_per_day_and_lines():
    txns = _generate()
    per_day = Counter(_position(t.id)[0] for t in txns)

    assert set(per_day) == set(range(14))
    assert all(8 <= count <= 19 for count in per_day.values())
    for txn in txns:
        assert 1 <= len(txn.items) <= 4
        assert len({item.product_id for item in txn.items}) == len(txn.items)
        assert all(1 <= item.quantity <= 3 for item in txn.items)


def test_timestamps_within_their_day():
    for txn in _generate():
        day, _ = _position(txn.id)
        day_end = FIXED_NOW - day * DAY_MS
        assert day_end - DAY_MS < txn.timestamp <= day_end


def test_anomalies_placed_by_position():
    for txn in _generate():
        i, j = _position(txn.id)
        if (i + j) % 15 != 0:
            assert not txn.is_anomaly
            assert txn.total == expected_total(txn)
        elif j % 2 == 0:
            assert txn.anomaly_kind == AnomalyKind.VARIANCE
            assert txn.total == expected_total(txn) + VARIANCE_OVERAGE
        else:
            assert txn.anomaly_kind == AnomalyKind.PRICE_OVERRIDE


def test_first_sale_of_first_day_is_variance():
    first = next(t for t in _generate() if _position(t.id) == (0, 0))
    assert first.anomaly_kind == AnomalyKind.VARIANCE


def test_seeded_rng_is_reproducible():
    assert [t.id for t in _generate(3)] == [t.id for t in _generate(3)]


def test_no_products_no_history():
    assert generate_seed_transactions([], now=FIXED_NOW) == []


def test_custom_days():
    days = {_position(t.id)[0] for t in _generate(days=2)}
    assert days == {0, 1}
