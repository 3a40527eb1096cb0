"""Tests for anomaly classification."""

from dataclasses import replace
from decimal import Decimal

from veira.domain.anomaly import (
    PRICE_OVERRIDE_REASON,
    annotate,
    classify,
    expected_total,
    flag_price_override,
    flag_variance,
    variance_reason,
)
from veira.domain.entities import AnomalyKind, CartItem
from conftest import make_transaction


def _clean_sale(product, quantity=1, rate=Decimal("0.16")):
    item = CartItem(product, quantity)
    vat = item.line_total * rate
    return make_transaction(
        "S1",
        0,
        (item,),
        total=item.line_total + vat,
        vat=vat,
        cost_of_goods=item.line_cost,
    )


def test_clean_sale_has_no_anomaly(product_a):
    assert classify(_clean_sale(product_a, 2)) is None


def test_expected_total(product_a):
    assert expected_total(_clean_sale(product_a)) == Decimal("243.60")


def test_variance_detected(product_a):
    txn = replace(_clean_sale(product_a), total=Decimal("693.6"))

    anomaly = classify(txn)

    assert anomaly.kind == AnomalyKind.VARIANCE
    assert "KES 243.60" in anomaly.reason
    assert "KES 693.60" in anomaly.reason


def test_variance_within_tolerance(product_a):
    txn = replace(_clean_sale(product_a), total=Decimal("243.61"))
    assert classify(txn) is None


def test_price_below_cost(product_a):
    txn = _clean_sale(replace(product_a, price=Decimal("150")))

    anomaly = classify(txn)

    assert anomaly.kind == AnomalyKind.PRICE_OVERRIDE
    assert anomaly.reason == PRICE_OVERRIDE_REASON


def test_price_equal_to_cost_is_allowed(product_a):
    assert classify(_clean_sale(replace(product_a, price=product_a.cost))) is None


def test_variance_takes_precedence(product_a):
    txn = _clean_sale(replace(product_a, price=Decimal("150")))
    txn = replace(txn, total=txn.total + 450)

    assert classify(txn).kind == AnomalyKind.VARIANCE


def test_flag_variance_names_both_amounts(product_a):
    txn = _clean_sale(product_a)

    flagged = flag_variance(txn, txn.total + 450)

    assert flagged.total == Decimal("693.60")
    assert flagged.anomaly_kind == AnomalyKind.VARIANCE
    assert flagged.anomaly_reason == variance_reason(Decimal("243.60"), Decimal("693.60"))


def test_flag_price_override(product_a):
    flagged = flag_price_override(_clean_sale(product_a))

    assert flagged.anomaly_kind == AnomalyKind.PRICE_OVERRIDE
    assert flagged.anomaly_reason == PRICE_OVERRIDE_REASON


def test_annotate_keeps_existing_reason(product_a):
    flagged = flag_price_override(_clean_sale(product_a))
    flagged = replace(flagged, total=flagged.total + 1)

    assert annotate(flagged) is flagged


def test_annotate_clean_sale_unchanged(product_a):
    txn = _clean_sale(product_a)
    assert annotate(txn) is txn
