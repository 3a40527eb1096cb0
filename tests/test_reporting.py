"""Tests for reporting rollups."""

from datetime import timedelta
from decimal import Decimal

from veira.domain.entities import PaymentMethod
from veira.domain.reporting import (
    ReportingService,
    daily_sales,
    newest_first,
    stock_status,
)
from veira.utils.timestamps import utc_day
from conftest import FIXED_NOW


def test_totals(populated_state):
    totals = ReportingService.from_state(populated_state).totals()

    revenue = Decimal("562.6") + Decimal("693.6") + Decimal("150.8")
    cogs = Decimal("422") + Decimal("185") + Decimal("104")
    assert totals.revenue == revenue
    assert totals.cost_of_goods == cogs
    assert totals.tax_collected == Decimal("77.6") + Decimal("33.6") + Decimal("20.8")
    assert totals.gross_profit == revenue - cogs
    assert totals.margin == (revenue - cogs) / revenue * 100


def test_margin_zero_without_revenue(state):
    totals = ReportingService.from_state(state).totals()

    assert totals.revenue == 0
    assert totals.margin == 0


def test_by_payment_method_lists_every_method(populated_state):
    breakdown = ReportingService.from_state(populated_state).by_payment_method()

    assert list(breakdown) == list(PaymentMethod)
    assert breakdown[PaymentMethod.MPESA] == Decimal("562.6")
    assert breakdown[PaymentMethod.CARD] == Decimal("693.6")
    assert breakdown[PaymentMethod.CASH] == Decimal("150.8")


def test_inventory_valuation(state):
    report = ReportingService.from_state(state)
    assert report.inventory_valuation() == 45 * 185 + 20 * 52 + 3 * 980


def test_low_stock(state):
    report = ReportingService.from_state(state)

    assert [p.id for p in report.low_stock()] == ["G"]
    assert [p.id for p in report.low_stock(25)] == ["B", "G"]


def test_regulated_products(state):
    assert [p.id for p in ReportingService.from_state(state).regulated_products()] == ["G"]


def test_anomalies(populated_state):
    report = ReportingService.from_state(populated_state)

    assert [t.id for t in report.anomalies()] == ["T3"]
    assert report.anomaly_count() == 1
    assert report.transaction_count() == 3


def test_snapshot_ignores_later_changes(populated_state):
    report = ReportingService.from_state(populated_state)
    populated_state.transactions.clear()

    assert report.transaction_count() == 3


def test_stock_status(product_a, product_gas):
    from dataclasses import replace

    assert stock_status(product_a) == "Good"
    assert stock_status(product_gas) == "Low Stock"
    assert stock_status(replace(product_gas, stock=0)) == "Out of Stock"


def test_newest_first_is_stable(sample_transactions):
    from dataclasses import replace

    twin = replace(sample_transactions[0], id="T1b")
    ordered = newest_first([sample_transactions[0], twin])

    assert [t.id for t in ordered] == ["T1", "T1b"]


def test_daily_sales_fills_empty_days(sample_transactions):
    today = utc_day(FIXED_NOW)

    series = daily_sales(sample_transactions, 7, today=today)

    assert len(series) == 7
    assert series[0].day == today - timedelta(days=6)
    assert series[-1].day == today
    assert sum((d.revenue for d in series), Decimal("0")) == sum(
        (t.total for t in sample_transactions), Decimal("0")
    )
    assert all(d.revenue == 0 for d in series[:5])


def test_daily_sales_excludes_older_sales(sample_transactions):
    today = utc_day(FIXED_NOW)
    series = daily_sales(sample_transactions, 1, today=today)

    assert series[0].revenue == Decimal("562.6") + Decimal("693.6")
