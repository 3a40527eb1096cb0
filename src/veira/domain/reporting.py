"""Read-side rollups over a snapshot of the catalog and ledger."""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from veira.domain.entities import (
    AppState,
    Category,
    DailySales,
    PaymentMethod,
    Product,
    SalesTotals,
    Transaction,
)
from veira.utils.timestamps import utc_day, utc_today

ZERO = Decimal("0")
HUNDRED = Decimal("100")
DEFAULT_LOW_STOCK_THRESHOLD = 10


def newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort by timestamp, newest first, keeping ties in their given order."""
    return sorted(transactions, key=lambda t: t.timestamp, reverse=True)


def daily_sales(
    transactions: Iterable[Transaction],
    last_n_days: int,
    today: Optional[date] = None,
) -> list[DailySales]:
    """Revenue and profit per UTC day for the last ``last_n_days`` days.

    The window ends at ``today`` (inclusive). Every day in the window is
    present, oldest first, with zeros where nothing was sold.

    Args:
        transactions: Transactions to aggregate
        last_n_days: Window length in days
        today: Last day of the window (defaults to the current UTC day)

    Returns:
        One DailySales per day
    """
    if last_n_days <= 0:
        return []
    today = today or utc_today()
    days = [today - timedelta(days=offset) for offset in range(last_n_days - 1, -1, -1)]

    revenue: dict[date, Decimal] = defaultdict(lambda: ZERO)
    cost: dict[date, Decimal] = defaultdict(lambda: ZERO)
    window = set(days)
    for txn in transactions:
        day = utc_day(txn.timestamp)
        if day in window:
            revenue[day] += txn.total
            cost[day] += txn.cost_of_goods

    return [
        DailySales(day=day, revenue=revenue[day], profit=revenue[day] - cost[day])
        for day in days
    ]


def stock_status(product: Product, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> str:
    """Short stock label for listings."""
    if product.stock == 0:
        return "Out of Stock"
    if product.stock < threshold:
        return "Low Stock"
    return "Good"


class ReportingService:
    """Aggregates over an immutable snapshot of products and transactions."""

    def __init__(self, products: Sequence[Product], transactions: Sequence[Transaction]):
        self.products = tuple(products)
        self.transactions = tuple(transactions)

    @classmethod
    def from_state(cls, state: AppState) -> "ReportingService":
        """Take a snapshot of the current state."""
        with state.lock:
            return cls(state.products, state.transactions)

    def totals(self) -> SalesTotals:
        """Revenue, cost, VAT, gross profit and margin across the ledger."""
        revenue = sum((t.total for t in self.transactions), ZERO)
        cogs = sum((t.cost_of_goods for t in self.transactions), ZERO)
        tax = sum((t.vat for t in self.transactions), ZERO)
        profit = revenue - cogs
        margin = profit / revenue * HUNDRED if revenue != 0 else ZERO
        return SalesTotals(
            revenue=revenue,
            cost_of_goods=cogs,
            tax_collected=tax,
            gross_profit=profit,
            margin=margin,
        )

    def by_payment_method(self) -> dict[PaymentMethod, Decimal]:
        """Revenue per payment method, every method present."""
        result = {method: ZERO for method in PaymentMethod}
        for txn in self.transactions:
            result[txn.payment_method] += txn.total
        return result

    def inventory_valuation(self) -> Decimal:
        """Stock on hand valued at cost, as of now."""
        return sum((Decimal(p.stock) * p.cost for p in self.products), ZERO)

    def low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[Product]:
        """Products with stock below ``threshold`` in catalog order."""
        return [p for p in self.products if p.stock < threshold]

    def regulated_products(self) -> list[Product]:
        """Products that need compliance tracking (household goods, gas)."""
        return [
            p
            for p in self.products
            if p.category == Category.HOUSEHOLD or "Gas" in p.name
        ]

    def anomalies(self) -> list[Transaction]:
        return newest_first(t for t in self.transactions if t.is_anomaly)

    def anomaly_count(self) -> int:
        return sum(1 for t in self.transactions if t.is_anomaly)

    def transaction_count(self) -> int:
        return len(self.transactions)

    def daily_sales(self, last_n_days: int, today: Optional[date] = None) -> list[DailySales]:
        return daily_sales(self.transactions, last_n_days, today=today)
