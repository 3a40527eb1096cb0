"""Initial catalog and synthetic sales history.

The history generator is what a fresh or unreadable store falls back to. Its
anomalies are placed by position, not detected: they exist so the audit
views have something to show and are not a fraud signal.
"""

import random
from decimal import Decimal
from typing import Optional, Sequence

from veira.domain.anomaly import flag_price_override, flag_variance
from veira.domain.entities import CartItem, Category, PaymentMethod, Product, Transaction
from veira.domain.pricing import compute_totals
from veira.utils.timestamps import now_ms

DAY_MS = 24 * 60 * 60 * 1000
VARIANCE_OVERAGE = Decimal("450")
ANOMALY_EVERY = 15

_IMAGE = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&w=200&q=80"

INITIAL_PRODUCTS: tuple[Product, ...] = (
    Product("1", "Jogoo Maize Flour 2kg", Decimal("210"), Decimal("185"), 45, Category.FOOD, _IMAGE.format("1586201375761-83865001e31c")),
    Product("2", "Broadways Bread 400g", Decimal("65"), Decimal("52"), 20, Category.FOOD, _IMAGE.format("1509440159596-0249088772ff")),
    Product("3", "Brookside Milk 500ml", Decimal("60"), Decimal("48"), 35, Category.FOOD, _IMAGE.format("1550583724-125581cc25fb")),
    Product("4", "Kasuku Gas Refill 6kg", Decimal("1200"), Decimal("980"), 8, Category.HOUSEHOLD, _IMAGE.format("1581092160562-40aa08e78837")),
    Product("5", "Mumias Sugar 1kg", Decimal("180"), Decimal("155"), 15, Category.FOOD, _IMAGE.format("1581447100595-377319e45738")),
    Product("6", "Safaricom Airtime 1000", Decimal("1000"), Decimal("950"), 100, Category.SERVICES, _IMAGE.format("1563013544-824ae1b704d3")),
    Product("7", "Menengai Soap 800g", Decimal("150"), Decimal("120"), 30, Category.HOUSEHOLD, _IMAGE.format("1605264964528-06403738d6dc")),
    Product("8", "Indomie Chicken 5-pack", Decimal("250"), Decimal("210"), 25, Category.FOOD, _IMAGE.format("1612929633738-8fe44f7ec841")),
)


def generate_seed_transactions(
    products: Sequence[Product],
    days: int = 14,
    now: Optional[int] = None,
    rng: Optional[random.Random] = None,
    vat_rate: Decimal | int = 16,
) -> list[Transaction]:
    """Generate a plausible sales history.

    For each of the last ``days`` days, 8 to 19 sales of 1 to 4 distinct
    products with quantities of 1 to 3. Sale ``j`` of day ``i`` is anomalous
    when ``(i + j) % 15 == 0``: a variance of +450 KES when ``j`` is even,
    a price override otherwise.

    Args:
        products: Catalog to sell from
        days: Number of days of history
        now: Reference time in epoch milliseconds
        rng: Random source (pass a seeded one for reproducible data)
        vat_rate: VAT rate in percent

    Returns:
        Transactions sorted newest first
    """
    if not products:
        return []
    rng = rng or random.Random()
    now = now if now is not None else now_ms()
    methods = list(PaymentMethod)
    transactions = []

    for i in range(days):
        day_timestamp = now - i * DAY_MS
        num_sales = 8 + rng.randrange(12)

        for j in range(num_sales):
            sale_timestamp = day_timestamp - int(rng.random() * DAY_MS * 0.8)
            picked = rng.sample(list(products), k=min(len(products), 1 + rng.randrange(4)))
            items = tuple(
                CartItem(product=p, quantity=1 + rng.randrange(3)) for p in picked
            )
            totals = compute_totals(items, vat_rate)

            txn = Transaction(
                id=f"VRA-{i:02d}{j:02d}-{rng.randrange(1000):03d}",
                timestamp=sale_timestamp,
                items=items,
                total=totals.total,
                vat=totals.tax,
                cost_of_goods=totals.cost_of_goods,
                payment_method=rng.choice(methods),
            )

            if (i + j) % ANOMALY_EVERY == 0:
                if j % 2 == 0:
                    txn = flag_variance(txn, totals.total + VARIANCE_OVERAGE)
                else:
                    txn = flag_price_override(txn)

            transactions.append(txn)

    return sorted(transactions, key=lambda t: t.timestamp, reverse=True)
