"""Transaction ledger domain service."""

import logging
import secrets
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from veira.domain.anomaly import annotate
from veira.domain.cart import Cart
from veira.domain.catalog import CatalogService
from veira.domain.entities import AppState, DailySales, PaymentMethod, Transaction
from veira.domain.errors import EmptyCartError, empty_cart
from veira.domain.pricing import compute_totals
from veira.domain.reporting import daily_sales, newest_first
from veira.utils.timestamps import now_ms, utc_day

logger = logging.getLogger(__name__)


class LedgerService:
    """Service for recording and reading completed sales."""

    def __init__(
        self,
        state: AppState,
        catalog: Optional[CatalogService] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        """Initialize ledger service.

        Args:
            state: Application state owning the ledger
            catalog: Catalog service over the same state (created if omitted)
            clock: Returns the current time in epoch milliseconds
        """
        self.state = state
        self.catalog = catalog or CatalogService(state)
        self.clock = clock or now_ms

    def new_transaction_id(self, timestamp: int) -> str:
        """Generate an id not yet used in the ledger."""
        existing = {t.id for t in self.state.transactions}
        while True:
            candidate = f"VRA-{timestamp}-{secrets.randbelow(1000):03d}"
            if candidate not in existing:
                return candidate

    def complete(
        self,
        cart: Cart,
        payment_method: PaymentMethod,
        tax_rate_percent: Decimal | int | str,
        customer_name: Optional[str] = None,
    ) -> Transaction:
        """Record the sale in ``cart`` and take the sold units out of stock.

        The ledger insert and every stock decrement happen together under the
        state lock; if anything fails the catalog and ledger are restored.
        The cart is cleared only after the sale is recorded.

        Args:
            cart: Cart being checked out
            payment_method: Tender label
            tax_rate_percent: VAT rate in percent
            customer_name: Optional customer name

        Returns:
            The recorded transaction

        Raises:
            EmptyCartError: If the cart has no items
            ValidationError: If the tax rate is negative
        """
        if cart.is_empty:
            raise EmptyCartError(empty_cart())

        items = cart.items
        totals = compute_totals(items, tax_rate_percent)
        method = PaymentMethod(payment_method)

        with self.state.lock:
            timestamp = self.clock()
            transaction = Transaction(
                id=self.new_transaction_id(timestamp),
                timestamp=timestamp,
                items=items,
                total=totals.total,
                vat=totals.tax,
                cost_of_goods=totals.cost_of_goods,
                payment_method=method,
                customer_name=customer_name or None,
            )

            products_before = list(self.state.products)
            transactions_before = list(self.state.transactions)
            try:
                self.state.transactions.insert(0, transaction)
                for item in items:
                    self.catalog.decrement_stock(item.product_id, item.quantity)
            except Exception:
                self.state.products[:] = products_before
                self.state.transactions[:] = transactions_before
                logger.error("Checkout rolled back for %s", transaction.id)
                raise

        cart.clear()
        logger.info(
            "Recorded sale %s: %d line(s), total %s via %s",
            transaction.id,
            len(items),
            transaction.total,
            method.value,
        )
        return transaction

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        for txn in self.state.transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def list_all(
        self,
        flagged: Optional[bool] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions newest first.

        Args:
            flagged: If True only anomalies, if False only clean sales
            start_date: Optional first UTC day (inclusive)
            end_date: Optional last UTC day (inclusive)

        Returns:
            Transactions sorted by timestamp, descending
        """
        result = []
        for txn in self.state.transactions:
            if flagged is not None and txn.is_anomaly != flagged:
                continue
            day = utc_day(txn.timestamp)
            if start_date is not None and day < start_date:
                continue
            if end_date is not None and day > end_date:
                continue
            result.append(txn)
        return newest_first(result)

    def aggregate_by_day(
        self, last_n_days: int, today: Optional[date] = None
    ) -> list[DailySales]:
        """Revenue and profit per UTC day for the last ``last_n_days`` days."""
        return daily_sales(self.state.transactions, last_n_days, today=today)

    def review_anomalies(self) -> list[Transaction]:
        """Run the classifier over the whole ledger without changing it.

        Returns:
            Every transaction that is flagged or would be flagged now,
            newest first
        """
        reviewed = (annotate(txn) for txn in self.state.transactions)
        return newest_first(txn for txn in reviewed if txn.is_anomaly)
