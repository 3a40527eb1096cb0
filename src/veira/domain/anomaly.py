"""Anomaly classification for audit review.

A transaction carries at most one anomaly: either a variance between the
recorded tender and the computed total, or a sale below the price floor
without authorization. The floor is the unit cost; no authorization flow
exists, so any line priced below cost counts as unauthorized.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Optional

from veira.domain.entities import Anomaly, AnomalyKind, Transaction
from veira.utils.money import format_amount

VARIANCE_TOLERANCE = Decimal("0.01")

PRICE_OVERRIDE_REASON = (
    "Price Override: Cashier applied unauthorized discount below floor price."
)


def variance_reason(calculated: Decimal, recorded: Decimal) -> str:
    """Reason text naming both the calculated and the recorded amounts."""
    return (
        f"Variance Detected: Calculated total (KES {format_amount(calculated)}) "
        f"does not match recorded tender (KES {format_amount(recorded)})"
    )


def expected_total(transaction: Transaction) -> Decimal:
    """Subtotal of the lines plus the recorded VAT."""
    return transaction.subtotal + transaction.vat


def flag_variance(transaction: Transaction, recorded_total: Decimal) -> Transaction:
    """Record ``recorded_total`` as the tender and flag the mismatch.

    Only used while a transaction is being built, before it enters the
    ledger.
    """
    calculated = expected_total(transaction)
    return replace(
        transaction,
        total=recorded_total,
        anomaly_kind=AnomalyKind.VARIANCE,
        anomaly_reason=variance_reason(calculated, recorded_total),
    )


def flag_price_override(transaction: Transaction) -> Transaction:
    """Flag a transaction as sold below the floor without authorization."""
    return replace(
        transaction,
        anomaly_kind=AnomalyKind.PRICE_OVERRIDE,
        anomaly_reason=PRICE_OVERRIDE_REASON,
    )


def classify(transaction: Transaction) -> Optional[Anomaly]:
    """Return the anomaly a transaction exhibits, if any.

    Variance takes precedence over a price override.
    """
    calculated = expected_total(transaction)
    if abs(transaction.total - calculated) > VARIANCE_TOLERANCE:
        return Anomaly(
            kind=AnomalyKind.VARIANCE,
            reason=variance_reason(calculated, transaction.total),
        )

    if any(item.price < item.cost for item in transaction.items):
        return Anomaly(kind=AnomalyKind.PRICE_OVERRIDE, reason=PRICE_OVERRIDE_REASON)

    return None


def annotate(transaction: Transaction) -> Transaction:
    """Attach a classified anomaly to a clean transaction.

    Already flagged transactions are returned unchanged so a transaction never
    carries two reasons.
    """
    if transaction.is_anomaly:
        return transaction
    anomaly = classify(transaction)
    if anomaly is None:
        return transaction
    return replace(transaction, anomaly_kind=anomaly.kind, anomaly_reason=anomaly.reason)
