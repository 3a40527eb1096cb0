"""Pricing: subtotal, VAT and total for a set of cart lines.

All arithmetic is done in ``Decimal`` at full precision. Rounding to cents
happens only when an amount is formatted for display or export.
"""

from decimal import Decimal
from typing import Iterable

from veira.domain.entities import CartItem, PriceTotals
from veira.domain.errors import ValidationError, negative_amount
from veira.utils.money import to_decimal

HUNDRED = Decimal("100")


def subtotal(items: Iterable[CartItem]) -> Decimal:
    """Sum of price x quantity."""
    return sum((item.line_total for item in items), Decimal("0"))


def cost_of_goods(items: Iterable[CartItem]) -> Decimal:
    """Sum of cost x quantity."""
    return sum((item.line_cost for item in items), Decimal("0"))


def tax_for(amount: Decimal, tax_rate_percent: Decimal | int | str) -> Decimal:
    """VAT due on ``amount`` at ``tax_rate_percent``."""
    rate = to_decimal(tax_rate_percent)
    if rate < 0:
        raise ValidationError(negative_amount("Tax rate", rate))
    return amount * rate / HUNDRED


def compute_totals(
    items: Iterable[CartItem], tax_rate_percent: Decimal | int | str
) -> PriceTotals:
    """Compute totals for cart lines.

    Args:
        items: Cart lines
        tax_rate_percent: VAT rate in percent (>= 0, no upper bound)

    Returns:
        PriceTotals with subtotal, tax, total and cost of goods

    Raises:
        ValidationError: If the tax rate is negative
    """
    lines = tuple(items)
    sub = subtotal(lines)
    tax = tax_for(sub, tax_rate_percent)
    return PriceTotals(
        subtotal=sub,
        tax=tax,
        total=sub + tax,
        cost_of_goods=cost_of_goods(lines),
    )
