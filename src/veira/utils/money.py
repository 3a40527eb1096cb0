"""Currency parsing and formatting utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
import re

CENT = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "210"
    - "1,200.50"
    - "KES 1,200"
    - "Ksh 65"

    Negative amounts are parsed as given; callers decide whether they are
    allowed.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency markers
    amount_str = re.sub(r"(?i)^(kes|ksh)\.?\s*", "", amount_str)

    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Coerce a numeric value to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_amount(value: Decimal) -> Decimal:
    """Round half-up to cents for display."""
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the two decimals
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal) -> str:
    """Format an amount with two decimals and no grouping (for CSV)."""
    return f"{round_amount(value):.2f}"


def format_kes(value: Decimal) -> str:
    """Format an amount for people, e.g. ``KES 1,200.00``."""
    return f"KES {round_amount(value):,.2f}"
