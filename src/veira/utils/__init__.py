"""Utility functions for veira."""

from veira.utils.date_parser import parse_date, get_date_range
from veira.utils.money import parse_amount, format_amount, format_kes
from veira.utils.timestamps import now_ms, utc_day

__all__ = [
    "parse_date",
    "get_date_range",
    "parse_amount",
    "format_amount",
    "format_kes",
    "now_ms",
    "utc_day",
]
