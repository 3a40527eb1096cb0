"""Domain layer for veira application."""

from veira.domain.cart import Cart
from veira.domain.catalog import CatalogService
from veira.domain.ledger import LedgerService
from veira.domain.reporting import ReportingService

__all__ = [
    "Cart",
    "CatalogService",
    "LedgerService",
    "ReportingService",
]
