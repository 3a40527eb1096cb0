"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input to a catalog, cart, or settings operation."""


class NotFoundError(DomainError):
    """Requested product or cart line does not exist."""


class EmptyCartError(DomainError):
    """Checkout was attempted with no items in the cart."""


class AccessDeniedError(DomainError):
    """The signed-in role is not allowed to perform the operation."""


def product_not_found(product_id: str) -> str:
    """Return message for missing product."""
    return f"Product {product_id} not found"


def cart_item_not_found(product_id: str) -> str:
    """Return message for a product that is not in the cart."""
    return f"Product {product_id} is not in the cart"


def duplicate_product_id(product_id: str) -> str:
    """Return message for an id collision in the catalog."""
    return f"Product with id '{product_id}' already exists"


def negative_amount(field: str, value: Decimal | int) -> str:
    """Return message for a negative price, cost, stock or rate."""
    return f"{field} cannot be negative (got {value})"


def empty_cart() -> str:
    """Return message for checkout on an empty cart."""
    return "Cannot complete a sale with an empty cart"


def access_denied(role: str, action: str) -> str:
    """Return message when a role lacks a capability."""
    return f"Restricted: the {role} role cannot {action}"


def amount_too_large(field: str, value: Decimal | int, limit: Decimal | int) -> str:
    """Return message for a price, cost or stock above the accepted ceiling."""
    return f"{field} cannot exceed {limit:,} (got {value})"
