"""Mapper functions to convert between domain entities and stored JSON.

Amounts are written as ``Decimal`` strings and enums by value, and keys are
emitted in a fixed order, so encoding a decoded blob reproduces it exactly.
"""

import json
from decimal import Decimal
from typing import Any

from veira.domain import entities as domain
from veira.domain.catalog import validate_product

FORMAT_VERSION = 1


def product_to_dict(product: domain.Product) -> dict[str, Any]:
    """Convert a Product to its stored form."""
    return {
        "id": product.id,
        "name": product.name,
        "price": str(product.price),
        "cost": str(product.cost),
        "stock": product.stock,
        "category": product.category.value,
        "image_url": product.image_url,
    }


def product_from_dict(data: dict[str, Any]) -> domain.Product:
    """Convert a stored product to a Product.

    Raises:
        ValidationError: If the stored fields break catalog rules
    """
    product = domain.Product(
        id=str(data["id"]),
        name=data["name"],
        price=Decimal(str(data["price"])),
        cost=Decimal(str(data["cost"])),
        stock=int(data["stock"]),
        category=domain.Category(data["category"]),
        image_url=data.get("image_url", ""),
    )
    validate_product(product)
    return product


def cart_item_to_dict(item: domain.CartItem) -> dict[str, Any]:
    """Flatten a cart line: product fields plus quantity."""
    data = product_to_dict(item.product)
    data["quantity"] = item.quantity
    return data


def cart_item_from_dict(data: dict[str, Any]) -> domain.CartItem:
    return domain.CartItem(product=product_from_dict(data), quantity=int(data["quantity"]))


def transaction_to_dict(txn: domain.Transaction) -> dict[str, Any]:
    """Convert a Transaction to its stored form."""
    return {
        "id": txn.id,
        "timestamp": txn.timestamp,
        "items": [cart_item_to_dict(item) for item in txn.items],
        "total": str(txn.total),
        "vat": str(txn.vat),
        "cost_of_goods": str(txn.cost_of_goods),
        "payment_method": txn.payment_method.value,
        "customer_name": txn.customer_name,
        "anomaly_kind": txn.anomaly_kind.value if txn.anomaly_kind else None,
        "anomaly_reason": txn.anomaly_reason,
    }


def transaction_from_dict(data: dict[str, Any]) -> domain.Transaction:
    """Convert a stored transaction to a Transaction."""
    kind = data.get("anomaly_kind")
    return domain.Transaction(
        id=str(data["id"]),
        timestamp=int(data["timestamp"]),
        items=tuple(cart_item_from_dict(item) for item in data["items"]),
        total=Decimal(str(data["total"])),
        vat=Decimal(str(data["vat"])),
        cost_of_goods=Decimal(str(data["cost_of_goods"])),
        payment_method=domain.PaymentMethod(data["payment_method"]),
        customer_name=data.get("customer_name"),
        anomaly_kind=domain.AnomalyKind(kind) if kind else None,
        anomaly_reason=data.get("anomaly_reason"),
    )


def settings_to_dict(settings: domain.BusinessSettings) -> dict[str, Any]:
    return {
        "business_name": settings.business_name,
        "kra_pin": settings.kra_pin,
        "vat_rate": str(settings.vat_rate),
        "owner_profile": settings.owner_profile.value,
        "business_type": settings.business_type.value,
        "user_role": settings.user_role.value,
    }


def settings_from_dict(data: dict[str, Any]) -> domain.BusinessSettings:
    """Convert stored settings, using defaults for missing keys."""
    defaults = domain.BusinessSettings()
    return domain.BusinessSettings(
        business_name=data.get("business_name", defaults.business_name),
        kra_pin=data.get("kra_pin", defaults.kra_pin),
        vat_rate=Decimal(str(data.get("vat_rate", defaults.vat_rate))),
        owner_profile=domain.OwnerProfile(data.get("owner_profile", defaults.owner_profile)),
        business_type=domain.BusinessType(data.get("business_type", defaults.business_type)),
        user_role=domain.UserRole(data.get("user_role", defaults.user_role)),
    )


def state_to_json(state: domain.AppState) -> str:
    """Serialize the full application state."""
    payload = {
        "version": FORMAT_VERSION,
        "products": [product_to_dict(p) for p in state.products],
        "transactions": [transaction_to_dict(t) for t in state.transactions],
        "settings": settings_to_dict(state.settings),
    }
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def payload_from_json(blob: str) -> dict[str, Any]:
    """Parse a stored blob into its top-level dict.

    Raises:
        ValueError: If the blob is not a JSON object
    """
    payload = json.loads(blob)
    if not isinstance(payload, dict):
        raise ValueError("Stored state is not a JSON object")
    return payload
