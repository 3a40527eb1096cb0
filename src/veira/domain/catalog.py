"""Catalog domain service."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional

from veira.domain.entities import AppState, Category, Product
from veira.domain.errors import (
    NotFoundError,
    ValidationError,
    amount_too_large,
    duplicate_product_id,
    negative_amount,
    product_not_found,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE_URL = "https://picsum.photos/seed/{name}/200"

# Largest accepted unit price, unit cost or stock level
MAX_AMOUNT = 10**12


def validate_product(product: Product) -> None:
    """Check the field constraints every catalog product must satisfy.

    Raises:
        ValidationError: If the name is empty or an amount is negative or
            above MAX_AMOUNT
    """
    if not product.id or not str(product.id).strip():
        raise ValidationError("Product id cannot be empty")
    if not product.name or not product.name.strip():
        raise ValidationError("Product name cannot be empty")
    if product.price < 0:
        raise ValidationError(negative_amount("Price", product.price))
    if product.cost < 0:
        raise ValidationError(negative_amount("Cost", product.cost))
    if product.stock < 0:
        raise ValidationError(negative_amount("Stock", product.stock))
    for field, value in (("Price", product.price), ("Cost", product.cost), ("Stock", product.stock)):
        if value > MAX_AMOUNT:
            raise ValidationError(amount_too_large(field, value, MAX_AMOUNT))


class CatalogService:
    """Service for managing the product catalog held in the app state."""

    def __init__(self, state: AppState):
        """Initialize catalog service.

        Args:
            state: Application state owning the product list
        """
        self.state = state

    def list_products(self) -> list[Product]:
        """List all products in catalog order."""
        return list(self.state.products)

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get product by ID.

        Args:
            product_id: Product ID

        Returns:
            Product or None if not found
        """
        for product in self.state.products:
            if product.id == product_id:
                return product
        return None

    def require_product(self, product_id: str) -> Product:
        """Get product by ID or raise NotFoundError."""
        product = self.get_product(product_id)
        if product is None:
            raise NotFoundError(product_not_found(product_id))
        return product

    def next_product_id(self) -> str:
        """Next free numeric product id."""
        numeric_ids = [int(p.id) for p in self.state.products if p.id.isdigit()]
        candidate = max(numeric_ids, default=0) + 1
        while self.get_product(str(candidate)) is not None:
            candidate += 1
        return str(candidate)

    def add_product(self, product: Product) -> Product:
        """Add a product to the end of the catalog.

        Args:
            product: Product to add

        Returns:
            The added product

        Raises:
            ValidationError: If the product is invalid or its id is taken
        """
        validate_product(product)
        with self.state.lock:
            if self.get_product(product.id) is not None:
                raise ValidationError(duplicate_product_id(product.id))
            self.state.products.append(product)
        logger.info("Added product %s (%s)", product.id, product.name)
        return product

    def create_product(
        self,
        name: str,
        price: Decimal,
        cost: Decimal,
        stock: int,
        category: Category,
        image_url: Optional[str] = None,
    ) -> Product:
        """Create a product with the next free id.

        Args:
            name: Product name
            price: Unit retail price
            cost: Unit cost
            stock: Units on hand
            category: Catalog category
            image_url: Optional image reference (defaults to a placeholder)

        Returns:
            The created product
        """
        with self.state.lock:
            product = Product(
                id=self.next_product_id(),
                name=name,
                price=price,
                cost=cost,
                stock=stock,
                category=Category(category),
                image_url=image_url or PLACEHOLDER_IMAGE_URL.format(name=name),
            )
            return self.add_product(product)

    def update_product(self, product: Product) -> Product:
        """Replace the product with the same id.

        Raises:
            NotFoundError: If no product has that id
            ValidationError: If the replacement is invalid
        """
        validate_product(product)
        with self.state.lock:
            for index, existing in enumerate(self.state.products):
                if existing.id == product.id:
                    self.state.products[index] = product
                    return product
        raise NotFoundError(product_not_found(product.id))

    def remove_product(self, product_id: str) -> bool:
        """Delete a product.

        Removing an id that is not in the catalog is not an error.

        Returns:
            True if a product was removed
        """
        with self.state.lock:
            remaining = [p for p in self.state.products if p.id != product_id]
            removed = len(remaining) != len(self.state.products)
            self.state.products[:] = remaining
        if removed:
            logger.info("Removed product %s", product_id)
        return removed

    def decrement_stock(self, product_id: str, quantity: int) -> Optional[Product]:
        """Reduce stock by ``quantity``, clamping at zero.

        Selling more than is on hand is allowed; stock simply ends at zero.
        An id that is no longer in the catalog is skipped.

        Returns:
            The updated product, or None if the id is unknown

        Raises:
            ValidationError: If quantity is negative
        """
        if quantity < 0:
            raise ValidationError(negative_amount("Quantity", quantity))

        with self.state.lock:
            for index, existing in enumerate(self.state.products):
                if existing.id == product_id:
                    if quantity > existing.stock:
                        logger.warning(
                            "Oversold product %s: %d requested, %d on hand",
                            product_id,
                            quantity,
                            existing.stock,
                        )
                    updated = replace(existing, stock=max(0, existing.stock - quantity))
                    self.state.products[index] = updated
                    return updated

        logger.warning("Stock decrement skipped: product %s not in catalog", product_id)
        return None

    def search(self, term: str = "", category: Optional[Category] = None) -> list[Product]:
        """Find products by name substring and optional category.

        Args:
            term: Case-insensitive name fragment (empty matches everything)
            category: Optional category filter

        Returns:
            Matching products in catalog order
        """
        needle = term.strip().lower()
        return [
            p
            for p in self.state.products
            if needle in p.name.lower() and (category is None or p.category == category)
        ]
