"""Cart for an in-progress sale."""

from decimal import Decimal
from typing import Optional

from veira.domain.entities import CartItem, PriceTotals, Product
from veira.domain.errors import NotFoundError, cart_item_not_found
from veira.domain.pricing import compute_totals, cost_of_goods, subtotal


class Cart:
    """Working selection of products and quantities.

    Lines hold a snapshot of the product taken when it was first added, so
    catalog edits made while the sale is open do not change its prices.
    Stock is not checked here; overselling is absorbed by the catalog's
    clamp at zero.
    """

    def __init__(self):
        self._items: dict[str, CartItem] = {}

    def add_item(self, product: Product) -> CartItem:
        """Add one unit of a product.

        Args:
            product: Catalog product

        Returns:
            The updated cart line
        """
        existing = self._items.get(product.id)
        if existing is not None:
            item = CartItem(product=existing.product, quantity=existing.quantity + 1)
        else:
            item = CartItem(product=product, quantity=1)
        self._items[product.id] = item
        return item

    def adjust_quantity(self, product_id: str, delta: int) -> Optional[CartItem]:
        """Change a line's quantity by ``delta``.

        The quantity never drops below zero; a line that reaches zero is
        removed.

        Args:
            product_id: Product ID of the line
            delta: Quantity change (may be negative)

        Returns:
            The updated line, or None if it was removed

        Raises:
            NotFoundError: If the product is not in the cart
        """
        existing = self._items.get(product_id)
        if existing is None:
            raise NotFoundError(cart_item_not_found(product_id))

        quantity = max(0, existing.quantity + delta)
        if quantity == 0:
            del self._items[product_id]
            return None

        item = CartItem(product=existing.product, quantity=quantity)
        self._items[product_id] = item
        return item

    def clear(self) -> None:
        self._items.clear()

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._items

    @property
    def subtotal(self) -> Decimal:
        return subtotal(self._items.values())

    @property
    def cost_of_goods(self) -> Decimal:
        return cost_of_goods(self._items.values())

    def totals(self, tax_rate_percent: Decimal | int | str) -> PriceTotals:
        """Totals for the current lines at ``tax_rate_percent``."""
        return compute_totals(self._items.values(), tax_rate_percent)
