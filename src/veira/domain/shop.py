"""Controller owning the application state."""

import logging
import time
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Optional

from veira.database.base import Database
from veira.domain.cart import Cart
from veira.domain.catalog import CatalogService
from veira.domain.entities import (
    AppState,
    BusinessSettings,
    BusinessType,
    Category,
    OwnerProfile,
    PaymentMethod,
    Product,
    Transaction,
    UserRole,
)
from veira.domain.errors import ValidationError, negative_amount
from veira.domain.ledger import LedgerService
from veira.domain.reporting import ReportingService
from veira.domain.state import StateService
from veira.utils.money import to_decimal

logger = logging.getLogger(__name__)


class ShopController:
    """Single owner of the catalog, ledger and settings.

    Every mutation goes through this class and is followed by a save of the
    whole state.
    """

    def __init__(
        self,
        db: Database,
        state: Optional[AppState] = None,
        clock: Optional[Callable[[], int]] = None,
        checkout_delay: float = 0.0,
    ):
        """Initialize the controller.

        Args:
            db: Database instance
            state: Preloaded state (loaded from the database if omitted)
            clock: Returns the current time in epoch milliseconds
            checkout_delay: Artificial processing latency in seconds before a
                sale is recorded
        """
        self.store = StateService(db)
        self.state = state if state is not None else self.store.load()
        self.catalog = CatalogService(self.state)
        self.ledger = LedgerService(self.state, catalog=self.catalog, clock=clock)
        self.checkout_delay = checkout_delay

    def save(self) -> None:
        self.store.save(self.state)

    @property
    def settings(self) -> BusinessSettings:
        return self.state.settings

    # Session
    def is_authenticated(self) -> bool:
        return self.store.is_authenticated()

    def login(self, role: UserRole) -> None:
        """Sign in with ``role`` and remember the session."""
        self.state.settings = replace(self.state.settings, user_role=UserRole(role))
        self.store.set_authenticated(True)
        self.save()

    def logout(self) -> None:
        self.store.set_authenticated(False)

    # Catalog
    def add_product(self, product: Product) -> Product:
        added = self.catalog.add_product(product)
        self.save()
        return added

    def create_product(
        self,
        name: str,
        price: Decimal,
        cost: Decimal,
        stock: int,
        category: Category,
        image_url: Optional[str] = None,
    ) -> Product:
        product = self.catalog.create_product(name, price, cost, stock, category, image_url)
        self.save()
        return product

    def update_product(self, product: Product) -> Product:
        updated = self.catalog.update_product(product)
        self.save()
        return updated

    def remove_product(self, product_id: str) -> bool:
        removed = self.catalog.remove_product(product_id)
        if removed:
            self.save()
        return removed

    # Sales
    def checkout(
        self,
        cart: Cart,
        payment_method: PaymentMethod,
        customer_name: Optional[str] = None,
    ) -> Transaction:
        """Complete the sale in ``cart`` at the configured VAT rate.

        Raises:
            EmptyCartError: If the cart has no items
        """
        if self.checkout_delay > 0 and not cart.is_empty:
            time.sleep(self.checkout_delay)
        transaction = self.ledger.complete(
            cart,
            payment_method,
            self.state.settings.vat_rate,
            customer_name=customer_name,
        )
        self.save()
        return transaction

    # Settings
    def update_settings(
        self,
        business_name: Optional[str] = None,
        kra_pin: Optional[str] = None,
        vat_rate: Optional[Decimal] = None,
        owner_profile: Optional[OwnerProfile] = None,
        business_type: Optional[BusinessType] = None,
        user_role: Optional[UserRole] = None,
    ) -> BusinessSettings:
        """Change business settings. Unset arguments keep their value.

        Raises:
            ValidationError: If the name or PIN is empty or the rate negative
        """
        changes = {}
        if business_name is not None:
            if not business_name.strip():
                raise ValidationError("Business name cannot be empty")
            changes["business_name"] = business_name.strip()
        if kra_pin is not None:
            if not kra_pin.strip():
                raise ValidationError("KRA PIN cannot be empty")
            changes["kra_pin"] = kra_pin.strip().upper()
        if vat_rate is not None:
            rate = to_decimal(vat_rate)
            if rate < 0:
                raise ValidationError(negative_amount("VAT rate", rate))
            changes["vat_rate"] = rate
        if owner_profile is not None:
            changes["owner_profile"] = OwnerProfile(owner_profile)
        if business_type is not None:
            changes["business_type"] = BusinessType(business_type)
        if user_role is not None:
            changes["user_role"] = UserRole(user_role)

        with self.state.lock:
            self.state.settings = replace(self.state.settings, **changes)
        self.save()
        logger.info("Updated settings: %s", ", ".join(sorted(changes)) or "nothing")
        return self.state.settings

    # Reads
    def reporting(self) -> ReportingService:
        return ReportingService.from_state(self.state)
