"""Domain model entities for veira.

These are pure data classes representing business concepts, independent of
how the application state is stored. Everything a sale records is held by
value, so editing or deleting a catalog product never rewrites history.
"""

import threading
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from veira.domain.errors import ValidationError


class Category(str, Enum):
    """Catalog category."""

    FOOD = "Food & Drinks"
    HOUSEHOLD = "Household"
    ELECTRONICS = "Electronics"
    FASHION = "Fashion"
    SERVICES = "Services"
    OTHER = "Other"


class PaymentMethod(str, Enum):
    """Tender label recorded on a sale."""

    CASH = "CASH"
    MPESA = "M-PESA"
    CARD = "CARD"


class OwnerProfile(str, Enum):
    """How the owner likes to look at the business."""

    SURVIVAL = "Survival Retail Owner"
    BURNED = "Burned Business Owner"
    GROWTH = "Growth-Minded Operator"
    COMPLIANCE = "Compliance-Anxious Owner"
    HANDS_OFF = "Hands-Off Owner"


class BusinessType(str, Enum):
    """Kind of shop."""

    RETAIL = "Retail Shop"
    RESTAURANT = "Restaurant / Café"
    ELECTRONICS = "Electronics Store"
    PHARMACY = "Pharmacy / Chemist"
    LIQUOR = "Liquor Store"
    CAR_YARD = "Car Yard"


class UserRole(str, Enum):
    """Role of the signed-in user."""

    OWNER = "Business Owner"
    ACCOUNTANT = "Accountant"
    AUDITOR = "Auditor"
    FINANCE_MANAGER = "Finance Manager"
    STORE_MANAGER = "Store Manager"
    CASHIER = "Cashier"
    STOCK_MANAGER = "Stock Manager"


class AnomalyKind(str, Enum):
    """Irregularity recorded against a transaction."""

    VARIANCE = "variance"
    PRICE_OVERRIDE = "price_override"


@dataclass(frozen=True)
class Product:
    """Sellable catalog entry."""

    id: str
    name: str
    price: Decimal
    cost: Decimal
    stock: int
    category: Category
    image_url: str = ""


@dataclass(frozen=True)
class CartItem:
    """Snapshot of a product together with the quantity being sold."""

    product: Product
    quantity: int

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def price(self) -> Decimal:
        return self.product.price

    @property
    def cost(self) -> Decimal:
        return self.product.cost

    @property
    def line_total(self) -> Decimal:
        """Retail value of this line."""
        return self.product.price * self.quantity

    @property
    def line_cost(self) -> Decimal:
        """Cost of goods for this line."""
        return self.product.cost * self.quantity


@dataclass(frozen=True)
class Transaction:
    """One completed sale.

    ``total`` is the recorded tender. For a clean sale it equals
    ``subtotal + vat``; a variance anomaly is exactly the case where it
    does not.
    """

    id: str
    timestamp: int
    items: tuple[CartItem, ...]
    total: Decimal
    vat: Decimal
    cost_of_goods: Decimal
    payment_method: PaymentMethod
    customer_name: Optional[str] = None
    anomaly_kind: Optional[AnomalyKind] = None
    anomaly_reason: Optional[str] = None

    def __post_init__(self):
        if (self.anomaly_kind is None) != (self.anomaly_reason is None):
            raise ValidationError(
                f"Transaction {self.id}: anomaly kind and reason must be set together"
            )
        if self.anomaly_reason is not None and not self.anomaly_reason.strip():
            raise ValidationError(f"Transaction {self.id}: anomaly reason cannot be empty")

    @property
    def is_anomaly(self) -> bool:
        return self.anomaly_kind is not None

    @property
    def subtotal(self) -> Decimal:
        """Sum of line totals before tax."""
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def gross_profit(self) -> Decimal:
        return self.total - self.cost_of_goods


@dataclass(frozen=True)
class BusinessSettings:
    """Owner-editable business configuration."""

    business_name: str = "Mama Mboga Supermart"
    kra_pin: str = "P051XXXXXXX"
    vat_rate: Decimal = Decimal("16")
    owner_profile: OwnerProfile = OwnerProfile.GROWTH
    business_type: BusinessType = BusinessType.RETAIL
    user_role: UserRole = UserRole.OWNER


@dataclass(frozen=True)
class PriceTotals:
    """Totals for a set of cart lines at a given tax rate."""

    subtotal: Decimal
    tax: Decimal
    total: Decimal
    cost_of_goods: Decimal


@dataclass(frozen=True)
class SalesTotals:
    """Ledger-wide money summary."""

    revenue: Decimal
    cost_of_goods: Decimal
    tax_collected: Decimal
    gross_profit: Decimal
    margin: Decimal


@dataclass(frozen=True)
class DailySales:
    """Revenue and profit for one UTC calendar day."""

    day: date
    revenue: Decimal
    profit: Decimal


@dataclass(frozen=True)
class Anomaly:
    """A single classified irregularity."""

    kind: AnomalyKind
    reason: str


@dataclass
class AppState:
    """Complete application state owned by one controller.

    ``transactions`` is kept newest-first by insertion; anything that needs
    chronological order sorts by timestamp.
    """

    products: list[Product] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    settings: BusinessSettings = field(default_factory=BusinessSettings)
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )
