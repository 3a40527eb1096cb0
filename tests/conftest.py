"""Shared pytest fixtures for veira tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from veira.database.factories import create_sqlite_database
from veira.domain.catalog import CatalogService
from veira.domain.entities import (
    AnomalyKind,
    AppState,
    CartItem,
    Category,
    PaymentMethod,
    Product,
    Transaction,
)
from veira.domain.ledger import LedgerService
from veira.domain.state import StateService

# 2023-11-14T22:13:20Z
FIXED_NOW = 1_700_000_000_000
DAY_MS = 24 * 60 * 60 * 1000


class FixedClock:
    """Clock returning a settable epoch-millisecond time."""

    def __init__(self, now: int = FIXED_NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def make_transaction(
    txn_id: str,
    timestamp: int,
    items: tuple[CartItem, ...],
    total: Decimal,
    vat: Decimal,
    cost_of_goods: Decimal,
    payment_method: PaymentMethod = PaymentMethod.CASH,
    **kwargs,
) -> Transaction:
    return Transaction(
        id=txn_id,
        timestamp=timestamp,
        items=items,
        total=total,
        vat=vat,
        cost_of_goods=cost_of_goods,
        payment_method=payment_method,
        **kwargs,
    )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def product_a():
    """Maize flour: price 210, cost 185."""
    return Product(
        id="A",
        name="Jogoo Maize Flour 2kg",
        price=Decimal("210"),
        cost=Decimal("185"),
        stock=45,
        category=Category.FOOD,
    )


@pytest.fixture
def product_b():
    """Bread: price 65, cost 52."""
    return Product(
        id="B",
        name="Broadways Bread 400g",
        price=Decimal("65"),
        cost=Decimal("52"),
        stock=20,
        category=Category.FOOD,
    )


@pytest.fixture
def product_gas():
    return Product(
        id="G",
        name="Kasuku Gas Refill 6kg",
        price=Decimal("1200"),
        cost=Decimal("980"),
        stock=3,
        category=Category.HOUSEHOLD,
    )


@pytest.fixture
def state(product_a, product_b, product_gas):
    """App state with three products and an empty ledger."""
    return AppState(products=[product_a, product_b, product_gas])


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def catalog_service(state):
    """Create a CatalogService over the sample state."""
    return CatalogService(state)


@pytest.fixture
def ledger_service(state, catalog_service, clock):
    """Create a LedgerService over the sample state with a fixed clock."""
    return LedgerService(state, catalog=catalog_service, clock=clock)


@pytest.fixture
def sample_transactions(product_a, product_b):
    """Three sales on two UTC days, one flagged."""
    clean_1 = make_transaction(
        "T1",
        FIXED_NOW - 1000,
        (CartItem(product_a, 2), CartItem(product_b, 1)),
        total=Decimal("562.6"),
        vat=Decimal("77.6"),
        cost_of_goods=Decimal("422"),
        payment_method=PaymentMethod.MPESA,
    )
    clean_2 = make_transaction(
        "T2",
        FIXED_NOW - DAY_MS,
        (CartItem(product_b, 2),),
        total=Decimal("150.8"),
        vat=Decimal("20.8"),
        cost_of_goods=Decimal("104"),
        payment_method=PaymentMethod.CASH,
    )
    flagged = make_transaction(
        "T3",
        FIXED_NOW - 2000,
        (CartItem(product_a, 1),),
        total=Decimal("693.6"),
        vat=Decimal("33.6"),
        cost_of_goods=Decimal("185"),
        payment_method=PaymentMethod.CARD,
        anomaly_kind=AnomalyKind.VARIANCE,
        anomaly_reason="Variance Detected: Calculated total (KES 243.60) does not match recorded tender (KES 693.60)",
    )
    return [clean_1, flagged, clean_2]


@pytest.fixture
def populated_state(state, sample_transactions):
    state.transactions = list(sample_transactions)
    return state


@pytest.fixture
def signed_in_db(temp_db, populated_state):
    """Database holding the populated state with a signed-in owner."""
    store = StateService(temp_db)
    store.save(populated_state)
    store.set_authenticated(True)
    return temp_db


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
