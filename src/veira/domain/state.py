"""Loading and saving the application state."""

import logging
import random
from decimal import InvalidOperation
from typing import Optional

from veira.database.base import Database
from veira.database.mappers import (
    payload_from_json,
    product_from_dict,
    settings_from_dict,
    state_to_json,
    transaction_from_dict,
)
from veira.domain.entities import AppState
from veira.domain.seed import INITIAL_PRODUCTS, generate_seed_transactions

logger = logging.getLogger(__name__)

DATA_KEY = "veira-data"
AUTH_KEY = "veira-auth"

# Everything a corrupt or foreign blob can raise while being decoded
DECODE_ERRORS = (ValueError, KeyError, TypeError, AttributeError, InvalidOperation)


class StateService:
    """Service for persisting the whole application state as one blob."""

    def __init__(self, db: Database, rng: Optional[random.Random] = None):
        """Initialize state service.

        Args:
            db: Database instance
            rng: Random source for seed data
        """
        self.db = db
        self.rng = rng

    def seeded_state(self) -> AppState:
        """Initial catalog plus a generated sales history."""
        state = AppState(products=list(INITIAL_PRODUCTS))
        state.transactions = generate_seed_transactions(
            state.products, rng=self.rng, vat_rate=state.settings.vat_rate
        )
        return state

    def decode(self, blob: str) -> AppState:
        """Decode a stored blob.

        Missing products fall back to the initial catalog and missing
        settings to the defaults. A missing ledger decodes as empty.

        Raises:
            ValueError, KeyError, TypeError: If the blob is malformed
        """
        payload = payload_from_json(blob)

        products = payload.get("products")
        if products:
            product_list = [product_from_dict(p) for p in products]
        else:
            product_list = list(INITIAL_PRODUCTS)

        return AppState(
            products=product_list,
            transactions=[transaction_from_dict(t) for t in payload.get("transactions") or []],
            settings=settings_from_dict(payload.get("settings") or {}),
        )

    def load(self) -> AppState:
        """Load the stored state, falling back to seed data.

        An absent or unreadable blob is replaced by the initial catalog and a
        generated history; a readable blob with an empty ledger keeps its
        catalog and settings and gets a generated history. Either way the
        result is saved straight away.

        Returns:
            The application state
        """
        blob = self.db.get_value(DATA_KEY)
        state = None
        if blob is None:
            logger.info("No stored state found; generating seed data")
        else:
            try:
                state = self.decode(blob)
            except DECODE_ERRORS as e:
                logger.warning("Stored state is unreadable (%s); generating seed data", e)

        if state is None:
            state = self.seeded_state()
        elif state.transactions:
            return state
        else:
            logger.info("Stored ledger is empty; generating seed history")
            state.transactions = generate_seed_transactions(
                INITIAL_PRODUCTS, rng=self.rng, vat_rate=state.settings.vat_rate
            )

        self.save(state)
        return state

    def save(self, state: AppState) -> None:
        """Serialize and store the whole state."""
        with state.lock:
            blob = state_to_json(state)
        self.db.set_value(DATA_KEY, blob)

    def is_authenticated(self) -> bool:
        return self.db.get_value(AUTH_KEY) == "true"

    def set_authenticated(self, authenticated: bool) -> None:
        if authenticated:
            self.db.set_value(AUTH_KEY, "true")
        else:
            self.db.delete_value(AUTH_KEY)
