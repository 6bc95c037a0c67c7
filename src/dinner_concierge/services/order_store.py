"""Local persistence of the order set."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from dinner_concierge.domain.errors import PersistenceError
from dinner_concierge.domain.orders import OrderSet, UserOrder

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "family_dinner_orders_2025_v1"

_ORDER_SET = TypeAdapter(dict[str, UserOrder])


class KeyValueStore(Protocol):
    """String key-value storage on the local device."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if any.

        Raises:
            PersistenceError: the store could not be read.
        """

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one.

        Raises:
            PersistenceError: the store could not be written.
        """


@dataclass
class OrderStore:
    """Loads and saves the whole order set under a single key."""

    store: KeyValueStore
    key: str = DEFAULT_STORAGE_KEY

    def load(self) -> OrderSet:
        """Return the stored orders, or an empty set when nothing is usable."""
        try:
            raw = self.store.get(self.key)
        except PersistenceError:
            logger.exception("Failed to read orders", extra={"key": self.key})
            return {}
        if raw is None:
            return {}
        try:
            return _ORDER_SET.validate_json(raw)
        except ValidationError:
            logger.exception("Failed to load orders", extra={"key": self.key})
            return {}

    def save(self, orders: OrderSet) -> bool:
        """Overwrite the stored orders; failures are logged, not raised."""
        payload = _ORDER_SET.dump_json(orders, by_alias=True, exclude_none=True)
        try:
            self.store.set(self.key, payload.decode("utf-8"))
        except PersistenceError:
            logger.exception("Failed to save orders", extra={"key": self.key})
            return False
        return True
