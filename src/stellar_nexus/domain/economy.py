"""Market catalog and crafting rules."""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime, timedelta
from math import floor
from typing import Any

from stellar_nexus.utils.rng import random_int

from .enums import Rarity
from .errors import InsufficientAvailabilityError, InvalidRequestError, NotFoundError
from .models import MarketItem
from .rules_config import CRAFTED_ITEM_VALUES, DEFAULT_RULES, EconomyRules, initial_market_items

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class MarketCatalog:
    """NPC market stock with lazily refreshed prices and availability.

    The catalog lives for the whole process. Before any read, if the refresh
    interval has elapsed since the last refresh, every item's price drifts by
    up to +/-15% and its availability restocks by ``restock_min..restock_max``
    units (never below zero).
    """

    def __init__(
        self,
        *,
        rng: random.Random,
        clock: Clock = _utc_now,
        items: Iterable[MarketItem] | None = None,
        rules: EconomyRules = DEFAULT_RULES.economy,
        refresh_interval_seconds: float | None = None,
    ) -> None:
        self._rng = rng
        self._clock = clock
        self._rules = rules
        seconds = (
            refresh_interval_seconds
            if refresh_interval_seconds is not None
            else rules.market_refresh_seconds
        )
        self._interval = timedelta(seconds=seconds)
        self._items: dict[str, MarketItem] = {
            item.name: item for item in (items if items is not None else initial_market_items())
        }
        self._last_refresh = clock()
        self._lock = threading.RLock()

    @property
    def last_refresh(self) -> datetime:
        return self._last_refresh

    def refresh_if_due(self) -> bool:
        """Refresh when the interval has elapsed. Returns whether it refreshed."""
        with self._lock:
            now = self._clock()
            if now - self._last_refresh < self._interval:
                return False
            self._refresh(now)
            return True

    def _refresh(self, now: datetime) -> None:
        volatility = self._rules.price_volatility
        for item in self._items.values():
            item.price = floor(item.price * (1 + (self._rng.random() - 0.5) * volatility))
            item.available = max(
                0,
                item.available
                + random_int(self._rng, self._rules.restock_min, self._rules.restock_max),
            )
        self._last_refresh = now
        logger.info("Market refreshed items=%d at=%s", len(self._items), now.isoformat())

    def list_items(self) -> list[MarketItem]:
        """Refresh if due, then return copies of every item."""
        with self._lock:
            self.refresh_if_due()
            return [
                MarketItem(i.name, i.type, i.price, i.available, i.rarity, i.description)
                for i in self._items.values()
            ]

    def reserve(self, item_name: str, quantity: int) -> MarketItem:
        """Take ``quantity`` units out of stock and return a copy of the item.

        The copy carries the price at reservation time. A purchase that does
        not go through must hand the units back with :meth:`release`.

        Raises:
            InvalidRequestError: If quantity is not positive
            NotFoundError: If the item is not sold here
            InsufficientAvailabilityError: If stock is below ``quantity``
        """
        if quantity < 1:
            raise InvalidRequestError(
                f"quantity must be at least 1, got {quantity}", details={"quantity": quantity}
            )
        with self._lock:
            self.refresh_if_due()
            item = self._items.get(item_name)
            if item is None:
                raise NotFoundError("market item", item_name)
            if item.available < quantity:
                raise InsufficientAvailabilityError(quantity, item.available)
            item.available -= quantity
            return MarketItem(
                item.name, item.type, item.price, item.available, item.rarity, item.description
            )

    def release(self, item_name: str, quantity: int) -> None:
        """Return reserved units to stock."""
        with self._lock:
            self._items[item_name].available += quantity


def missing_materials(
    required: Iterable[Mapping[str, Any]], held: Mapping[str, int]
) -> dict[str, tuple[int, int]]:
    """Materials a recipe needs that ``held`` does not cover.

    Args:
        required: Recipe material entries with ``name`` and ``quantity``
        held: Total quantity held per resource name

    Returns:
        ``{name: (required, held)}`` for every short material; empty when craftable
    """
    missing: dict[str, tuple[int, int]] = {}
    for material in required:
        name = material["name"]
        quantity = int(material["quantity"])
        have = held.get(name, 0)
        if have < quantity:
            missing[name] = (quantity, have)
    return missing


def crafted_item_value(rarity: Rarity | str) -> int:
    """Per-unit value of a crafted item of ``rarity``."""
    try:
        return CRAFTED_ITEM_VALUES[Rarity(rarity)]
    except ValueError:
        return 100
