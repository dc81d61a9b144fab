"""Unit tests for the market catalog and crafting rules."""

from datetime import UTC, datetime, timedelta

import pytest

from stellar_nexus.domain.economy import MarketCatalog, crafted_item_value, missing_materials
from stellar_nexus.domain.enums import Rarity
from stellar_nexus.domain.errors import (
    InsufficientAvailabilityError,
    InvalidRequestError,
    NotFoundError,
)
from stellar_nexus.domain.rules_config import initial_market_items
from stellar_nexus.utils.rng import make_rng


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def catalog(clock):
    return MarketCatalog(rng=make_rng("market"), clock=clock)


def _prices(items):
    return {item.name: item.price for item in items}


def _stock(catalog):
    return {item.name: item.available for item in catalog.list_items()}


class TestRefresh:
    def test_opening_catalog(self, catalog):
        assert _prices(catalog.list_items()) == _prices(initial_market_items())

    def test_no_refresh_before_interval(self, catalog, clock):
        clock.advance(minutes=59)
        assert catalog.refresh_if_due() is False

    def test_refresh_after_interval(self, catalog, clock):
        opening = {item.name: item for item in initial_market_items()}
        clock.advance(hours=1)

        items = catalog.list_items()

        assert catalog.last_refresh == clock.now
        for item in items:
            before = opening[item.name]
            assert before.price * 0.85 - 1 <= item.price <= before.price * 1.15
            assert max(0, before.available - 5) <= item.available <= before.available + 4

    def test_midpoint_draw_keeps_prices(self, scripted, clock):
        catalog = MarketCatalog(rng=scripted([0.5] * 5), clock=clock)
        clock.advance(hours=2)
        assert _prices(catalog.list_items()) == _prices(initial_market_items())

    def test_configurable_interval(self, clock):
        catalog = MarketCatalog(rng=make_rng("m"), clock=clock, refresh_interval_seconds=60)
        clock.advance(seconds=61)
        assert catalog.refresh_if_due() is True
        assert catalog.refresh_if_due() is False


class TestPurchases:
    def test_reserve_takes_stock_and_returns_a_copy(self, catalog):
        reserved = catalog.reserve("Quantum Core", 2)
        reserved.available = 0
        assert _stock(catalog)["Quantum Core"] == 8

    def test_last_units_go_to_one_buyer(self, catalog):
        catalog.reserve("Plasma Cannon", 5)
        with pytest.raises(InsufficientAvailabilityError):
            catalog.reserve("Plasma Cannon", 5)
        assert _stock(catalog)["Plasma Cannon"] == 0

    def test_release_restores_stock(self, catalog):
        catalog.reserve("Plasma Cannon", 2)
        catalog.release("Plasma Cannon", 2)
        assert _stock(catalog)["Plasma Cannon"] == 5

    def test_reserve_validation(self, catalog):
        with pytest.raises(InvalidRequestError):
            catalog.reserve("Quantum Core", 0)
        with pytest.raises(NotFoundError, match="market item"):
            catalog.reserve("Warp Bubble", 1)
        with pytest.raises(InsufficientAvailabilityError) as exc_info:
            catalog.reserve("Plasma Cannon", 6)
        assert (exc_info.value.required, exc_info.value.current) == (6, 5)


class TestCrafting:
    def test_missing_materials(self):
        required = [{"name": "Iron Ore", "quantity": 5}, {"name": "Energy Cell", "quantity": 2}]
        held = {"Iron Ore": 3, "Energy Cell": 2}
        assert missing_materials(required, held) == {"Iron Ore": (5, 3)}

    def test_nothing_missing(self):
        assert missing_materials([{"name": "Silicon", "quantity": 1}], {"Silicon": 4}) == {}

    @pytest.mark.parametrize(
        ("rarity", "value"),
        [(Rarity.COMMON, 50), ("rare", 400), (Rarity.LEGENDARY, 1500), ("mythic", 100)],
    )
    def test_crafted_item_value(self, rarity, value):
        assert crafted_item_value(rarity) == value
