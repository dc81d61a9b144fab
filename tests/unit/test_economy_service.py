"""Tests for market trades, player sales and crafting."""

from datetime import UTC, datetime

import pytest
from sqlalchemy import text

from stellar_nexus.domain.economy import MarketCatalog
from stellar_nexus.domain.errors import (
    InsufficientAvailabilityError,
    InsufficientCreditsError,
    InsufficientMaterialsError,
    InsufficientQuantityError,
    InvalidRequestError,
    NotFoundError,
    TransientError,
)
from stellar_nexus.generators.content import ContentGenerator
from stellar_nexus.services.economy_service import EconomyService
from stellar_nexus.utils.rng import make_rng

OPENING = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def market():
    return MarketCatalog(rng=make_rng("market"), clock=lambda: OPENING)


@pytest.fixture
def service(storage, market):
    return EconomyService(storage, market, ContentGenerator(make_rng("deals")))


def _stack(storage, user, name):
    return next(r for r in storage.get_user_resources(user.id) if r.name == name)


def _stock(service, name):
    return next(item.available for item in service.get_market_items() if item.name == name)


class TestBuyItem:
    def test_purchase(self, service, storage, player):
        result = service.buy_item(player.id, "Hyperspace Fuel", 2)

        assert result.total_price == 150
        assert player.credits == 850
        assert result.resource.quantity == 2
        assert result.resource.value == 75
        assert _stock(service, "Hyperspace Fuel") == 98

        [trade] = service.get_market_history()
        assert (trade.seller_id, trade.buyer_id) == (None, player.id)
        assert (trade.item_name, trade.quantity, trade.total_price) == ("Hyperspace Fuel", 2, 150)
        assert player.trade_count == 0
        assert _stack(storage, player, "Hyperspace Fuel").quantity == 2

    def test_purchases_stack(self, service, storage, player):
        service.buy_item(player.id, "Hyperspace Fuel", 1)
        service.buy_item(player.id, "Hyperspace Fuel", 3)
        assert _stack(storage, player, "Hyperspace Fuel").quantity == 4

    def test_insufficient_credits_keeps_stock(self, service, player):
        with pytest.raises(InsufficientCreditsError):
            service.buy_item(player.id, "Plasma Cannon", 1)
        assert player.credits == 1000
        assert _stock(service, "Plasma Cannon") == 5
        assert service.get_market_history() == []

    def test_insufficient_availability(self, service, player):
        with pytest.raises(InsufficientAvailabilityError):
            service.buy_item(player.id, "Quantum Core", 11)

    @pytest.mark.parametrize(
        ("name", "quantity", "error"),
        [
            ("Hyperspace Fuel", 0, InvalidRequestError),
            ("Warp Banana", 1, NotFoundError),
        ],
    )
    def test_invalid_requests(self, service, player, name, quantity, error):
        with pytest.raises(error):
            service.buy_item(player.id, name, quantity)

    def test_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.buy_item(999, "Hyperspace Fuel", 1)

    def test_sold_out_item_is_not_sold_twice(self, service, storage, player, rival):
        storage.update_user(player.id, credits=30_000)
        storage.update_user(rival.id, credits=30_000)

        service.buy_item(player.id, "Plasma Cannon", 5)
        with pytest.raises(InsufficientAvailabilityError):
            service.buy_item(rival.id, "Plasma Cannon", 5)

        assert rival.credits == 30_000
        assert _stock(service, "Plasma Cannon") == 0
        assert len(service.get_market_history()) == 1

    def test_failed_purchase_returns_reserved_stock(self, service, player):
        with pytest.raises(NotFoundError):
            service.buy_item(999, "Plasma Cannon", 5)
        assert _stock(service, "Plasma Cannon") == 5


class TestSellResource:
    def test_partial_sale(self, service, storage, player):
        ore = _stack(storage, player, "Iron Ore")

        result = service.sell_resource(player.id, ore.id, 4, 12)

        assert (result.total_income, result.remaining) == (48, 6)
        assert player.credits == 1048
        assert player.trade_count == 1
        assert ore.quantity == 6

        [trade] = service.get_market_history()
        assert (trade.seller_id, trade.buyer_id) == (player.id, player.id)
        assert trade.price_per_unit == 12

    def test_selling_everything_removes_the_stack(self, service, storage, player):
        ore = _stack(storage, player, "Iron Ore")

        result = service.sell_resource(player.id, ore.id, 10, 5)

        assert result.remaining == 0
        assert storage.get_resource(ore.id) is None

    def test_cannot_sell_more_than_held(self, service, storage, player):
        ore = _stack(storage, player, "Iron Ore")
        with pytest.raises(InsufficientQuantityError):
            service.sell_resource(player.id, ore.id, 11, 5)
        assert player.credits == 1000

    def test_cannot_sell_someone_elses_resource(self, service, storage, player, rival):
        ore = _stack(storage, rival, "Iron Ore")
        with pytest.raises(NotFoundError):
            service.sell_resource(player.id, ore.id, 1, 5)

    @pytest.mark.parametrize(("quantity", "price"), [(0, 5), (1, 0)])
    def test_non_positive_values(self, service, storage, player, quantity, price):
        ore = _stack(storage, player, "Iron Ore")
        with pytest.raises(InvalidRequestError):
            service.sell_resource(player.id, ore.id, quantity, price)


class TestCraftItem:
    def test_craft_consumes_summed_materials(self, service, storage, player):
        recipe = storage.create_recipe(
            "Reinforced Plating",
            "upgrade",
            materials=[
                {"name": "Iron Ore", "quantity": 3},
                {"name": "Iron Ore", "quantity": 3},
                {"name": "Energy Cell", "quantity": 1},
            ],
            result={"name": "Reinforced Plating", "quantity": 2},
            rarity="rare",
        )

        result = service.craft_item(player.id, recipe.id)

        assert result.consumed == {"Iron Ore": 6, "Energy Cell": 1}
        assert result.quantity == 2
        assert (result.resource.value, result.resource.rarity) == (400, "rare")
        assert _stack(storage, player, "Iron Ore").quantity == 4
        assert _stack(storage, player, "Energy Cell").quantity == 4

    def test_missing_materials_consume_nothing(self, service, storage, player):
        recipe = storage.create_recipe(
            "Hull Lattice",
            "component",
            materials=[
                {"name": "Iron Ore", "quantity": 2},
                {"name": "Titanium", "quantity": 1},
            ],
            result={"name": "Hull Lattice", "quantity": 1},
        )

        with pytest.raises(InsufficientMaterialsError) as exc_info:
            service.craft_item(player.id, recipe.id)

        assert exc_info.value.missing == {"Titanium": (1, 0)}
        assert _stack(storage, player, "Iron Ore").quantity == 10

    def test_unknown_recipe(self, service, player):
        with pytest.raises(NotFoundError):
            service.craft_item(player.id, 999)

    def test_unreadable_recipes_are_transient(self, service, storage, session, player):
        session.execute(text("DROP TABLE recipes"))
        session.commit()

        with pytest.raises(TransientError) as exc_info:
            service.craft_item(player.id, 1)

        assert exc_info.value.retryable is True
        assert _stack(storage, player, "Iron Ore").quantity == 10


def test_market_history_limit(service, player):
    for _ in range(3):
        service.buy_item(player.id, "Hyperspace Fuel", 1)
    assert len(service.get_market_history(limit=2)) == 2
    assert len(service.get_market_history()) == 3


def test_daily_deals_are_discounted(service):
    deals = service.generate_daily_deals(4)
    assert 2 <= len(deals) <= 4
    assert all(deal.sale_price < deal.original_price for deal in deals)
