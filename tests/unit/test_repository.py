"""Tests for the SQLAlchemy storage gateway."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from stellar_nexus.domain.errors import InsufficientQuantityError, TransientError


@pytest.fixture
def commander(storage):
    with storage.transaction():
        return storage.create_user("42", "nova")


def _ship(storage, user_id, name):
    return storage.create_ship(
        user_id,
        name=name,
        type="scout",
        tier=1,
        variant="Swiftwing",
        health=100,
        max_health=100,
        speed=80,
        cargo=20,
        weapons=1,
        sensors=60,
    )


class TestTransactions:
    def test_commit_on_success(self, storage, session):
        with storage.transaction():
            storage.create_user("1", "alpha")
        session.rollback()
        assert storage.get_user_by_discord_id("1") is not None

    def test_rollback_on_error(self, storage):
        with pytest.raises(RuntimeError), storage.transaction():
            storage.create_user("1", "alpha")
            raise RuntimeError("boom")
        assert storage.get_user_by_discord_id("1") is None

    def test_nested_blocks_join_the_outer_one(self, storage):
        with pytest.raises(RuntimeError), storage.transaction():
            with storage.transaction():
                storage.create_user("1", "alpha")
            raise RuntimeError("outer failure")
        assert storage.get_user_by_discord_id("1") is None

    def test_database_errors_become_transient(self, storage):
        with pytest.raises(TransientError) as exc_info, storage.transaction():
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))
        assert exc_info.value.retryable is True
        assert exc_info.value.details == {"error": "OperationalError"}

    def test_failed_reads_become_transient(self, storage, session, commander):
        session.execute(text("DROP TABLE ships"))
        session.commit()

        with pytest.raises(TransientError) as exc_info:
            storage.get_user_ships(commander.id)

        assert exc_info.value.retryable is True
        assert exc_info.value.details == {"error": "OperationalError"}
        # the session stays usable
        assert storage.get_user(commander.id) is commander


class TestUsersAndShips:
    def test_lookups(self, storage, commander):
        assert storage.get_user(commander.id) is commander
        assert storage.get_user_by_discord_id("42") is commander
        assert storage.get_user(999) is None

    def test_update_user(self, storage, commander):
        updated = storage.update_user(commander.id, credits=50)
        assert updated.credits == 50
        assert storage.update_user(999, credits=1) is None

    def test_set_active_ship_is_exclusive(self, storage, commander):
        first = _ship(storage, commander.id, "first")
        second = _ship(storage, commander.id, "second")

        storage.set_active_ship(commander.id, first.id)
        assert storage.set_active_ship(commander.id, second.id) is second

        assert [ship.is_active for ship in storage.get_user_ships(commander.id)] == [False, True]
        assert storage.get_active_ship(commander.id) is second
        assert commander.active_ship_id == second.id

    def test_cannot_activate_someone_elses_ship(self, storage, commander):
        other = storage.create_user("43", "vega")
        ship = _ship(storage, other.id, "theirs")
        assert storage.set_active_ship(commander.id, ship.id) is None
        assert storage.get_active_ship(commander.id) is None

    def test_locked_read_keeps_pending_changes(self, storage, commander):
        commander.credits = 10
        assert storage.get_user(commander.id, for_update=True).credits == 10


class TestResources:
    def test_stacks_merge_and_take_latest_value(self, storage, commander):
        storage.add_resource(commander.id, "Iron Ore", "material", quantity=3, value=5)
        merged = storage.add_resource(commander.id, "Iron Ore", "material", quantity=2, value=7)

        assert merged.quantity == 5
        assert merged.value == 7
        assert len(storage.get_user_resources(commander.id)) == 1

    def test_different_rarity_is_a_new_stack(self, storage, commander):
        storage.add_resource(commander.id, "Iron Ore", "material", quantity=3)
        storage.add_resource(commander.id, "Iron Ore", "material", quantity=1, rarity="rare")
        assert storage.held_quantities(commander.id) == {"Iron Ore": 4}
        assert len(storage.get_user_resources(commander.id)) == 2

    def test_consume_drains_oldest_stack_first(self, storage, commander):
        old = storage.add_resource(commander.id, "Silicon", "material", quantity=2)
        storage.add_resource(commander.id, "Silicon", "material", quantity=5, rarity="rare")

        storage.consume_resource(commander.id, "Silicon", 3)

        remaining = storage.get_user_resources(commander.id)
        assert [(r.rarity, r.quantity) for r in remaining] == [("rare", 4)]
        assert storage.get_resource(old.id) is None

    def test_consume_more_than_held_changes_nothing(self, storage, commander):
        storage.add_resource(commander.id, "Silicon", "material", quantity=2)
        with pytest.raises(InsufficientQuantityError) as exc_info:
            storage.consume_resource(commander.id, "Silicon", 3)
        assert (exc_info.value.required, exc_info.value.current) == (3, 2)
        assert storage.held_quantities(commander.id) == {"Silicon": 2}

    def test_remove_resource(self, storage, commander):
        resource = storage.add_resource(commander.id, "Carbon", "material")
        assert storage.remove_resource(resource.id) is True
        assert storage.remove_resource(resource.id) is False


class TestGuildsAndHistory:
    def test_guild_members(self, storage, commander):
        guild = storage.create_guild("Cosmic Traders", "trade", "npc_trader_leader")
        storage.update_user(commander.id, guild_id=guild.id)

        assert storage.get_guild_by_name("Cosmic Traders") is guild
        assert storage.get_guild_members(guild.id) == [commander]

    def test_alliance_members(self, storage, commander):
        alliance = storage.create_alliance("Iron Pact", commander.id)
        storage.update_user(commander.id, alliance_id=alliance.id)
        assert storage.get_alliance_members(alliance.id) == [commander]
        assert storage.get_all_alliances() == [alliance]

    def test_combat_history_includes_defences(self, storage, commander):
        other = storage.create_user("43", "vega")
        storage.add_combat_log(commander.id, type="pve", winner=str(commander.id))
        storage.add_combat_log(other.id, defender_id=commander.id, type="pvp", winner="43")

        history = storage.get_user_combat_history(commander.id)
        assert len(history) == 2
        assert len(storage.get_user_combat_history(other.id)) == 1

    def test_history_limit(self, storage, commander):
        for index in range(5):
            storage.add_exploration(
                commander.id, sector=f"S-{index}", type="fishing", success=True
            )
        assert len(storage.get_user_explorations(commander.id, limit=3)) == 3

    def test_market_history_newest_first(self, storage, commander):
        for quantity in (1, 2):
            storage.add_market_transaction(
                buyer_id=commander.id,
                item_type="material",
                item_name="Hyperspace Fuel",
                quantity=quantity,
                price_per_unit=75,
                total_price=75 * quantity,
            )
        assert [t.quantity for t in storage.get_market_history()] == [2, 1]

    def test_recipes_by_type(self, storage):
        storage.create_recipe("Common Laser", "weapon", level=2)
        storage.create_recipe("Basic Medkit", "consumable")
        storage.create_recipe("Alpha Laser", "weapon", level=1)

        assert [r.name for r in storage.get_recipes_by_type("weapon")] == [
            "Alpha Laser",
            "Common Laser",
        ]
        assert len(storage.get_all_recipes()) == 3
