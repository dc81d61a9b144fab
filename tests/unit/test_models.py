"""Unit tests for SQLAlchemy models.

These tests verify that models can be instantiated, constraints are
enforced, JSON columns round-trip, and seed data loads correctly.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from stellar_nexus.models import (
    Alliance,
    Exploration,
    Guild,
    Recipe,
    Resource,
    Ship,
    User,
    seed_recipes,
)
from stellar_nexus.utils.rng import make_rng


@pytest.fixture
def user(session):
    """Create a test user."""
    user = User(discord_id="42", username="nova")
    session.add(user)
    session.commit()
    return user


def _ship(user_id, **overrides):
    fields = {
        "name": "Swiftwing-ab12",
        "type": "scout",
        "tier": 1,
        "variant": "Swiftwing",
        "health": 100,
        "max_health": 100,
        "speed": 80,
        "cargo": 20,
        "weapons": 1,
        "sensors": 60,
    }
    fields.update(overrides)
    return Ship(user_id=user_id, **fields)


class TestUserModel:
    """Tests for User model."""

    def test_defaults(self, user):
        assert (user.level, user.experience) == (1, 0)
        assert (user.credits, user.nexium) == (1000, 25)
        assert user.stats == {
            "exploration_count": 0,
            "combat_count": 0,
            "artifact_count": 0,
            "trade_count": 0,
        }
        assert user.last_active.tzinfo is not None

    def test_unique_discord_id(self, session, user):  # noqa: ARG002
        session.add(User(discord_id="42", username="copy"))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_credits_cannot_go_negative(self, session, user):
        user.credits = -1
        with pytest.raises(IntegrityError):
            session.commit()

    def test_repr(self, user):
        assert repr(user) == f"<User(id={user.id}, discord_id='42', level=1)>"


class TestShipModel:
    def test_stats_snapshot(self, session, user):
        ship = _ship(user.id)
        session.add(ship)
        session.commit()

        stats = ship.stats
        assert (stats.health, stats.speed, stats.weapons, stats.sensors) == (100, 80, 1, 60)
        assert stats.power == 100 + 80 + 1 * 20 + 60
        assert ship.owner is user
        session.refresh(user)
        assert user.ships == [ship]

    @pytest.mark.parametrize("overrides", [{"tier": 5}, {"health": 120}, {"health": -1}])
    def test_constraints(self, session, user, overrides):
        session.add(_ship(user.id, **overrides))
        with pytest.raises(IntegrityError):
            session.commit()


class TestResourceModel:
    def test_one_stack_per_name_type_rarity(self, session, user):
        session.add(Resource(user_id=user.id, name="Iron Ore", type="material", quantity=3))
        session.add(Resource(user_id=user.id, name="Iron Ore", type="material", quantity=2))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_rarities_stack_separately(self, session, user):
        session.add(Resource(user_id=user.id, name="Iron Ore", type="material"))
        session.add(Resource(user_id=user.id, name="Iron Ore", type="material", rarity="rare"))
        session.commit()
        rows = session.execute(select(Resource).where(Resource.user_id == user.id)).scalars()
        assert len(list(rows)) == 2


class TestGuildModel:
    def test_capacity_enforced(self, session):
        session.add(
            Guild(name="Tiny", type="trade", leader_id="npc", member_count=3, max_members=2)
        )
        with pytest.raises(IntegrityError):
            session.commit()

    def test_membership_relationship(self, session, user):
        guild = Guild(name="Void Explorers", type="exploration", leader_id="npc")
        session.add(guild)
        session.flush()
        user.guild_id = guild.id
        session.commit()
        session.refresh(guild)
        assert guild.members == [user]

    def test_alliance_defaults(self, session, user):
        alliance = Alliance(name="Iron Pact", leader_id=user.id)
        session.add(alliance)
        session.commit()
        assert (alliance.member_count, alliance.max_members, alliance.fleet_power) == (1, 20, 0)


class TestHistoryModels:
    def test_exploration_json_columns(self, session, user):
        session.add(
            Exploration(
                user_id=user.id,
                sector="Nova-Rim-7",
                type="fishing",
                success=True,
                rewards=[{"type": "credits", "name": "Salvage", "quantity": 1, "value": 12}],
                details={"roll": 0.25},
            )
        )
        session.commit()
        session.expire_all()

        stored = session.execute(select(Exploration)).scalar_one()
        assert stored.rewards[0]["value"] == 12
        assert stored.details == {"roll": 0.25}


class TestSeedRecipes:
    def test_seed_full_book(self, session):
        inserted = seed_recipes(session, make_rng("recipes"))
        session.commit()

        assert inserted == 5 * 11
        recipes = list(session.execute(select(Recipe)).scalars())
        assert len(recipes) == inserted
        assert all(recipe.materials for recipe in recipes)
        assert {recipe.type for recipe in recipes} == {
            "weapon",
            "component",
            "upgrade",
            "consumable",
            "material",
        }

    def test_seed_is_idempotent(self, session):
        seed_recipes(session, make_rng("recipes"), level=1)
        assert seed_recipes(session, make_rng("recipes"), level=1) == 0
