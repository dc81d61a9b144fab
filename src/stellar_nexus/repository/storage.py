"""SQLAlchemy-backed persistence gateway for the game services."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from sqlalchemy import Executable, Result, or_, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from stellar_nexus.domain.errors import InsufficientQuantityError, TransientError
from stellar_nexus.models import (
    Alliance,
    Base,
    CombatLog,
    Exploration,
    Guild,
    MarketTransaction,
    Recipe,
    Resource,
    Ship,
    User,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Base)


def _unavailable(exc: Exception) -> TransientError:
    return TransientError(
        "the game database is temporarily unavailable",
        details={"error": type(exc).__name__},
    )


class GameStorage:
    """Read and write game rows through one SQLAlchemy session.

    Writes only flush; :meth:`transaction` owns commit and rollback so that
    a multi-step service operation lands atomically. Lookups return ``None``
    for missing rows and leave raising to the services.

    Example:
        ```python
        storage = GameStorage(session)
        with storage.transaction():
            user = storage.create_user("1234", "nova")
            storage.add_resource(user.id, "Iron Ore", "material", quantity=10, value=5)
        ```
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self._depth = 0

    # --- transactions ----------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Run the enclosed block as one unit of work.

        Nested calls join the outermost transaction. The outermost block
        commits on success and rolls back on any exception.

        Raises:
            TransientError: When the database connection fails
        """
        if self._depth:
            self._depth += 1
            try:
                yield self.session
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield self.session
            self.session.commit()
        except (OperationalError, InterfaceError) as exc:
            self.session.rollback()
            logger.warning("Transaction failed on a database error: %s", exc)
            raise _unavailable(exc) from exc
        except Exception:
            self.session.rollback()
            raise
        finally:
            self._depth = 0

    def _execute(self, stmt: Executable) -> Result[Any]:
        """Run ``stmt``, reporting connection and schema failures as transient.

        Inside a transaction the outermost block rolls back; a failed
        standalone read rolls back here.
        """
        try:
            return self.session.execute(stmt)
        except (OperationalError, InterfaceError) as exc:
            if not self._depth:
                self.session.rollback()
            logger.warning("Query failed on a database error: %s", exc)
            raise _unavailable(exc) from exc

    def _get(self, model: type[M], row_id: int, *, for_update: bool = False) -> M | None:
        stmt = select(model).where(model.id == row_id)
        if for_update:
            # refreshing a locked row must not discard pending changes
            self.session.flush()
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self._execute(stmt).scalar_one_or_none()

    def _apply(self, row: M | None, changes: dict[str, Any]) -> M | None:
        if row is None:
            return None
        for name, value in changes.items():
            setattr(row, name, value)
        self.session.flush()
        return row

    # --- users -----------------------------------------------------------------

    def get_user(self, user_id: int, *, for_update: bool = False) -> User | None:
        return self._get(User, user_id, for_update=for_update)

    def get_user_by_discord_id(self, discord_id: str) -> User | None:
        stmt = select(User).where(User.discord_id == discord_id)
        return self._execute(stmt).scalar_one_or_none()

    def create_user(self, discord_id: str, username: str, **fields: Any) -> User:
        user = User(discord_id=discord_id, username=username, **fields)
        self.session.add(user)
        self.session.flush()
        return user

    def update_user(self, user_id: int, **changes: Any) -> User | None:
        return self._apply(self.get_user(user_id), changes)

    # --- ships -----------------------------------------------------------------

    def get_ship(self, ship_id: int, *, for_update: bool = False) -> Ship | None:
        return self._get(Ship, ship_id, for_update=for_update)

    def get_user_ships(self, user_id: int) -> list[Ship]:
        stmt = select(Ship).where(Ship.user_id == user_id).order_by(Ship.id)
        return list(self._execute(stmt).scalars())

    def get_active_ship(self, user_id: int, *, for_update: bool = False) -> Ship | None:
        stmt = select(Ship).where(Ship.user_id == user_id, Ship.is_active.is_(True))
        if for_update:
            self.session.flush()
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self._execute(stmt.limit(1)).scalar_one_or_none()

    def create_ship(self, user_id: int, **fields: Any) -> Ship:
        ship = Ship(user_id=user_id, **fields)
        self.session.add(ship)
        self.session.flush()
        return ship

    def update_ship(self, ship_id: int, **changes: Any) -> Ship | None:
        return self._apply(self.get_ship(ship_id), changes)

    def set_active_ship(self, user_id: int, ship_id: int) -> Ship | None:
        """Make ``ship_id`` the user's only active ship.

        Returns ``None`` without changing anything when the ship is missing
        or owned by someone else.
        """
        ship = self.get_ship(ship_id, for_update=True)
        user = self.get_user(user_id, for_update=True)
        if ship is None or user is None or ship.user_id != user_id:
            return None
        for owned in self.get_user_ships(user_id):
            owned.is_active = owned.id == ship_id
        user.active_ship_id = ship_id
        self.session.flush()
        return ship

    # --- resources -------------------------------------------------------------

    def get_user_resources(self, user_id: int) -> list[Resource]:
        stmt = select(Resource).where(Resource.user_id == user_id).order_by(Resource.id)
        return list(self._execute(stmt).scalars())

    def get_resource(self, resource_id: int, *, for_update: bool = False) -> Resource | None:
        return self._get(Resource, resource_id, for_update=for_update)

    def add_resource(
        self,
        user_id: int,
        name: str,
        type: str,  # noqa: A002
        *,
        quantity: int = 1,
        value: int = 0,
        rarity: str = "common",
        description: str | None = None,
    ) -> Resource:
        """Stack ``quantity`` units onto the user's matching resource row.

        A new row is created when the user holds no ``(name, type, rarity)``
        stack yet. ``value`` is the per-unit appraisal and replaces the
        stack's previous value.
        """
        stmt = (
            select(Resource)
            .where(
                Resource.user_id == user_id,
                Resource.name == name,
                Resource.type == type,
                Resource.rarity == rarity,
            )
            .with_for_update()
        )
        existing = self._execute(stmt).scalar_one_or_none()
        if existing is not None:
            existing.quantity += quantity
            existing.value = value
            if description:
                existing.description = description
            self.session.flush()
            return existing

        resource = Resource(
            user_id=user_id,
            name=name,
            type=type,
            rarity=rarity,
            quantity=quantity,
            value=value,
            description=description,
        )
        self.session.add(resource)
        self.session.flush()
        return resource

    def update_resource(self, resource_id: int, **changes: Any) -> Resource | None:
        return self._apply(self.get_resource(resource_id), changes)

    def remove_resource(self, resource_id: int) -> bool:
        resource = self.get_resource(resource_id)
        if resource is None:
            return False
        self.session.delete(resource)
        self.session.flush()
        return True

    def held_quantities(self, user_id: int) -> dict[str, int]:
        """Total quantity held per resource name, across rarities and types."""
        held: dict[str, int] = {}
        for resource in self.get_user_resources(user_id):
            held[resource.name] = held.get(resource.name, 0) + resource.quantity
        return held

    def consume_resource(self, user_id: int, name: str, quantity: int) -> None:
        """Remove ``quantity`` units of ``name`` from the user's stacks.

        Stacks are drained oldest first; an emptied stack is deleted.

        Raises:
            InsufficientQuantityError: If the user holds fewer than ``quantity``
                units; nothing is consumed in that case
        """
        stmt = (
            select(Resource)
            .where(Resource.user_id == user_id, Resource.name == name)
            .order_by(Resource.id)
            .with_for_update()
        )
        stacks = list(self._execute(stmt).scalars())
        held = sum(stack.quantity for stack in stacks)
        if held < quantity:
            raise InsufficientQuantityError(quantity, held, resource=name)

        remaining = quantity
        for stack in stacks:
            if remaining == 0:
                break
            taken = min(stack.quantity, remaining)
            remaining -= taken
            if taken == stack.quantity:
                self.session.delete(stack)
            else:
                stack.quantity -= taken
        self.session.flush()

    # --- guilds ----------------------------------------------------------------

    def get_guild(self, guild_id: int, *, for_update: bool = False) -> Guild | None:
        return self._get(Guild, guild_id, for_update=for_update)

    def get_guild_by_name(self, name: str) -> Guild | None:
        return self._execute(select(Guild).where(Guild.name == name)).scalar_one_or_none()

    def get_all_guilds(self) -> list[Guild]:
        return list(self._execute(select(Guild).order_by(Guild.id)).scalars())

    def create_guild(
        self, name: str, type: str, leader_id: str, **fields: Any  # noqa: A002
    ) -> Guild:
        guild = Guild(name=name, type=type, leader_id=leader_id, **fields)
        self.session.add(guild)
        self.session.flush()
        return guild

    def update_guild(self, guild_id: int, **changes: Any) -> Guild | None:
        return self._apply(self.get_guild(guild_id), changes)

    def get_guild_members(self, guild_id: int) -> list[User]:
        stmt = select(User).where(User.guild_id == guild_id).order_by(User.id)
        return list(self._execute(stmt).scalars())

    # --- alliances -------------------------------------------------------------

    def get_alliance(self, alliance_id: int) -> Alliance | None:
        return self._get(Alliance, alliance_id)

    def get_all_alliances(self) -> list[Alliance]:
        return list(self._execute(select(Alliance).order_by(Alliance.id)).scalars())

    def create_alliance(self, name: str, leader_id: int, **fields: Any) -> Alliance:
        alliance = Alliance(name=name, leader_id=leader_id, **fields)
        self.session.add(alliance)
        self.session.flush()
        return alliance

    def get_alliance_members(self, alliance_id: int) -> list[User]:
        stmt = select(User).where(User.alliance_id == alliance_id).order_by(User.id)
        return list(self._execute(stmt).scalars())

    # --- history ---------------------------------------------------------------

    def add_exploration(self, user_id: int, **fields: Any) -> Exploration:
        exploration = Exploration(user_id=user_id, **fields)
        self.session.add(exploration)
        self.session.flush()
        return exploration

    def get_user_explorations(self, user_id: int, limit: int = 10) -> list[Exploration]:
        stmt = (
            select(Exploration)
            .where(Exploration.user_id == user_id)
            .order_by(Exploration.timestamp.desc(), Exploration.id.desc())
            .limit(limit)
        )
        return list(self._execute(stmt).scalars())

    def add_combat_log(self, attacker_id: int, **fields: Any) -> CombatLog:
        log = CombatLog(attacker_id=attacker_id, **fields)
        self.session.add(log)
        self.session.flush()
        return log

    def get_user_combat_history(self, user_id: int, limit: int = 10) -> list[CombatLog]:
        stmt = (
            select(CombatLog)
            .where(or_(CombatLog.attacker_id == user_id, CombatLog.defender_id == user_id))
            .order_by(CombatLog.timestamp.desc(), CombatLog.id.desc())
            .limit(limit)
        )
        return list(self._execute(stmt).scalars())

    def add_market_transaction(self, **fields: Any) -> MarketTransaction:
        transaction = MarketTransaction(**fields)
        self.session.add(transaction)
        self.session.flush()
        return transaction

    def get_market_history(self, limit: int = 50) -> list[MarketTransaction]:
        stmt = (
            select(MarketTransaction)
            .order_by(MarketTransaction.timestamp.desc(), MarketTransaction.id.desc())
            .limit(limit)
        )
        return list(self._execute(stmt).scalars())

    # --- recipes ---------------------------------------------------------------

    def get_all_recipes(self) -> list[Recipe]:
        stmt = select(Recipe).order_by(Recipe.level, Recipe.name, Recipe.id)
        return list(self._execute(stmt).scalars())

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        return self._get(Recipe, recipe_id)

    def get_recipes_by_type(self, recipe_type: str) -> list[Recipe]:
        stmt = (
            select(Recipe)
            .where(Recipe.type == recipe_type)
            .order_by(Recipe.level, Recipe.name, Recipe.id)
        )
        return list(self._execute(stmt).scalars())

    def create_recipe(self, name: str, type: str, **fields: Any) -> Recipe:  # noqa: A002
        recipe = Recipe(name=name, type=type, **fields)
        self.session.add(recipe)
        self.session.flush()
        return recipe
