"""Persistence gateway protocol.

This module defines the contract the game services rely on to read and
write persistent game state.
"""

from contextlib import AbstractContextManager
from typing import Any, Protocol

from sqlalchemy.orm import Session

from stellar_nexus.models import (
    Alliance,
    CombatLog,
    Exploration,
    Guild,
    MarketTransaction,
    Recipe,
    Resource,
    Ship,
    User,
)


class IGameStorage(Protocol):
    """Protocol for the persistence gateway.

    Lookups return ``None`` for missing rows. Writes are visible to later
    reads in the same transaction and become durable when the outermost
    :meth:`transaction` block exits cleanly.
    """

    def transaction(self) -> AbstractContextManager[Session]:
        """Open (or join) a unit of work that commits or rolls back as a whole."""
        ...

    # users
    def get_user(self, user_id: int, *, for_update: bool = False) -> User | None: ...
    def get_user_by_discord_id(self, discord_id: str) -> User | None: ...
    def create_user(self, discord_id: str, username: str, **fields: Any) -> User: ...
    def update_user(self, user_id: int, **changes: Any) -> User | None: ...

    # ships
    def get_ship(self, ship_id: int, *, for_update: bool = False) -> Ship | None: ...
    def get_user_ships(self, user_id: int) -> list[Ship]: ...
    def get_active_ship(self, user_id: int, *, for_update: bool = False) -> Ship | None: ...
    def create_ship(self, user_id: int, **fields: Any) -> Ship: ...
    def update_ship(self, ship_id: int, **changes: Any) -> Ship | None: ...

    def set_active_ship(self, user_id: int, ship_id: int) -> Ship | None:
        """Atomically make ``ship_id`` the user's only active ship."""
        ...

    # resources
    def get_user_resources(self, user_id: int) -> list[Resource]: ...
    def get_resource(self, resource_id: int, *, for_update: bool = False) -> Resource | None: ...

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
        """Stack units onto the user's ``(name, type, rarity)`` resource."""
        ...

    def update_resource(self, resource_id: int, **changes: Any) -> Resource | None: ...
    def remove_resource(self, resource_id: int) -> bool: ...
    def held_quantities(self, user_id: int) -> dict[str, int]: ...

    def consume_resource(self, user_id: int, name: str, quantity: int) -> None:
        """Remove units by name, deleting emptied stacks; all or nothing."""
        ...

    # guilds
    def get_guild(self, guild_id: int, *, for_update: bool = False) -> Guild | None: ...
    def get_guild_by_name(self, name: str) -> Guild | None: ...
    def get_all_guilds(self) -> list[Guild]: ...
    def create_guild(
        self, name: str, type: str, leader_id: str, **fields: Any  # noqa: A002
    ) -> Guild: ...
    def update_guild(self, guild_id: int, **changes: Any) -> Guild | None: ...
    def get_guild_members(self, guild_id: int) -> list[User]: ...

    # alliances
    def get_alliance(self, alliance_id: int) -> Alliance | None: ...
    def get_all_alliances(self) -> list[Alliance]: ...
    def create_alliance(self, name: str, leader_id: int, **fields: Any) -> Alliance: ...
    def get_alliance_members(self, alliance_id: int) -> list[User]: ...

    # history
    def add_exploration(self, user_id: int, **fields: Any) -> Exploration: ...
    def get_user_explorations(self, user_id: int, limit: int = 10) -> list[Exploration]: ...
    def add_combat_log(self, attacker_id: int, **fields: Any) -> CombatLog: ...
    def get_user_combat_history(self, user_id: int, limit: int = 10) -> list[CombatLog]: ...
    def add_market_transaction(self, **fields: Any) -> MarketTransaction: ...
    def get_market_history(self, limit: int = 50) -> list[MarketTransaction]: ...

    # recipes
    def get_all_recipes(self) -> list[Recipe]: ...
    def get_recipe(self, recipe_id: int) -> Recipe | None: ...
    def get_recipes_by_type(self, recipe_type: str) -> list[Recipe]: ...
    def create_recipe(self, name: str, type: str, **fields: Any) -> Recipe: ...  # noqa: A002
