"""Game Engine: registration, fleet management, experience and rewards.

The engine is the only writer of a user's experience, level and currency
balances outside of market trades and guild contributions. The other
services grant experience and rewards through it.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Any, assert_never

from stellar_nexus.domain.enums import Rarity, RewardType, ShipType
from stellar_nexus.domain.errors import (
    AlreadyRegisteredError,
    FullHealthError,
    InsufficientCreditsError,
    InsufficientNexiumError,
    InvalidRequestError,
    MaxTierError,
    NotFoundError,
)
from stellar_nexus.domain.models import ExperienceResult, Reward, ShipTemplate
from stellar_nexus.domain.progression import (
    generate_ship_name,
    grant_experience,
    repair_cost,
    ship_template,
)
from stellar_nexus.domain.rewards import determine_rarity
from stellar_nexus.domain.rules_config import (
    DEFAULT_RULES,
    EXPLORATION_RARITY_THRESHOLDS,
    SHIP_BASE_PRICES,
    SHIP_TIERS,
    STARTER_RESOURCES,
    STARTER_SHIP_TYPE,
    RulesConfig,
)
from stellar_nexus.interfaces.storage import IGameStorage
from stellar_nexus.models import Resource, Ship, User, utc_now

from .results import RepairResult, UpgradeResult

logger = logging.getLogger(__name__)


def _ship_fields(template: ShipTemplate) -> dict[str, Any]:
    return {
        "variant": template.variant,
        "health": template.health,
        "max_health": template.health,
        "speed": template.speed,
        "cargo": template.cargo,
        "weapons": template.weapons,
        "sensors": template.sensors,
    }


class GameEngine:
    """Core player lifecycle operations.

    Every mutating method runs in one storage transaction and either applies
    all of its changes or raises a :class:`~stellar_nexus.domain.errors.GameError`
    before changing anything.
    """

    def __init__(
        self,
        storage: IGameStorage,
        rng: random.Random,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> None:
        self.storage = storage
        self.rng = rng
        self.rules = rules

    # --- lookups ---------------------------------------------------------------

    def get_user(self, user_id: int) -> User | None:
        return self.storage.get_user(user_id)

    def get_user_by_discord_id(self, discord_id: str) -> User | None:
        return self.storage.get_user_by_discord_id(discord_id)

    def get_user_ships(self, user_id: int) -> list[Ship]:
        return self.storage.get_user_ships(user_id)

    def get_user_resources(self, user_id: int) -> list[Resource]:
        return self.storage.get_user_resources(user_id)

    def require_user(self, user_id: int, *, for_update: bool = False) -> User:
        """Load a user or raise :class:`NotFoundError`."""
        user = self.storage.get_user(user_id, for_update=for_update)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def _require_owned_ship(self, user_id: int, ship_id: int) -> Ship:
        ship = self.storage.get_ship(ship_id, for_update=True)
        if ship is None or ship.user_id != user_id:
            raise NotFoundError("ship", ship_id)
        return ship

    def get_ship_catalog(self) -> dict[str, Any]:
        """Static ship tiers per archetype plus the purchase price of each hull."""
        return {
            str(ship_type): {
                "base_price": SHIP_BASE_PRICES.get(ship_type),
                "tiers": [
                    {
                        "tier": tier,
                        **_ship_fields(template),
                        "cost": template.cost,
                        "nexium_cost": template.nexium_cost,
                    }
                    for tier, template in enumerate(templates, start=1)
                ],
            }
            for ship_type, templates in SHIP_TIERS.items()
        }

    # --- registration ----------------------------------------------------------

    def register_user(self, discord_id: str, username: str) -> User:
        """Create a commander with a starter scout and the starter bundle.

        Args:
            discord_id: External identity; must not be registered yet
            username: Display name

        Returns:
            The new user, with the scout set as active ship

        Raises:
            AlreadyRegisteredError: If ``discord_id`` already has an account
        """
        progression = self.rules.progression
        with self.storage.transaction():
            if self.storage.get_user_by_discord_id(discord_id) is not None:
                raise AlreadyRegisteredError(
                    f"discord id {discord_id} is already registered",
                    details={"discord_id": discord_id},
                )

            user = self.storage.create_user(
                discord_id,
                username,
                credits=progression.starting_credits,
                nexium=progression.starting_nexium,
                level=1,
                experience=0,
            )
            template = ship_template(STARTER_SHIP_TYPE, 1, self.rules.ships)
            ship = self.storage.create_ship(
                user.id,
                name=generate_ship_name(template.variant, self.rng, self.rules.ships),
                type=str(STARTER_SHIP_TYPE),
                tier=1,
                is_active=False,
                **_ship_fields(template),
            )
            self.storage.set_active_ship(user.id, ship.id)

            for starter in STARTER_RESOURCES:
                self.storage.add_resource(
                    user.id,
                    starter.name,
                    str(starter.type),
                    quantity=starter.quantity,
                    value=starter.value,
                    rarity=str(starter.rarity),
                    description=starter.description,
                )

        logger.info(
            "Registered user id=%s discord_id=%s ship=%s", user.id, discord_id, ship.name
        )
        return user

    # --- fleet -----------------------------------------------------------------

    def upgrade_ship(self, user_id: int, ship_id: int) -> UpgradeResult:
        """Raise a ship one tier, paying the next tier's credit and nexium cost.

        Raises:
            NotFoundError: If the user or ship is missing, or the ship is not theirs
            MaxTierError: If the ship is already at the top tier
            InsufficientCreditsError: If the user cannot pay the credit cost
            InsufficientNexiumError: If the user cannot pay the nexium cost
        """
        with self.storage.transaction():
            user = self.require_user(user_id, for_update=True)
            ship = self._require_owned_ship(user_id, ship_id)
            if ship.tier >= self.rules.ships.max_tier:
                raise MaxTierError(
                    f"{ship.name} is already at maximum tier",
                    details={"ship_id": ship.id, "tier": ship.tier},
                )

            template = ship_template(ShipType(ship.type), ship.tier + 1, self.rules.ships)
            if user.credits < template.cost:
                raise InsufficientCreditsError(template.cost, user.credits)
            if user.nexium < template.nexium_cost:
                raise InsufficientNexiumError(template.nexium_cost, user.nexium)

            user.credits -= template.cost
            user.nexium -= template.nexium_cost
            user.last_active = utc_now()
            ship.tier += 1
            for name, value in _ship_fields(template).items():
                setattr(ship, name, value)

        logger.info(
            "Upgraded ship id=%s user=%s to tier %d (%s)",
            ship.id,
            user_id,
            ship.tier,
            ship.variant,
        )
        return UpgradeResult(ship, template.cost, template.nexium_cost)

    def purchase_ship(self, user_id: int, ship_type: str) -> Ship:
        """Buy a new, inactive Tier-1 hull of ``ship_type``.

        Raises:
            InvalidRequestError: For unknown archetypes and scouts
            NotFoundError: If the user is missing
            InsufficientCreditsError: If the user cannot pay the base price
        """
        try:
            kind = ShipType(ship_type)
        except ValueError as exc:
            raise InvalidRequestError(
                f"unknown ship type {ship_type!r}", details={"ship_type": ship_type}
            ) from exc
        price = SHIP_BASE_PRICES.get(kind)
        if price is None:
            raise InvalidRequestError(
                f"{kind} ships cannot be purchased", details={"ship_type": ship_type}
            )

        with self.storage.transaction():
            user = self.require_user(user_id, for_update=True)
            if user.credits < price:
                raise InsufficientCreditsError(price, user.credits)

            template = ship_template(kind, 1, self.rules.ships)
            user.credits -= price
            user.last_active = utc_now()
            ship = self.storage.create_ship(
                user.id,
                name=generate_ship_name(template.variant, self.rng, self.rules.ships),
                type=str(kind),
                tier=1,
                is_active=False,
                **_ship_fields(template),
            )

        logger.info(
            "User %s purchased %s ship id=%s for %d credits", user_id, kind, ship.id, price
        )
        return ship

    def repair_ship(self, user_id: int, ship_id: int) -> RepairResult:
        """Restore a damaged ship to full health for 10 credits per point.

        Raises:
            NotFoundError: If the user or ship is missing, or the ship is not theirs
            FullHealthError: If the ship is undamaged
            InsufficientCreditsError: If the user cannot pay
        """
        with self.storage.transaction():
            user = self.require_user(user_id, for_update=True)
            ship = self._require_owned_ship(user_id, ship_id)
            if ship.health >= ship.max_health:
                raise FullHealthError(
                    f"{ship.name} is already at full health", details={"ship_id": ship.id}
                )

            cost = repair_cost(ship.health, ship.max_health, self.rules.ships)
            if user.credits < cost:
                raise InsufficientCreditsError(cost, user.credits)

            user.credits -= cost
            user.last_active = utc_now()
            ship.health = ship.max_health

        logger.info("Repaired ship id=%s user=%s cost=%d", ship.id, user_id, cost)
        return RepairResult(ship, cost)

    def activate_ship(self, user_id: int, ship_id: int) -> Ship:
        """Make ``ship_id`` the user's active ship and deactivate the rest.

        Raises:
            NotFoundError: If the user or ship is missing, or the ship is not theirs
        """
        with self.storage.transaction():
            self.require_user(user_id)
            ship = self.storage.set_active_ship(user_id, ship_id)
            if ship is None:
                raise NotFoundError("ship", ship_id)

        logger.info("User %s activated ship id=%s", user_id, ship_id)
        return ship

    # --- progression -----------------------------------------------------------

    def gain_experience(self, user_id: int, amount: int) -> ExperienceResult:
        """Add experience and recompute the level.

        Returns:
            ExperienceResult with the rewards for every level crossed; the
            caller applies them

        Raises:
            NotFoundError: If the user is missing
        """
        with self.storage.transaction():
            user = self.require_user(user_id, for_update=True)
            new_experience, result = grant_experience(
                user.experience, amount, self.rng, self.rules.progression
            )
            user.experience = new_experience
            user.level = result.new_level
            user.last_active = utc_now()

        if result.leveled_up:
            logger.info(
                "User %s reached level %d (from %d)",
                user_id,
                result.new_level,
                result.previous_level,
            )
        return result

    def apply_rewards(
        self,
        user: User,
        rewards: Sequence[Reward],
        *,
        rarity_thresholds: tuple[tuple[int, Rarity], ...] | None = None,
    ) -> None:
        """Credit every reward to ``user``.

        Credits add ``value`` and nexium adds ``quantity``. Experience is
        granted through :meth:`gain_experience` and its level-up rewards
        are applied too. Item rewards stack an inventory resource whose
        rarity is classified from the per-unit value; artifacts also count
        towards the user's artifact total.
        """
        thresholds = rarity_thresholds or EXPLORATION_RARITY_THRESHOLDS
        with self.storage.transaction():
            for reward in rewards:
                match reward.kind:
                    case RewardType.CREDITS:
                        user.credits += reward.value
                    case RewardType.NEXIUM:
                        user.nexium += reward.quantity
                    case RewardType.EXPERIENCE:
                        result = self.gain_experience(user.id, reward.value)
                        self.apply_rewards(user, result.rewards)
                    case (
                        RewardType.MATERIAL
                        | RewardType.ARTIFACT
                        | RewardType.COMPONENT
                        | RewardType.UPGRADE
                    ):
                        self._stack_item(user, reward, thresholds)
                    case _:
                        assert_never(reward.kind)

    def _stack_item(
        self, user: User, reward: Reward, thresholds: tuple[tuple[int, Rarity], ...]
    ) -> None:
        if reward.quantity <= 0:
            return
        per_unit = reward.value // reward.quantity
        rarity = determine_rarity(per_unit, thresholds)
        self.storage.add_resource(
            user.id,
            reward.name,
            str(reward.kind),
            quantity=reward.quantity,
            value=per_unit,
            rarity=str(rarity),
        )
        if reward.kind is RewardType.ARTIFACT:
            user.artifact_count += 1
