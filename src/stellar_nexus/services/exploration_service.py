"""Exploration service: launch explorations and read their history."""

from __future__ import annotations

import logging
import random

from stellar_nexus.domain.enums import ExplorationType
from stellar_nexus.domain.errors import InvalidRequestError, NoActiveShipError, NotFoundError
from stellar_nexus.domain.exploration import resolve_exploration
from stellar_nexus.domain.rules_config import DEFAULT_RULES, RulesConfig
from stellar_nexus.generators.content import ContentGenerator, SectorSummary
from stellar_nexus.interfaces.engine import IGameEngine
from stellar_nexus.interfaces.storage import IGameStorage
from stellar_nexus.models import Exploration, utc_now

from .results import ExplorationOutcome

logger = logging.getLogger(__name__)

AUTO_SECTOR = "auto"


class ExplorationService:
    """Resolve explorations with the user's active ship.

    Sector data comes from the content generator; success, rewards and
    experience come from the exploration rules and are granted through the
    game engine.
    """

    def __init__(
        self,
        storage: IGameStorage,
        engine: IGameEngine,
        content: ContentGenerator,
        rng: random.Random,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> None:
        self.storage = storage
        self.engine = engine
        self.content = content
        self.rng = rng
        self.rules = rules

    def explore(
        self, user_id: int, exploration_type: str, sector: str = AUTO_SECTOR
    ) -> ExplorationOutcome:
        """Launch one exploration.

        Args:
            user_id: The exploring user
            exploration_type: exploration, hunting, artifact_search or fishing
            sector: Target sector name, or ``"auto"`` for a generated one

        Returns:
            ExplorationOutcome with the persisted row id, the sector, the roll
            and the experience result

        Raises:
            InvalidRequestError: For unknown exploration types
            NotFoundError: If the user is missing
            NoActiveShipError: If the user has no active ship
        """
        try:
            kind = ExplorationType(exploration_type)
        except ValueError as exc:
            raise InvalidRequestError(
                f"unknown exploration type {exploration_type!r}",
                details={"exploration_type": exploration_type},
            ) from exc

        with self.storage.transaction():
            user = self.storage.get_user(user_id, for_update=True)
            if user is None:
                raise NotFoundError("user", user_id)
            ship = self.storage.get_active_ship(user_id)
            if ship is None:
                raise NoActiveShipError(user_id)

            sector_name = (
                self.content.generate_sector_name() if sector == AUTO_SECTOR else sector
            )
            sector_data = self.content.generate_sector_data(sector_name)

            roll = resolve_exploration(
                kind, user.level, ship.stats, self.rng, self.rules.exploration
            )
            self.engine.apply_rewards(user, roll.rewards)
            experience = self.engine.gain_experience(user_id, roll.experience)
            self.engine.apply_rewards(user, experience.rewards)

            user.exploration_count += 1
            user.last_active = utc_now()

            record = self.storage.add_exploration(
                user_id,
                ship_id=ship.id,
                sector=sector_name,
                type=str(kind),
                success=roll.success,
                experience_gained=roll.experience,
                rewards=[reward.to_dict() for reward in roll.rewards],
                details={
                    "ship_bonus": roll.ship_bonus,
                    "success_chance": roll.success_chance,
                    "roll": roll.roll,
                    "sector": sector_data.to_dict(),
                },
            )

        logger.info(
            "User %s explored %s (%s) success=%s rewards=%d",
            user_id,
            sector_name,
            kind,
            roll.success,
            len(roll.rewards),
        )
        return ExplorationOutcome(record.id, sector_data, roll, experience)

    def get_exploration_history(self, user_id: int, limit: int = 10) -> list[Exploration]:
        """Most recent explorations first."""
        return self.storage.get_user_explorations(user_id, limit)

    def get_available_sectors(self, user_level: int) -> list[SectorSummary]:
        return self.content.generate_available_sectors(user_level)
