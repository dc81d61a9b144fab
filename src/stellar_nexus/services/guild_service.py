"""Guild service: membership, contributions, rankings and alliances."""

from __future__ import annotations

import logging
from typing import Any

from stellar_nexus.domain.enums import ContributionType, MilestoneType
from stellar_nexus.domain.errors import (
    AlreadyInAllianceError,
    AlreadyInGuildError,
    GuildFullError,
    InsufficientCreditsError,
    InsufficientNexiumError,
    InvalidRequestError,
    NotFoundError,
    NotInGuildError,
    StateConflictError,
)
from stellar_nexus.domain.guilds import evaluate_contribution, guild_power, rank_guilds
from stellar_nexus.domain.rules_config import DEFAULT_GUILDS, DEFAULT_RULES, RulesConfig
from stellar_nexus.interfaces.engine import IGameEngine
from stellar_nexus.interfaces.storage import IGameStorage
from stellar_nexus.models import Alliance, Guild, User, utc_now

from .results import ContributionOutcome, GuildRanking, JoinGuildResult

logger = logging.getLogger(__name__)


class GuildService:
    """Guild and alliance operations.

    Guilds are NPC-led and seeded at start-up. Players join one guild at a
    time and level it up by contributing currency; milestones reached on
    the way raise the guild's capacity or pay every member.
    """

    def __init__(
        self,
        storage: IGameStorage,
        engine: IGameEngine,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> None:
        self.storage = storage
        self.engine = engine
        self.rules = rules

    def _require_user(self, user_id: int) -> User:
        user = self.storage.get_user(user_id, for_update=True)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def initialize_default_guilds(self) -> int:
        """Create the four NPC guilds unless any guild already exists.

        Returns:
            Number of guilds created
        """
        created = 0
        with self.storage.transaction():
            if self.storage.get_all_guilds():
                return 0
            for seed in DEFAULT_GUILDS:
                self.storage.create_guild(
                    seed.name,
                    str(seed.type),
                    seed.leader_id,
                    description=seed.description,
                    level=1,
                    experience=0,
                    member_count=1,
                    max_members=self.rules.guilds.default_max_members,
                )
                created += 1
        if created:
            logger.info("Seeded %d default guilds", created)
        return created

    # --- membership ------------------------------------------------------------

    def join_guild(self, user_id: int, guild_id: int) -> JoinGuildResult:
        """Add the user to a guild.

        Rejections (already in a guild, unknown guild, guild full) are
        reported in the result and change nothing.

        Raises:
            NotFoundError: If the user is missing
        """
        with self.storage.transaction():
            user = self._require_user(user_id)
            if user.guild_id is not None:
                rejection = AlreadyInGuildError(
                    "you are already in a guild", details={"guild_id": user.guild_id}
                )
                return self._reject(user_id, rejection)

            guild = self.storage.get_guild(guild_id, for_update=True)
            if guild is None:
                return self._reject(user_id, NotFoundError("guild", guild_id))
            if guild.member_count >= guild.max_members:
                rejection = GuildFullError(
                    f"{guild.name} is full",
                    details={"guild_id": guild_id, "max_members": guild.max_members},
                )
                return self._reject(user_id, rejection)

            user.guild_id = guild.id
            user.last_active = utc_now()
            guild.member_count += 1

        logger.info("User %s joined guild %s", user_id, guild.name)
        return JoinGuildResult(success=True, message=f"Welcome to {guild.name}!", guild=guild)

    @staticmethod
    def _reject(user_id: int, error: StateConflictError | NotFoundError) -> JoinGuildResult:
        logger.info("User %s could not join guild: %s", user_id, error)
        return JoinGuildResult.rejected(error)

    def leave_guild(self, user_id: int) -> Guild:
        """Remove the user from their guild.

        Returns:
            The guild that was left

        Raises:
            NotFoundError: If the user is missing
            NotInGuildError: If the user is not in a guild
        """
        with self.storage.transaction():
            user = self._require_user(user_id)
            if user.guild_id is None:
                raise NotInGuildError("you are not in a guild", details={"user_id": user_id})
            guild = self.storage.get_guild(user.guild_id, for_update=True)
            if guild is None:
                raise NotFoundError("guild", user.guild_id)

            # the NPC leader always counts as a member
            guild.member_count = max(1, guild.member_count - 1)
            user.guild_id = None
            user.last_active = utc_now()

        logger.info("User %s left guild %s", user_id, guild.name)
        return guild

    def contribute(self, user_id: int, resource_type: str, amount: int) -> ContributionOutcome:
        """Donate credits or nexium to the user's guild.

        The guild gains experience and levels; milestones for every level
        crossed are applied. The contributor gains personal experience
        through the game engine.

        Raises:
            NotFoundError: If the user is missing
            NotInGuildError: If the user is not in a guild
            InvalidRequestError: For unknown currencies or amounts below 1
            InsufficientCreditsError: If the user cannot cover a credit donation
            InsufficientNexiumError: If the user cannot cover a nexium donation
        """
        with self.storage.transaction():
            user = self._require_user(user_id)
            if user.guild_id is None:
                raise NotInGuildError("you are not in a guild", details={"user_id": user_id})
            guild = self.storage.get_guild(user.guild_id, for_update=True)
            if guild is None:
                raise NotFoundError("guild", user.guild_id)

            contribution = evaluate_contribution(
                resource_type, amount, guild.experience, self.rules.guilds
            )
            if contribution.resource_type is ContributionType.CREDITS:
                if user.credits < amount:
                    raise InsufficientCreditsError(amount, user.credits)
                user.credits -= amount
            else:
                if user.nexium < amount:
                    raise InsufficientNexiumError(amount, user.nexium)
                user.nexium -= amount

            guild.experience += contribution.guild_experience
            guild.level = contribution.new_level
            for milestone in contribution.milestones:
                match milestone.type:
                    case MilestoneType.MEMBER_INCREASE:
                        guild.max_members += milestone.value
                    case MilestoneType.CREDITS:
                        for member in self.storage.get_guild_members(guild.id):
                            member.credits += milestone.value
                logger.info(
                    "Guild %s reached milestone level=%d type=%s value=%d",
                    guild.name,
                    milestone.level,
                    milestone.type,
                    milestone.value,
                )

            experience = None
            if contribution.personal_experience > 0:
                experience = self.engine.gain_experience(user_id, contribution.personal_experience)
                self.engine.apply_rewards(user, experience.rewards)
            user.last_active = utc_now()

        logger.info(
            "User %s contributed %d %s to guild %s (+%d guild xp, level %d)",
            user_id,
            amount,
            contribution.resource_type,
            guild.name,
            contribution.guild_experience,
            guild.level,
        )
        return ContributionOutcome(contribution, guild, experience)

    # --- reads -----------------------------------------------------------------

    def get_guild_power(self, guild: Guild) -> int:
        return guild_power(guild.level, guild.member_count, guild.experience, self.rules.guilds)

    def get_guild_rankings(self) -> list[GuildRanking]:
        """Guilds ordered by level, then experience, highest first."""
        return [
            GuildRanking(rank, guild, self.get_guild_power(guild))
            for rank, guild in rank_guilds(self.storage.get_all_guilds())
        ]

    def get_guild_vs_guild_data(self) -> list[dict[str, Any]]:
        return [
            {
                "id": ranking.guild.id,
                "name": ranking.guild.name,
                "type": ranking.guild.type,
                "level": ranking.guild.level,
                "member_count": ranking.guild.member_count,
                "rank": ranking.rank,
                "power": ranking.power,
            }
            for ranking in self.get_guild_rankings()
        ]

    def get_guild_members(self, guild_id: int) -> list[User]:
        return self.storage.get_guild_members(guild_id)

    def get_all_guilds(self) -> list[Guild]:
        return self.storage.get_all_guilds()

    # --- alliances -------------------------------------------------------------

    def create_alliance(
        self, user_id: int, name: str, description: str | None = None
    ) -> Alliance:
        """Found an alliance led by the user.

        The alliance's fleet power is the combined power of the founder's ships.

        Raises:
            NotFoundError: If the user is missing
            InvalidRequestError: If the name is blank
            AlreadyInAllianceError: If the user already belongs to an alliance
            StateConflictError: If the name is taken
        """
        name = name.strip()
        if not name:
            raise InvalidRequestError("alliance name must not be blank")

        with self.storage.transaction():
            user = self._require_user(user_id)
            if user.alliance_id is not None:
                raise AlreadyInAllianceError(
                    "you are already in an alliance", details={"alliance_id": user.alliance_id}
                )
            if any(existing.name == name for existing in self.storage.get_all_alliances()):
                raise StateConflictError(
                    f"alliance {name!r} already exists",
                    details={"name": name},
                    code="ALLIANCE_NAME_TAKEN",
                )

            fleet_power = sum(ship.stats.power for ship in self.storage.get_user_ships(user_id))
            alliance = self.storage.create_alliance(
                name, user_id, description=description, fleet_power=fleet_power
            )
            user.alliance_id = alliance.id
            user.last_active = utc_now()

        logger.info("User %s founded alliance %s (fleet power %d)", user_id, name, fleet_power)
        return alliance

    def get_all_alliances(self) -> list[Alliance]:
        return self.storage.get_all_alliances()

    def get_alliance_members(self, alliance_id: int) -> list[User]:
        return self.storage.get_alliance_members(alliance_id)
