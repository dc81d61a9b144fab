"""Guild progression rules."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from math import floor
from typing import Any, Protocol, TypeVar

from .enums import ContributionType, MilestoneType
from .errors import InvalidRequestError
from .rules_config import DEFAULT_RULES, GuildRules


class RankableGuild(Protocol):
    level: int
    experience: int
    member_count: int


G = TypeVar("G", bound=RankableGuild)


@dataclass(frozen=True, slots=True)
class GuildMilestone:
    level: int
    type: MilestoneType
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "type": str(self.type), "value": self.value}


@dataclass(slots=True)
class Contribution:
    """Effect of one member contribution on their guild."""

    resource_type: ContributionType
    amount: int
    value: int
    guild_experience: int
    personal_experience: int
    previous_level: int
    new_level: int
    milestones: list[GuildMilestone] = field(default_factory=list)

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.previous_level


def guild_level(experience: int, rules: GuildRules = DEFAULT_RULES.guilds) -> int:
    return experience // rules.experience_per_level + 1


def milestones_between(
    previous_level: int, new_level: int, rules: GuildRules = DEFAULT_RULES.guilds
) -> list[GuildMilestone]:
    """Milestones unlocked by every level in ``(previous_level, new_level]``."""
    milestones: list[GuildMilestone] = []
    for level in range(previous_level + 1, new_level + 1):
        if level % rules.member_milestone_interval == 0:
            increase = rules.member_milestone_increase
            milestones.append(GuildMilestone(level, MilestoneType.MEMBER_INCREASE, increase))
        if level % rules.credit_milestone_interval == 0:
            payout = level * rules.credit_milestone_per_level
            milestones.append(GuildMilestone(level, MilestoneType.CREDITS, payout))
    return milestones


def evaluate_contribution(
    resource_type: str,
    amount: int,
    guild_experience: int,
    rules: GuildRules = DEFAULT_RULES.guilds,
) -> Contribution:
    """Compute what a contribution of ``amount`` ``resource_type`` is worth.

    Raises:
        InvalidRequestError: For unknown resource types or amounts below 1
    """
    try:
        kind = ContributionType(resource_type)
    except ValueError as exc:
        raise InvalidRequestError(
            f"cannot contribute {resource_type!r}; expected credits or nexium",
            details={"resource_type": resource_type},
        ) from exc
    if amount < 1:
        raise InvalidRequestError(
            f"contribution amount must be at least 1, got {amount}", details={"amount": amount}
        )

    value = amount if kind is ContributionType.CREDITS else amount * rules.nexium_contribution_value
    gained = value // rules.experience_divisor
    previous_level = guild_level(guild_experience, rules)
    new_level = guild_level(guild_experience + gained, rules)
    return Contribution(
        resource_type=kind,
        amount=amount,
        value=value,
        guild_experience=gained,
        personal_experience=floor(gained * rules.personal_experience_ratio),
        previous_level=previous_level,
        new_level=new_level,
        milestones=milestones_between(previous_level, new_level, rules),
    )


def guild_power(
    level: int, member_count: int, experience: int, rules: GuildRules = DEFAULT_RULES.guilds
) -> int:
    return level * rules.power_per_level + member_count * rules.power_per_member + experience


def rank_guilds(guilds: Sequence[G]) -> list[tuple[int, G]]:
    """``(rank, guild)`` pairs ordered by level then experience, both descending."""
    ordered = sorted(guilds, key=lambda g: (g.level, g.experience), reverse=True)
    return [(index + 1, guild) for index, guild in enumerate(ordered)]
