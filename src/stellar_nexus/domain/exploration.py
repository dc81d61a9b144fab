"""Exploration resolution rules."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from math import floor
from typing import Any

from stellar_nexus.utils.rng import check_success

from .enums import ExplorationType
from .models import Reward, ShipStats
from .rewards import calculate_exploration_rewards, salvage_reward
from .rules_config import (
    DEFAULT_RULES,
    EXPLORATION_BASE_EXPERIENCE,
    EXPLORATION_BASE_SUCCESS,
    EXPLORATION_SHIP_BONUS,
    ExplorationRules,
)


@dataclass(slots=True)
class ExplorationRoll:
    """Outcome of a single exploration attempt."""

    exploration_type: ExplorationType
    success: bool
    success_chance: float
    roll: float
    ship_bonus: float
    experience: int
    rewards: list[Reward] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": str(self.exploration_type),
            "success": self.success,
            "success_chance": self.success_chance,
            "roll": self.roll,
            "ship_bonus": self.ship_bonus,
            "experience": self.experience,
            "rewards": [reward.to_dict() for reward in self.rewards],
        }


def ship_bonus(ship: ShipStats, exploration_type: ExplorationType) -> float:
    """Success bonus contributed by the ship's relevant stat."""
    stat, coefficient = EXPLORATION_SHIP_BONUS[exploration_type]
    return getattr(ship, stat) * coefficient


def success_chance(
    exploration_type: ExplorationType,
    level: int,
    ship: ShipStats,
    rules: ExplorationRules = DEFAULT_RULES.exploration,
) -> float:
    base = EXPLORATION_BASE_SUCCESS[exploration_type]
    chance = base + ship_bonus(ship, exploration_type) + level * rules.level_bonus
    return min(rules.success_cap, chance)


def exploration_experience(
    exploration_type: ExplorationType,
    level: int,
    success: bool,
    rules: ExplorationRules = DEFAULT_RULES.exploration,
) -> int:
    multiplier = (
        rules.success_experience_multiplier if success else rules.failure_experience_multiplier
    )
    base = EXPLORATION_BASE_EXPERIENCE[exploration_type]
    return floor(base * multiplier + level * rules.level_experience_bonus)


def resolve_exploration(
    exploration_type: ExplorationType,
    level: int,
    ship: ShipStats,
    rng: random.Random,
    rules: ExplorationRules = DEFAULT_RULES.exploration,
) -> ExplorationRoll:
    """Roll an exploration attempt.

    One uniform draw decides success; successful attempts then roll the
    type-specific reward table, failures receive salvage credits.
    """
    chance = success_chance(exploration_type, level, ship, rules)
    check = check_success(rng, chance)
    success = check["success"]

    if success:
        rewards = calculate_exploration_rewards(exploration_type, level, ship.sensors, rng)
    else:
        rewards = [salvage_reward(rng, rules)]

    return ExplorationRoll(
        exploration_type=exploration_type,
        success=success,
        success_chance=chance,
        roll=check["roll"],
        ship_bonus=ship_bonus(ship, exploration_type),
        experience=exploration_experience(exploration_type, level, success, rules),
        rewards=rewards,
    )
