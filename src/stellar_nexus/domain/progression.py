"""Experience, level and ship progression rules."""

from __future__ import annotations

import random
import string

from .enums import ShipType
from .models import ExperienceResult, ShipTemplate
from .rewards import calculate_level_up_rewards
from .rules_config import DEFAULT_RULES, SHIP_TIERS, ProgressionRules, ShipRules

_NAME_ALPHABET = string.digits + string.ascii_lowercase


def level_for_experience(
    experience: int, rules: ProgressionRules = DEFAULT_RULES.progression
) -> int:
    """Level implied by an experience total."""
    if experience < 0:
        raise ValueError(f"experience must be non-negative, got {experience}")
    return experience // rules.experience_per_level + 1


def grant_experience(
    current_experience: int,
    amount: int,
    rng: random.Random,
    rules: ProgressionRules = DEFAULT_RULES.progression,
) -> tuple[int, ExperienceResult]:
    """Add ``amount`` experience and collect level-up rewards.

    Rewards are rolled for every level crossed, so a large grant that skips
    levels still pays each one.

    Returns:
        ``(new_experience_total, result)``
    """
    if amount < 0:
        raise ValueError(f"experience amount must be non-negative, got {amount}")

    previous_level = level_for_experience(current_experience, rules)
    new_experience = current_experience + amount
    new_level = level_for_experience(new_experience, rules)

    result = ExperienceResult(
        experience_gained=amount,
        previous_level=previous_level,
        new_level=new_level,
    )
    for level in range(previous_level + 1, new_level + 1):
        result.rewards.extend(calculate_level_up_rewards(level, rng, rules))
    return new_experience, result


def ship_template(
    ship_type: ShipType, tier: int, rules: ShipRules = DEFAULT_RULES.ships
) -> ShipTemplate:
    """Stats and price for ``(ship_type, tier)``."""
    if not rules.min_tier <= tier <= rules.max_tier:
        raise ValueError(f"tier must be between {rules.min_tier} and {rules.max_tier}, got {tier}")
    return SHIP_TIERS[ship_type][tier - 1]


def generate_ship_name(
    variant: str, rng: random.Random, rules: ShipRules = DEFAULT_RULES.ships
) -> str:
    """``<variant>-<4 random base-36 characters>``."""
    suffix = "".join(rng.choice(_NAME_ALPHABET) for _ in range(rules.name_suffix_length))
    return f"{variant}-{suffix}"


def repair_cost(health: int, max_health: int, rules: ShipRules = DEFAULT_RULES.ships) -> int:
    """Credits needed to restore a ship to full health."""
    return max(0, max_health - health) * rules.repair_cost_per_point
