"""Reward Calculator: pure reward tables for every reward-granting action.

All functions take an injected ``random.Random`` so that reward rolls replay
exactly under a fixed seed. Credit rewards carry their amount in ``value``;
nexium and item rewards carry ``quantity`` and the total ``value`` of the
stack.
"""

from __future__ import annotations

import random
from math import floor

from stellar_nexus.utils.rng import random_choice, random_float, random_int

from .enums import ExplorationType, Rarity, RewardType
from .models import Reward
from .rules_config import DEFAULT_RULES, ExplorationRules, ProgressionRules

EXPLORATION_MATERIALS = ("Iron Ore", "Silicon", "Carbon Fiber", "Aluminum")
EXPLORATION_ARTIFACTS = ("Energy Crystal", "Rare Metals", "Quantum Fragment")
HUNTING_MATERIALS = ("Organic Compounds", "Protein Synthesis", "Biomass", "Genetic Samples")
ANCIENT_ARTIFACTS = (
    "Ancient Data Core",
    "Alien Technology Fragment",
    "Quantum Artifact",
    "Temporal Resonator",
    "Dimensional Key",
    "Psionic Crystal",
)
FISHING_CATCHES = (
    "Space Plankton",
    "Quantum Fish",
    "Void Eel",
    "Stellar Salmon",
    "Nebula Crab",
    "Cosmic Shrimp",
    "Dark Matter Whale",
)
COMBAT_MATERIALS = ("Scrap Metal", "Damaged Electronics", "Weapon Parts", "Armor Fragments")
QUEST_COMPONENTS = ("Advanced Targeting System", "Quantum Engine", "Neural Interface")

RARITY_PRICE_MULTIPLIERS = {
    Rarity.COMMON: 1.0,
    Rarity.UNCOMMON: 1.5,
    Rarity.RARE: 2.5,
    Rarity.EPIC: 4.0,
    Rarity.LEGENDARY: 6.5,
}

# level -> milestone item granted on reaching it
LEVEL_MILESTONE_REWARDS: dict[int, Reward] = {
    10: Reward(RewardType.COMPONENT, "Advanced Navigation System", 1, 500),
    20: Reward(RewardType.UPGRADE, "Elite Pilot License", 1, 1000),
    50: Reward(RewardType.ARTIFACT, "Commander's Insignia", 1, 5000),
}


def determine_rarity(value: int, thresholds: tuple[tuple[int, Rarity], ...]) -> Rarity:
    """Classify an item value against ``(upper_bound, rarity)`` thresholds."""
    for upper_bound, rarity in thresholds:
        if value < upper_bound:
            return rarity
    return Rarity.LEGENDARY


def calculate_exploration_rewards(
    exploration_type: ExplorationType,
    level: int,
    sensor_power: int,
    rng: random.Random,
) -> list[Reward]:
    """Rewards for a successful exploration of ``exploration_type``.

    Args:
        exploration_type: Kind of exploration that succeeded
        level: Player level
        sensor_power: Sensors of the ship used
        rng: Random source

    Returns:
        List of rewards, guaranteed reward first
    """
    level_mult = 1 + (level - 1) * 0.1
    sensor_mult = 1 + (sensor_power - 50) * 0.005
    total_mult = level_mult * sensor_mult

    match exploration_type:
        case ExplorationType.EXPLORATION:
            return _sector_survey(level_mult, sensor_mult, rng)
        case ExplorationType.HUNTING:
            return _hunt(level_mult, rng)
        case ExplorationType.ARTIFACT_SEARCH:
            return _artifact_dig(level_mult, total_mult, rng)
        case ExplorationType.FISHING:
            return _fishing_haul(level_mult, rng)
    raise ValueError(f"unknown exploration type: {exploration_type!r}")


def _sector_survey(level_mult: float, sensor_mult: float, rng: random.Random) -> list[Reward]:
    total_mult = level_mult * sensor_mult
    rewards = [
        Reward(
            RewardType.CREDITS,
            "Exploration Data",
            value=floor(random_float(rng, 30, 100) * total_mult),
        )
    ]
    material = random_choice(rng, EXPLORATION_MATERIALS)
    quantity = floor(random_float(rng, 2, 6) * level_mult)
    rewards.append(Reward(RewardType.MATERIAL, material, quantity, quantity * 5))

    if rng.random() < 0.3 * sensor_mult:
        artifact = random_choice(rng, EXPLORATION_ARTIFACTS)
        rewards.append(Reward(RewardType.ARTIFACT, artifact, 1, floor(100 * total_mult)))
    return rewards


def _hunt(level_mult: float, rng: random.Random) -> list[Reward]:
    rewards = [
        Reward(
            RewardType.CREDITS,
            "Bounty Payment",
            value=floor(random_float(rng, 40, 120) * level_mult),
        )
    ]
    material = random_choice(rng, HUNTING_MATERIALS)
    quantity = floor(random_float(rng, 1, 4) * level_mult)
    rewards.append(Reward(RewardType.MATERIAL, material, quantity, quantity * 15))

    if rng.random() < 0.2:
        rewards.append(Reward(RewardType.ARTIFACT, "Rare Trophy", 1, floor(200 * level_mult)))
    return rewards


def _artifact_dig(level_mult: float, total_mult: float, rng: random.Random) -> list[Reward]:
    if rng.random() < 0.6:
        artifact = random_choice(rng, ANCIENT_ARTIFACTS)
        value = floor(random_float(rng, 150, 500) * total_mult)
        return [Reward(RewardType.ARTIFACT, artifact, 1, value)]
    return [
        Reward(
            RewardType.CREDITS,
            "Archaeological Survey Fee",
            value=floor(random_float(rng, 25, 75) * level_mult),
        )
    ]


def _fishing_haul(level_mult: float, rng: random.Random) -> list[Reward]:
    catch = random_choice(rng, FISHING_CATCHES)
    quantity = floor(random_float(rng, 1, 3) * level_mult)
    unit_value = floor(random_float(rng, 20, 50) * level_mult)
    return [
        Reward(RewardType.MATERIAL, catch, quantity, unit_value * quantity),
        Reward(
            RewardType.CREDITS,
            "Fishing License Fee",
            value=floor(random_float(rng, 15, 40) * level_mult),
        ),
    ]


def salvage_reward(
    rng: random.Random, rules: ExplorationRules = DEFAULT_RULES.exploration
) -> Reward:
    """Consolation credits for a failed exploration."""
    return Reward(
        RewardType.CREDITS,
        "Salvage",
        value=random_int(rng, rules.salvage_min, rules.salvage_max),
    )


def calculate_combat_rewards(difficulty: int, level: int, rng: random.Random) -> list[Reward]:
    """Rewards for winning a PvE fight against an enemy of ``difficulty``."""
    difficulty_mult = 1 + difficulty * 0.2
    level_mult = 1 + (level - 1) * 0.05
    total_mult = difficulty_mult * level_mult

    rewards = [
        Reward(
            RewardType.CREDITS,
            "Combat Pay",
            value=floor(random_float(rng, 50, 150) * total_mult),
        )
    ]

    if rng.random() < min(0.8, 0.3 + difficulty * 0.1):
        for _ in range(random_int(rng, 1, 2)):
            material = random_choice(rng, COMBAT_MATERIALS)
            quantity = floor(random_float(rng, 1, 3) * total_mult)
            rewards.append(Reward(RewardType.MATERIAL, material, quantity, quantity * 8))

    if rng.random() < 0.2:
        quantity = floor(random_float(rng, 1, 4) * difficulty_mult)
        rewards.append(Reward(RewardType.NEXIUM, "Nexium", quantity, quantity * 100))
    return rewards


def calculate_level_up_rewards(
    level: int,
    rng: random.Random,
    rules: ProgressionRules = DEFAULT_RULES.progression,
) -> list[Reward]:
    """Rewards for reaching ``level``."""
    credits = level * rules.level_up_credits_per_level + floor(
        rng.random() * level * rules.level_up_credit_bonus_per_level
    )
    rewards = [Reward(RewardType.CREDITS, "Level Up Bonus", value=credits)]

    if level % rules.nexium_level_interval == 0:
        nexium = level // rules.nexium_level_interval + random_int(rng, 0, rules.nexium_bonus_max)
        rewards.append(Reward(RewardType.NEXIUM, "Level Up Nexium", nexium))

    milestone = LEVEL_MILESTONE_REWARDS.get(level)
    if milestone is not None:
        rewards.append(milestone)
    return rewards


def calculate_quest_rewards(
    difficulty: int, length: int, level: int, rng: random.Random
) -> list[Reward]:
    """Rewards for a generated quest of ``difficulty`` spanning ``length`` stages."""
    base_mult = difficulty * length * (1 + level * 0.05)
    rewards = [
        Reward(
            RewardType.CREDITS,
            "Quest Payment",
            value=floor(random_float(rng, 200, 500) * base_mult),
        ),
        Reward(
            RewardType.EXPERIENCE,
            "Quest Experience",
            value=floor(random_float(rng, 100, 300) * base_mult),
        ),
    ]

    if difficulty >= 3:
        if rng.random() < 0.4:
            component = random_choice(rng, QUEST_COMPONENTS)
            rewards.append(Reward(RewardType.COMPONENT, component, 1, floor(300 * base_mult)))
        if rng.random() < 0.3:
            nexium = floor(random_float(rng, 2, 6) * base_mult)
            rewards.append(Reward(RewardType.NEXIUM, "Quest Nexium", nexium))
    return rewards


def calculate_market_price(base_price: int, rarity: Rarity, rng: random.Random) -> int:
    """Rarity-adjusted price with a +/-20% haggle."""
    return floor(base_price * RARITY_PRICE_MULTIPLIERS[rarity] * random_float(rng, 0.8, 1.2))
