"""Aggregate content generator bound to one random source."""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from math import floor
from typing import Any

from stellar_nexus.domain.combat import RANDOM_ENEMY, generate_enemy
from stellar_nexus.domain.enums import Rarity
from stellar_nexus.domain.models import Enemy, Reward
from stellar_nexus.domain.rewards import calculate_market_price, calculate_quest_rewards
from stellar_nexus.utils.rng import random_choice, random_int

from .creatures import Creature, generate_boss, generate_creature
from .lore import LoreEntry, generate_codex, generate_lore, generate_quest_lore
from .names import generate_name
from .planets import Planet, generate_planet
from .recipes import GeneratedRecipe, generate_recipe, generate_recipe_book

SECTOR_PREFIXES = (
    "Alpha", "Beta", "Gamma", "Delta", "Omega", "Sigma", "Nexus", "Void", "Nova", "Stellar",
)  # fmt: skip
SECTOR_SUFFIXES = ("Prime", "Core", "Rim", "Drift", "Gate", "Haven", "Expanse", "Cluster")
SECTOR_RESOURCES = (
    "Iron Ore", "Titanium", "Nexium Crystal", "Quantum Matter", "Dark Energy",
    "Plasma Core", "Crystalline Matrix", "Alien Artifact", "Rare Metals", "Energy Cells",
)  # fmt: skip
PHENOMENA = (
    "Solar Storm", "Gravitational Anomaly", "Nebula Cloud", "Asteroid Field",
    "Quantum Rift", "Black Hole Proximity", "Wormhole", "Ion Storm",
)  # fmt: skip

# (item, rarity) pairs offered as daily deals
DEAL_ITEMS = (
    ("Quantum Core", Rarity.EPIC),
    ("Plasma Cannon", Rarity.RARE),
    ("Shield Generator", Rarity.UNCOMMON),
    ("Hyperspace Fuel", Rarity.COMMON),
    ("Titanium Alloy", Rarity.COMMON),
    ("Energy Cell", Rarity.COMMON),
    ("Nexium Crystal", Rarity.RARE),
    ("AI Core", Rarity.LEGENDARY),
)

RANDOM_EVENTS = (
    {
        "name": "Mysterious Signal",
        "description": "Your sensors detect an unknown transmission",
        "type": "exploration",
        "rewards": ["credits", "experience"],
    },
    {
        "name": "Merchant in Distress",
        "description": "A trader requests assistance",
        "type": "choice",
        "rewards": ["credits", "reputation"],
    },
    {
        "name": "Ancient Relic",
        "description": "Scans reveal an ancient artifact nearby",
        "type": "artifact",
        "rewards": ["artifact", "experience"],
    },
)

QUEST_TYPES = ("Bounty Hunt", "Escort Duty", "Salvage Run", "Deep Survey", "Supply Delivery")


@dataclass(frozen=True, slots=True)
class SectorResource:
    name: str
    abundance: float
    extraction_difficulty: int


@dataclass(slots=True)
class Sector:
    name: str
    difficulty: int
    planets: int
    hostiles: bool
    phenomenon: str | None
    resources: list[SectorResource] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class SectorSummary:
    name: str
    difficulty: int
    discovered: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class MarketDeal:
    name: str
    rarity: Rarity
    original_price: int
    sale_price: int
    discount: int
    hours_left: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["rarity"] = str(self.rarity)
        return data


@dataclass(slots=True)
class Quest:
    """A generated mission: its briefing plus the rewards it would pay."""

    name: str
    sector: str
    difficulty: int
    stages: int
    briefing: LoreEntry
    rewards: list[Reward] = field(default_factory=list)


class ContentGenerator:
    """Procedural content for sectors, encounters, deals and quests.

    Every method draws from the ``rng`` given at construction, so a seeded
    generator replays the same content.

    Example:
        >>> generator = ContentGenerator(make_rng("world:1"))
        >>> sectors = generator.generate_available_sectors(3)
        >>> len(sectors)
        5
    """

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def generate_sector_name(self) -> str:
        number = random_int(self._rng, 1, 999)
        prefix = random_choice(self._rng, SECTOR_PREFIXES)
        suffix = random_choice(self._rng, SECTOR_SUFFIXES)
        return f"{prefix}-{suffix}-{number}"

    def generate_sector_data(self, sector_name: str) -> Sector:
        rng = self._rng
        return Sector(
            name=sector_name,
            difficulty=random_int(rng, 1, 5),
            resources=[
                SectorResource(
                    random_choice(rng, SECTOR_RESOURCES),
                    abundance=rng.random(),
                    extraction_difficulty=random_int(rng, 1, 5),
                )
                for _ in range(random_int(rng, 1, 4))
            ],
            planets=random_int(rng, 1, 5),
            hostiles=rng.random() > 0.7,
            phenomenon=random_choice(rng, PHENOMENA) if rng.random() > 0.6 else None,
        )

    def generate_enemy(self, enemy_type: str = RANDOM_ENEMY, player_level: int = 1) -> Enemy:
        return generate_enemy(enemy_type, player_level, self._rng)

    def generate_available_sectors(self, user_level: int) -> list[SectorSummary]:
        """``min(10, user_level + 2)`` sectors no harder than the player's level allows."""
        max_difficulty = max(1, min(5, user_level))
        return [
            SectorSummary(
                name=self.generate_sector_name(),
                difficulty=random_int(self._rng, 1, max_difficulty),
                discovered=self._rng.random() > 0.3,
            )
            for _ in range(min(10, user_level + 2))
        ]

    def generate_daily_market_deals(self, user_level: int) -> list[MarketDeal]:
        """Two to four discounted offers priced by rarity.

        Higher levels see slightly richer base prices.
        """
        rng = self._rng
        deals: list[MarketDeal] = []
        for _ in range(random_int(rng, 2, 4)):
            name, rarity = random_choice(rng, DEAL_ITEMS)
            base_price = random_int(rng, 100, 1099) + max(0, user_level - 1) * 10
            original = calculate_market_price(base_price, rarity, rng)
            discount = random_int(rng, 10, 39)
            deals.append(
                MarketDeal(
                    name=name,
                    rarity=rarity,
                    original_price=original,
                    sale_price=floor(original * (1 - discount / 100)),
                    discount=discount,
                    hours_left=random_int(rng, 1, 23),
                )
            )
        return deals

    def generate_random_event(self, user_level: int) -> dict[str, Any]:
        """Pick an encounter from the event table, tagged with the player level."""
        event = dict(random_choice(self._rng, RANDOM_EVENTS))
        event["rewards"] = list(event["rewards"])
        event["level"] = user_level
        return event

    def generate_quest(
        self, user_level: int, quest_type: str | None = None, difficulty: int | None = None
    ) -> Quest:
        """Roll a quest in a fresh sector with a briefing and a reward preview."""
        name = quest_type or random_choice(self._rng, QUEST_TYPES)
        sector = self.generate_sector_name()
        quest_difficulty = difficulty or random_int(self._rng, 1, 5)
        stages = random_int(self._rng, 1, 3)
        return Quest(
            name=name,
            sector=sector,
            difficulty=quest_difficulty,
            stages=stages,
            briefing=generate_quest_lore(name, sector),
            rewards=calculate_quest_rewards(quest_difficulty, stages, user_level, self._rng),
        )

    def generate_name(self, kind: str) -> str:
        return generate_name(kind, self._rng)

    def generate_planet(self) -> Planet:
        return generate_planet(self._rng)

    def generate_creature(
        self, biome: str | None = None, difficulty: int | None = None
    ) -> Creature:
        return generate_creature(self._rng, biome, difficulty)

    def generate_boss(self, region: str, player_level: int) -> Creature:
        return generate_boss(self._rng, region, player_level)

    def generate_lore(self, lore_type: str | None = None) -> LoreEntry:
        return generate_lore(self._rng, lore_type)

    def generate_codex(self, entries: int = 10) -> list[LoreEntry]:
        return generate_codex(self._rng, entries)

    def generate_recipe(
        self, recipe_type: str | None = None, level: int | None = None, rarity: str | None = None
    ) -> GeneratedRecipe:
        return generate_recipe(self._rng, recipe_type, level, rarity)

    def generate_recipe_book(self, level: int = 1) -> list[GeneratedRecipe]:
        return generate_recipe_book(self._rng, level)
