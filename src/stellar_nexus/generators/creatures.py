"""Procedural creatures, swarms and bosses for hunting encounters."""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field, replace
from math import floor
from typing import Any

from stellar_nexus.domain.enums import RARITY_ORDER, Rarity, ResourceType
from stellar_nexus.utils.rng import random_choice, random_int

from .names import alien_name

CREATURE_TYPES = (
    "Crystalline", "Mechanical", "Energy-based", "Organic", "Hybrid",
    "Gaseous", "Plasma", "Quantum", "Ethereal", "Silicon-based",
)  # fmt: skip
HABITATS = (
    "Space Void", "Asteroid Fields", "Nebulae", "Planet Surface", "Underground Caves",
    "Ocean Depths", "Volcanic Regions", "Ice Fields", "Gas Giant Atmospheres",
    "Orbital Stations", "Derelict Ships", "Energy Storms",
)  # fmt: skip
ABILITIES = (
    "Phase Shifting", "Energy Absorption", "Electromagnetic Pulse", "Camouflage",
    "Regeneration", "Toxic Secretion", "Gravity Manipulation", "Time Dilation",
    "Matter Conversion", "Telepathy", "Quantum Tunneling", "Ion Discharge",
    "Shield Generation", "Molecular Disruption", "Dimensional Rift", "Mind Control",
)  # fmt: skip
NAME_PREFIXES = (
    "Void", "Quantum", "Plasma", "Crystal", "Shadow", "Nova", "Stellar", "Cosmic",
    "Nebula", "Ion", "Hyper", "Meta", "Proto", "Ultra", "Mega", "Nano",
)  # fmt: skip
BASE_NAMES = (
    "Wyrm", "Leviathan", "Specter", "Guardian", "Hunter", "Drifter", "Stalker",
    "Sentinel", "Wraith", "Beast", "Entity", "Organism", "Anomaly", "Horror",
)  # fmt: skip
BOSS_ABILITIES = ("Area of Effect Attacks", "Enrage Mode", "Summon Minions")

SIZE_MULTIPLIERS = {
    "Microscopic": 0.1,
    "Tiny": 0.3,
    "Small": 0.7,
    "Medium": 1.0,
    "Large": 1.5,
    "Huge": 2.5,
    "Colossal": 4.0,
    "Planetary": 10.0,
}
SIZES = tuple(SIZE_MULTIPLIERS)

BASE_HEALTH = 100
BASE_DAMAGE = 25
BASE_DEFENSE = 10


@dataclass(frozen=True, slots=True)
class LootDrop:
    name: str
    type: ResourceType
    rarity: Rarity
    value: int
    drop_chance: float


LOOT_TABLE = (
    LootDrop("Organic Matter", ResourceType.MATERIAL, Rarity.COMMON, 10, 0.8),
    LootDrop("Energy Residue", ResourceType.MATERIAL, Rarity.COMMON, 15, 0.6),
    LootDrop("Creature Essence", ResourceType.COMPONENT, Rarity.UNCOMMON, 50, 0.4),
    LootDrop("Alien Genetic Sample", ResourceType.ARTIFACT, Rarity.RARE, 200, 0.2),
    LootDrop("Quantum Biomatter", ResourceType.ARTIFACT, Rarity.EPIC, 500, 0.1),
    LootDrop("Living Crystal", ResourceType.ARTIFACT, Rarity.LEGENDARY, 1000, 0.05),
)


@dataclass(slots=True)
class Creature:
    name: str
    type: str
    size: str
    habitat: str
    danger_level: int
    rarity: Rarity
    description: str
    health: int
    damage: int
    defense: int
    abilities: list[str] = field(default_factory=list)
    loot: list[LootDrop] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def rarity_for_danger(danger_level: int) -> Rarity:
    """Danger 1 is common, 5 and above legendary."""
    index = max(0, min(len(RARITY_ORDER) - 1, danger_level - 1))
    return RARITY_ORDER[index]


def creature_stats(size: str, danger_level: int) -> tuple[int, int, int]:
    """``(health, damage, defense)`` for a creature of ``size`` and ``danger_level``."""
    multiplier = SIZE_MULTIPLIERS.get(size, 1.0) * (1 + (danger_level - 1) * 0.3)
    return (
        floor(BASE_HEALTH * multiplier),
        floor(BASE_DAMAGE * multiplier),
        floor(BASE_DEFENSE * multiplier),
    )


def loot_for(rarity: Rarity, danger_level: int) -> list[LootDrop]:
    """Loot up to one rarity step above the creature, valued by danger."""
    return [
        replace(drop, value=floor(drop.value * (1 + danger_level * 0.2)))
        for drop in LOOT_TABLE
        if drop.rarity.rank <= rarity.rank + 1
    ]


def _creature_name(rng: random.Random) -> str:
    prefix = random_choice(rng, NAME_PREFIXES)
    base = random_choice(rng, BASE_NAMES)
    if rng.random() < 0.5:
        return f"{prefix} {base}"
    return f"{base} of {alien_name(rng)}"


def _description(
    name: str, creature_type: str, size: str, habitat: str, abilities: list[str], rng: random.Random
) -> str:
    lead = abilities[0].lower()
    templates = (
        f"The {name} is a {size.lower()} {creature_type.lower()} creature "
        f"found in {habitat.lower()}.",
        f"This {creature_type.lower()} entity roams the {habitat.lower()}, "
        f"using its {lead} ability to survive.",
        f"A mysterious {size.lower()} being that haunts {habitat.lower()}, "
        f"known for its deadly {lead} attacks.",
    )
    description = random_choice(rng, templates)
    if len(abilities) > 1:
        extra = ", ".join(abilities[1:]).lower()
        description += f" It possesses multiple abilities including {extra}."
    return description


def generate_creature(
    rng: random.Random, biome: str | None = None, difficulty: int | None = None
) -> Creature:
    """Roll a creature, optionally pinned to a habitat and danger level."""
    creature_type = random_choice(rng, CREATURE_TYPES)
    size = random_choice(rng, SIZES)
    habitat = biome or random_choice(rng, HABITATS)
    danger_level = difficulty or random_int(rng, 1, 5)
    rarity = rarity_for_danger(danger_level)

    name = _creature_name(rng)
    abilities = rng.sample(ABILITIES, min(4, danger_level // 2 + 1))
    health, damage, defense = creature_stats(size, danger_level)

    return Creature(
        name=name,
        type=creature_type,
        size=size,
        habitat=habitat,
        danger_level=danger_level,
        rarity=rarity,
        description=_description(name, creature_type, size, habitat, abilities, rng),
        health=health,
        damage=damage,
        defense=defense,
        abilities=abilities,
        loot=loot_for(rarity, danger_level),
    )


def generate_swarm(rng: random.Random, base: Creature | None = None) -> list[Creature]:
    """3 to 10 individually weaker creatures."""
    swarm: list[Creature] = []
    for index in range(random_int(rng, 3, 10)):
        creature = base if base is not None else generate_creature(rng)
        swarm.append(
            replace(
                creature,
                name=f"{creature.name} Swarm Member {index + 1}",
                health=floor(creature.health * 0.6),
                damage=floor(creature.damage * 0.8),
                abilities=list(creature.abilities),
                loot=list(creature.loot),
            )
        )
    return swarm


def generate_boss(rng: random.Random, region: str, player_level: int) -> Creature:
    """A legendary boss whose danger scales with the player's level."""
    danger_level = min(5, player_level // 10 + 3)
    creature = generate_creature(rng, region, danger_level)
    return replace(
        creature,
        name=f"{creature.name} Prime",
        health=creature.health * 3,
        damage=creature.damage * 2,
        defense=floor(creature.defense * 1.5),
        rarity=Rarity.LEGENDARY,
        abilities=[*creature.abilities, *BOSS_ABILITIES],
        loot=[
            replace(drop, value=drop.value * 3, drop_chance=min(1.0, drop.drop_chance * 1.5))
            for drop in creature.loot
        ],
    )
