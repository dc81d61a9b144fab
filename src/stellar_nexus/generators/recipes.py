"""Procedural crafting recipes."""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from math import floor
from typing import Any

from stellar_nexus.domain.enums import RARITY_ORDER, Rarity, RecipeType
from stellar_nexus.utils.rng import random_choice, random_int, weighted_choice

BASIC_MATERIALS = ("Iron Ore", "Silicon", "Carbon Fiber", "Aluminum", "Copper Wire")
ADVANCED_MATERIALS = (
    "Titanium Alloy", "Quantum Steel", "Plasma Conduit", "Neural Fiber", "Energy Cell",
)  # fmt: skip
RARE_MATERIALS = (
    "Nexium Crystal", "Dark Matter", "Temporal Crystal", "Void Essence", "Quantum Matrix",
)  # fmt: skip
EXOTIC_MATERIALS = (
    "Living Metal", "Consciousness Core", "Reality Shard", "Infinity Particle",
    "Dimensional Anchor",
)  # fmt: skip

WEAPON_COMPONENTS = (
    "Barrel", "Trigger Assembly", "Power Core", "Targeting System", "Ammunition Feed",
    "Cooling System", "Stabilizer", "Charge Capacitor", "Beam Focuser", "Projectile Chamber",
)  # fmt: skip
WEAPON_TYPES = (
    "Laser Rifle", "Plasma Cannon", "Ion Blaster", "Quantum Disruptor", "Particle Beam",
    "Photon Torpedo", "Energy Lance", "Pulse Rifle", "Gravity Gun", "Molecular Disassembler",
)  # fmt: skip
COMPONENT_TYPES = (
    "Shield Generator", "Engine Booster", "Sensor Array", "Life Support Module",
    "Navigation Computer", "Communication Array", "Power Regulator", "Hull Plating",
    "Magnetic Field Generator", "Quantum Processor",
)  # fmt: skip

UPGRADE_BONUS_TYPES = {
    "Armor Plating": "health",
    "Speed Enhancement": "speed",
    "Weapon Modification": "damage",
    "Sensor Upgrade": "sensors",
    "Engine Tuning": "speed",
    "Shield Booster": "shields",
    "Cargo Expansion": "cargo",
    "Stealth Module": "stealth",
    "Tactical Computer": "accuracy",
    "Emergency Systems": "survival",
}
CONSUMABLE_EFFECTS = {
    "Repair Kit": "hull_repair",
    "Shield Battery": "shield_restore",
    "Energy Boost": "energy_restore",
    "Hull Sealant": "emergency_repair",
    "System Stabilizer": "system_repair",
    "Emergency Oxygen": "life_support",
    "Nano-repair Swarm": "auto_repair",
    "Power Cell": "power_boost",
    "Medical Kit": "crew_heal",
    "Fuel Injector": "fuel_efficiency",
}

RARITY_WEIGHTS = (0.4, 0.3, 0.2, 0.08, 0.02)

WEAPON_DAMAGE_MULTIPLIERS = {
    Rarity.COMMON: 1.0,
    Rarity.UNCOMMON: 1.2,
    Rarity.RARE: 1.5,
    Rarity.EPIC: 1.8,
    Rarity.LEGENDARY: 2.2,
}
COMPONENT_BONUS = {
    Rarity.COMMON: 5,
    Rarity.UNCOMMON: 10,
    Rarity.RARE: 20,
    Rarity.EPIC: 35,
    Rarity.LEGENDARY: 50,
}
UPGRADE_BONUS = {
    Rarity.COMMON: 10,
    Rarity.UNCOMMON: 20,
    Rarity.RARE: 35,
    Rarity.EPIC: 55,
    Rarity.LEGENDARY: 80,
}
CONSUMABLE_EFFECT = {
    Rarity.COMMON: 50,
    Rarity.UNCOMMON: 100,
    Rarity.RARE: 200,
    Rarity.EPIC: 350,
    Rarity.LEGENDARY: 500,
}
MATERIAL_VALUE = {
    Rarity.COMMON: 25,
    Rarity.UNCOMMON: 75,
    Rarity.RARE: 200,
    Rarity.EPIC: 500,
    Rarity.LEGENDARY: 1000,
}
# minutes
CRAFTING_BASE_TIME = {
    Rarity.COMMON: 5,
    Rarity.UNCOMMON: 15,
    Rarity.RARE: 30,
    Rarity.EPIC: 60,
    Rarity.LEGENDARY: 120,
}
CRAFTING_TIME_MULTIPLIERS = {
    RecipeType.WEAPON: 1.5,
    RecipeType.COMPONENT: 1.2,
    RecipeType.UPGRADE: 1.0,
    RecipeType.CONSUMABLE: 0.5,
    RecipeType.MATERIAL: 0.8,
}
CATEGORIES = {
    RecipeType.WEAPON: "Weapons",
    RecipeType.COMPONENT: "Ship Components",
    RecipeType.UPGRADE: "Ship Upgrades",
    RecipeType.CONSUMABLE: "Consumables",
    RecipeType.MATERIAL: "Refined Materials",
}

MAX_BOOK_LEVEL = 5


@dataclass(slots=True)
class GeneratedRecipe:
    """A recipe ready to be stored; ``materials`` and ``result`` are JSON-shaped."""

    name: str
    type: RecipeType
    level: int
    rarity: Rarity
    crafting_time: int
    description: str
    category: str
    materials: list[dict[str, Any]] = field(default_factory=list)
    result: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def random_rarity(rng: random.Random) -> Rarity:
    return weighted_choice(rng, list(RARITY_ORDER), list(RARITY_WEIGHTS))


def crafting_time(rarity: Rarity, recipe_type: RecipeType) -> int:
    return floor(CRAFTING_BASE_TIME[rarity] * CRAFTING_TIME_MULTIPLIERS[recipe_type])


def weapon_damage(level: int, rarity: Rarity) -> int:
    return floor(50 * (1 + (level - 1) * 0.2) * WEAPON_DAMAGE_MULTIPLIERS[rarity])


def _material(name: str, quantity: int) -> dict[str, Any]:
    return {"name": name, "quantity": quantity}


def recipe_materials(
    rng: random.Random, level: int, rarity: Rarity, recipe_type: RecipeType
) -> list[dict[str, Any]]:
    """Ingredient list: richer tiers unlock with level and rarity."""
    materials = [_material(random_choice(rng, BASIC_MATERIALS), random_int(rng, 1, 5))]
    if level >= 2:
        materials.append(_material(random_choice(rng, ADVANCED_MATERIALS), random_int(rng, 1, 3)))
    if level >= 3 or rarity.rank >= Rarity.RARE.rank:
        materials.append(_material(random_choice(rng, RARE_MATERIALS), random_int(rng, 1, 2)))
    if rarity is Rarity.LEGENDARY:
        materials.append(_material(random_choice(rng, EXOTIC_MATERIALS), 1))
    if recipe_type is RecipeType.WEAPON:
        materials.append(_material(random_choice(rng, WEAPON_COMPONENTS), 1))
    return materials


def _raw_materials(rng: random.Random, rarity: Rarity) -> list[dict[str, Any]]:
    quantity = random_int(rng, 5, 14)
    if rarity in (Rarity.UNCOMMON, Rarity.RARE):
        pool = ADVANCED_MATERIALS
    elif rarity in (Rarity.EPIC, Rarity.LEGENDARY):
        pool = RARE_MATERIALS
    else:
        pool = BASIC_MATERIALS
    return [_material(f"Raw {random_choice(rng, pool)}", quantity)]


def _weapon(rng: random.Random, level: int, rarity: Rarity) -> GeneratedRecipe:
    weapon = random_choice(rng, WEAPON_TYPES)
    materials = recipe_materials(rng, level, rarity, RecipeType.WEAPON)
    damage = weapon_damage(level, rarity)
    accuracy = random_int(rng, 70, 89)
    stats = {
        "damage": damage,
        "accuracy": accuracy,
        "crit_chance": random_int(rng, 5, 19),
        "range": random_int(rng, 200, 699),
    }
    return GeneratedRecipe(
        name=f"{rarity.title()} {weapon}",
        type=RecipeType.WEAPON,
        level=level,
        rarity=rarity,
        crafting_time=crafting_time(rarity, RecipeType.WEAPON),
        description=(
            f"A {rarity} grade {weapon.lower()} designed for space combat. "
            f"Deals {damage} damage with {accuracy}% accuracy."
        ),
        category=CATEGORIES[RecipeType.WEAPON],
        materials=materials,
        result={"name": weapon, "quantity": 1, "stats": stats},
    )


def _component(rng: random.Random, level: int, rarity: Rarity) -> GeneratedRecipe:
    component = random_choice(rng, COMPONENT_TYPES)
    materials = recipe_materials(rng, level, rarity, RecipeType.COMPONENT)
    bonus = COMPONENT_BONUS[rarity] + (level - 1) * 5
    stats = {
        "efficiency": bonus,
        "durability": random_int(rng, 500, 1499),
        "power_consumption": random_int(rng, 10, 59),
    }
    return GeneratedRecipe(
        name=f"{rarity.title()} {component}",
        type=RecipeType.COMPONENT,
        level=level,
        rarity=rarity,
        crafting_time=crafting_time(rarity, RecipeType.COMPONENT),
        description=(
            f"A {rarity} {component.lower()} that provides {bonus}% efficiency bonus "
            "to ship systems."
        ),
        category=CATEGORIES[RecipeType.COMPONENT],
        materials=materials,
        result={"name": component, "quantity": 1, "stats": stats},
    )


def _upgrade(rng: random.Random, level: int, rarity: Rarity) -> GeneratedRecipe:
    upgrade = random_choice(rng, tuple(UPGRADE_BONUS_TYPES))
    materials = recipe_materials(rng, level, rarity, RecipeType.UPGRADE)
    bonus = UPGRADE_BONUS[rarity] + (level - 1) * 10
    stats = {
        "bonus_type": UPGRADE_BONUS_TYPES[upgrade],
        "bonus_value": bonus,
        "installation_cost": random_int(rng, 200, 1199),
    }
    return GeneratedRecipe(
        name=f"{rarity.title()} {upgrade}",
        type=RecipeType.UPGRADE,
        level=level,
        rarity=rarity,
        crafting_time=crafting_time(rarity, RecipeType.UPGRADE),
        description=(
            f"A {rarity} upgrade module that enhances ship performance. "
            f"Provides +{bonus} to relevant systems."
        ),
        category=CATEGORIES[RecipeType.UPGRADE],
        materials=materials,
        result={"name": upgrade, "quantity": 1, "stats": stats},
    )


def _consumable(rng: random.Random, level: int, rarity: Rarity) -> GeneratedRecipe:
    consumable = random_choice(rng, tuple(CONSUMABLE_EFFECTS))
    materials = recipe_materials(rng, level, rarity, RecipeType.CONSUMABLE)
    quantity = random_int(rng, 1, 5)
    effect = CONSUMABLE_EFFECT[rarity] + (level - 1) * 25
    stats = {"effect": CONSUMABLE_EFFECTS[consumable], "value": effect, "uses": 1}
    return GeneratedRecipe(
        name=f"{rarity.title()} {consumable}",
        type=RecipeType.CONSUMABLE,
        level=level,
        rarity=rarity,
        crafting_time=crafting_time(rarity, RecipeType.CONSUMABLE),
        description=(
            f"A {rarity} {consumable.lower()} that provides {effect} points of "
            "restoration when used."
        ),
        category=CATEGORIES[RecipeType.CONSUMABLE],
        materials=materials,
        result={"name": consumable, "quantity": quantity, "stats": stats},
    )


def _refined_material(rng: random.Random, level: int, rarity: Rarity) -> GeneratedRecipe:
    name = f"Processed {rarity.title()} Alloy"
    materials = _raw_materials(rng, rarity)
    quantity = random_int(rng, 1, 3)
    stats = {
        "purity": random_int(rng, 80, 99),
        "market_value": MATERIAL_VALUE[rarity] + (level - 1) * 50,
    }
    return GeneratedRecipe(
        name=name,
        type=RecipeType.MATERIAL,
        level=level,
        rarity=rarity,
        crafting_time=crafting_time(rarity, RecipeType.MATERIAL),
        description=(
            f"A refined {rarity} alloy suitable for advanced crafting projects. "
            "Higher purity materials yield better results."
        ),
        category=CATEGORIES[RecipeType.MATERIAL],
        materials=materials,
        result={"name": name, "quantity": quantity, "stats": stats},
    )


_BUILDERS = {
    RecipeType.WEAPON: _weapon,
    RecipeType.COMPONENT: _component,
    RecipeType.UPGRADE: _upgrade,
    RecipeType.CONSUMABLE: _consumable,
    RecipeType.MATERIAL: _refined_material,
}


def generate_recipe(
    rng: random.Random,
    recipe_type: str | None = None,
    level: int | None = None,
    rarity: str | None = None,
) -> GeneratedRecipe:
    """Roll a recipe; any argument left out is rolled too.

    Args:
        rng: Random source
        recipe_type: One of :class:`RecipeType`; unknown values fall back to weapon
        level: Recipe level, 1-5 when rolled
        rarity: One of :class:`Rarity`, weighted towards common when rolled

    Returns:
        The generated recipe
    """
    if recipe_type is None:
        kind = random_choice(rng, tuple(RecipeType))
    else:
        try:
            kind = RecipeType(recipe_type)
        except ValueError:
            kind = RecipeType.WEAPON
    recipe_level = level if level is not None else random_int(rng, 1, MAX_BOOK_LEVEL)
    recipe_rarity = Rarity(rarity) if rarity is not None else random_rarity(rng)
    return _BUILDERS[kind](rng, recipe_level, recipe_rarity)


def generate_recipe_book(rng: random.Random, level: int = 1) -> list[GeneratedRecipe]:
    """Recipes for every type at each level up to ``level`` (capped at 5).

    Weapons get three recipes per level, every other type two. The book is
    ordered by level, then name.
    """
    recipes: list[GeneratedRecipe] = []
    for recipe_type in RecipeType:
        per_level = 3 if recipe_type is RecipeType.WEAPON else 2
        for recipe_level in range(1, min(level, MAX_BOOK_LEVEL) + 1):
            recipes.extend(
                generate_recipe(rng, recipe_type, recipe_level) for _ in range(per_level)
            )
    return sorted(recipes, key=lambda recipe: (recipe.level, recipe.name))
