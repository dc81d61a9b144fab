"""Procedural planet descriptions."""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from typing import Any

from stellar_nexus.utils.rng import random_choice, random_float, random_int

from .names import planet_name

PLANET_TYPES = (
    "Terrestrial", "Gas Giant", "Ice World", "Desert World", "Ocean World",
    "Volcanic", "Crystalline", "Metal Rich", "Toxic", "Artificial",
)  # fmt: skip
ATMOSPHERES = (
    "Oxygen-Rich", "Nitrogen-Heavy", "Methane", "Carbon Dioxide", "Toxic Gas",
    "No Atmosphere", "Hydrogen", "Noble Gas Mix", "Corrosive", "Unknown Composition",
)  # fmt: skip
CLIMATES = (
    "Tropical", "Temperate", "Arctic", "Desert", "Variable",
    "Extreme Heat", "Extreme Cold", "Constant Storm", "Calm", "Chaotic",
)  # fmt: skip

COMMON_RESOURCES = ("Iron Ore", "Silicon", "Carbon", "Water Ice")
RARE_RESOURCES = ("Nexium Crystal", "Quantum Matter", "Rare Metals", "Energy Crystals")
UNIQUE_RESOURCES = ("Ancient Artifacts", "Alien Technology", "Exotic Matter", "Time Crystals")

TYPE_DANGERS = {
    "Volcanic": ("Volcanic Activity", "Toxic Gas Vents", "Extreme Heat"),
    "Toxic": ("Poisonous Atmosphere", "Corrosive Environment", "Radiation"),
}
CLIMATE_DANGERS = {"Constant Storm": ("Severe Weather", "Lightning Storms", "High Winds")}
EXTRA_DANGERS = (
    "Hostile Wildlife", "Ancient Guardians", "Unstable Terrain",
    "Magnetic Anomalies", "Gravitational Disturbances", "Energy Storms",
)  # fmt: skip
POINTS_OF_INTEREST = (
    "Ancient Ruins", "Crashed Starship", "Natural Wonder", "Mining Operation",
    "Research Facility", "Alien Monolith", "Energy Anomaly", "Hidden Cave System",
    "Orbital Debris", "Strange Formation", "Underground Lake", "Crystal Caverns",
)  # fmt: skip

TYPE_HABITABILITY = {
    "Terrestrial": 30,
    "Ocean World": 20,
    "Desert World": 10,
    "Gas Giant": -40,
    "Toxic": -30,
}
ATMOSPHERE_HABITABILITY = {
    "Oxygen-Rich": 25,
    "Nitrogen-Heavy": 15,
    "No Atmosphere": -30,
    "Toxic Gas": -25,
}
CLIMATE_HABITABILITY = {
    "Temperate": 20,
    "Tropical": 10,
    "Extreme Heat": -20,
    "Extreme Cold": -20,
}

# (exclusive upper habitability bound, population tier)
POPULATION_TIERS = (
    (20, "Uninhabited"),
    (40, "Research Outpost"),
    (60, "Small Colony"),
    (80, "Established Settlement"),
)


@dataclass(frozen=True, slots=True)
class PlanetResource:
    name: str
    abundance: float
    extraction_difficulty: int


@dataclass(slots=True)
class Planet:
    name: str
    type: str
    atmosphere: str
    climate: str
    gravity: float
    day_length: int
    temperature: int
    habitability: int
    population: str
    exploration_difficulty: int
    resources: list[PlanetResource] = field(default_factory=list)
    dangers: list[str] = field(default_factory=list)
    points_of_interest: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def calculate_habitability(
    planet_type: str, atmosphere: str, climate: str, gravity: float, temperature: int
) -> int:
    """Habitability score clamped to 0..100."""
    score = 50
    score += TYPE_HABITABILITY.get(planet_type, 0)
    score += ATMOSPHERE_HABITABILITY.get(atmosphere, 0)
    score += CLIMATE_HABITABILITY.get(climate, 0)

    if 0.8 <= gravity <= 1.2:
        score += 15
    elif gravity < 0.5 or gravity > 2.0:
        score -= 15

    if 0 <= temperature <= 30:
        score += 15
    elif temperature < -50 or temperature > 50:
        score -= 15

    return max(0, min(100, score))


def population_for(habitability: int) -> str:
    for upper_bound, tier in POPULATION_TIERS:
        if habitability < upper_bound:
            return tier
    return "Major Population Center"


def _resources(rng: random.Random) -> list[PlanetResource]:
    resources = [
        PlanetResource(
            random_choice(rng, COMMON_RESOURCES),
            abundance=rng.random(),
            extraction_difficulty=random_int(rng, 1, 3),
        )
        for _ in range(random_int(rng, 1, 3))
    ]
    if rng.random() < 0.5:
        resources.append(
            PlanetResource(
                random_choice(rng, RARE_RESOURCES),
                abundance=rng.random() * 0.5,
                extraction_difficulty=random_int(rng, 3, 5),
            )
        )
    if rng.random() < 0.1:
        resources.append(
            PlanetResource(
                random_choice(rng, UNIQUE_RESOURCES),
                abundance=rng.random() * 0.2,
                extraction_difficulty=5,
            )
        )
    return resources


def _dangers(planet_type: str, climate: str, rng: random.Random) -> list[str]:
    dangers = [*TYPE_DANGERS.get(planet_type, ()), *CLIMATE_DANGERS.get(climate, ())]
    if rng.random() < 0.3:
        dangers.append(random_choice(rng, EXTRA_DANGERS))
    return dangers


def _points_of_interest(rng: random.Random) -> list[str]:
    found: list[str] = []
    for _ in range(random_int(rng, 0, 3)):
        poi = random_choice(rng, POINTS_OF_INTEREST)
        if poi not in found:
            found.append(poi)
    return found


def generate_planet(rng: random.Random) -> Planet:
    """Roll a complete planet description."""
    name = planet_name(rng)
    planet_type = random_choice(rng, PLANET_TYPES)
    atmosphere = random_choice(rng, ATMOSPHERES)
    climate = random_choice(rng, CLIMATES)
    gravity = round(random_float(rng, 0.3, 2.3), 2)
    day_length = random_int(rng, 12, 59)
    temperature = random_int(rng, -100, 299)
    habitability = calculate_habitability(planet_type, atmosphere, climate, gravity, temperature)

    return Planet(
        name=name,
        type=planet_type,
        atmosphere=atmosphere,
        climate=climate,
        gravity=gravity,
        day_length=day_length,
        temperature=temperature,
        habitability=habitability,
        population=population_for(habitability),
        exploration_difficulty=random_int(rng, 1, 5),
        resources=_resources(rng),
        dangers=_dangers(planet_type, climate, rng),
        points_of_interest=_points_of_interest(rng),
    )
