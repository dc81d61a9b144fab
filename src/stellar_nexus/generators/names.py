"""Procedural names for ships, planets, aliens, stations and sectors."""

from __future__ import annotations

import random
import string

from stellar_nexus.domain.enums import NameKind
from stellar_nexus.utils.rng import random_choice, random_int

SPACE_PREFIXES = (
    "Astro", "Cosmic", "Galactic", "Nebula", "Stellar", "Void", "Quantum", "Nova",
    "Plasma", "Ion", "Hyper", "Nano", "Mega", "Ultra", "Cyber", "Neo",
)  # fmt: skip
SPACE_SUFFIXES = (
    "Prime", "Core", "Matrix", "Nexus", "Forge", "Gate", "Haven", "Station",
    "Base", "Outpost", "Colony", "Expanse", "Sector", "System", "Cluster",
)  # fmt: skip
SHIP_NAMES = (
    "Dagger", "Falcon", "Thunder", "Lightning", "Phoenix", "Eagle", "Hawk", "Raven",
    "Viper", "Cobra", "Serpent", "Dragon", "Wolf", "Lion", "Tiger", "Shark",
    "Storm", "Tempest", "Hurricane", "Typhoon", "Cyclone", "Blizzard",
)  # fmt: skip
ALIEN_SYLLABLES = (
    "Zyx", "Keth", "Varn", "Thex", "Quin", "Raze", "Blyx", "Nox",
    "Zara", "Xel", "Vex", "Trix", "Syn", "Ryx", "Pex", "Nyx",
)  # fmt: skip
ALIEN_ENDINGS = ("ar", "on", "ix", "ul", "en", "ak")
PLANET_PREFIXES = (
    "Terra", "Aqua", "Ignis", "Glacies", "Ventus", "Lux", "Umbra", "Crysta",
    "Magna", "Silva", "Desert", "Ocean", "Arctic", "Volcanic", "Gas",
)  # fmt: skip
STAR_DESIGNATIONS = ("Alpha", "Beta", "Gamma", "Delta", "Epsilon", "Zeta", "Eta", "Theta")
STAR_NAMES = ("Centauri", "Proxima", "Vega", "Sirius", "Rigel", "Arcturus")
CREW_RANKS = (
    "Commander", "Captain", "Admiral", "Colonel", "Major", "Pilot", "Navigator",
    "Engineer", "Medic", "Gunner", "Scout", "Operative",
)  # fmt: skip


def _letters(rng: random.Random, count: int = 2) -> str:
    return "".join(random_choice(rng, string.ascii_uppercase) for _ in range(count))


def ship_name(rng: random.Random) -> str:
    return f"{random_choice(rng, SPACE_PREFIXES)} {random_choice(rng, SHIP_NAMES)}"


def planet_name(rng: random.Random) -> str:
    prefix = random_choice(rng, PLANET_PREFIXES)
    letters = _letters(rng)
    return f"{prefix}-{letters}-{random_int(rng, 1, 9999)}"


def alien_name(rng: random.Random) -> str:
    first = random_choice(rng, ALIEN_SYLLABLES)
    second = random_choice(rng, ALIEN_SYLLABLES)
    return f"{first}{second}{random_choice(rng, ALIEN_ENDINGS)}"


def station_name(rng: random.Random) -> str:
    prefix = random_choice(rng, SPACE_PREFIXES)
    suffix = random_choice(rng, SPACE_SUFFIXES)
    return f"{prefix} {suffix} {random_int(rng, 1, 99)}"


def star_sector_name(rng: random.Random) -> str:
    designation = random_choice(rng, STAR_DESIGNATIONS)
    star = random_choice(rng, STAR_NAMES)
    return f"{designation}-{star}-{random_int(rng, 1, 999)}"


def generic_name(rng: random.Random) -> str:
    return f"{random_choice(rng, SPACE_PREFIXES)} {random_choice(rng, SPACE_SUFFIXES)}"


def callsign(rng: random.Random) -> str:
    return f"{_letters(rng)}-{random_int(rng, 1, 999)}"


def crew_name(rng: random.Random) -> str:
    return f"{random_choice(rng, CREW_RANKS)} {alien_name(rng)}"


_BUILDERS = {
    NameKind.SHIP: ship_name,
    NameKind.PLANET: planet_name,
    NameKind.ALIEN: alien_name,
    NameKind.CHARACTER: alien_name,
    NameKind.STATION: station_name,
    NameKind.BASE: station_name,
    NameKind.SECTOR: star_sector_name,
    NameKind.GENERIC: generic_name,
    NameKind.CALLSIGN: callsign,
    NameKind.CREW: crew_name,
}


def generate_name(kind: str, rng: random.Random) -> str:
    """Name for ``kind``; unknown kinds get a generic name."""
    try:
        builder = _BUILDERS[NameKind(kind.lower())]
    except ValueError:
        builder = generic_name
    return builder(rng)
