"""Enumerations used across the Stellar Nexus domain."""

from __future__ import annotations

from enum import StrEnum


class ShipType(StrEnum):
    """The six ship archetypes."""

    SCOUT = "scout"
    FIGHTER = "fighter"
    FREIGHTER = "freighter"
    EXPLORER = "explorer"
    BATTLECRUISER = "battlecruiser"
    FLAGSHIP = "flagship"


class ExplorationType(StrEnum):
    """Kinds of exploration a player can launch."""

    EXPLORATION = "exploration"
    HUNTING = "hunting"
    ARTIFACT_SEARCH = "artifact_search"
    FISHING = "fishing"


class Rarity(StrEnum):
    """Item rarity, ordered from least to most valuable."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def rank(self) -> int:
        return RARITY_ORDER.index(self)


RARITY_ORDER: tuple[Rarity, ...] = (
    Rarity.COMMON,
    Rarity.UNCOMMON,
    Rarity.RARE,
    Rarity.EPIC,
    Rarity.LEGENDARY,
)


class RewardType(StrEnum):
    """Tag of a :class:`~stellar_nexus.domain.models.Reward`."""

    CREDITS = "credits"
    NEXIUM = "nexium"
    EXPERIENCE = "experience"
    MATERIAL = "material"
    ARTIFACT = "artifact"
    COMPONENT = "component"
    UPGRADE = "upgrade"


class ResourceType(StrEnum):
    """Inventory resource categories, including crafted item kinds."""

    MATERIAL = "material"
    ARTIFACT = "artifact"
    COMPONENT = "component"
    UPGRADE = "upgrade"
    WEAPON = "weapon"
    CONSUMABLE = "consumable"


class RecipeType(StrEnum):
    """Crafting recipe categories."""

    WEAPON = "weapon"
    COMPONENT = "component"
    UPGRADE = "upgrade"
    CONSUMABLE = "consumable"
    MATERIAL = "material"


class CombatType(StrEnum):
    PVE = "pve"
    PVP = "pvp"


class GuildType(StrEnum):
    """Guild focus."""

    MILITARY = "military"
    TRADE = "trade"
    EXPLORATION = "exploration"
    RESEARCH = "research"


class ContributionType(StrEnum):
    """Currencies a member can donate to their guild."""

    CREDITS = "credits"
    NEXIUM = "nexium"


class MilestoneType(StrEnum):
    MEMBER_INCREASE = "member_increase"
    CREDITS = "credits"


class LoreType(StrEnum):
    HISTORY = "history"
    LEGEND = "legend"
    SPECIES = "species"
    TECHNOLOGY = "technology"
    LOCATION = "location"
    EVENT = "event"


class Significance(StrEnum):
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"
    LEGENDARY = "legendary"


class NameKind(StrEnum):
    """Kinds accepted by the name generator dispatcher."""

    SHIP = "ship"
    PLANET = "planet"
    ALIEN = "alien"
    CHARACTER = "character"
    STATION = "station"
    BASE = "base"
    SECTOR = "sector"
    GENERIC = "generic"
    CALLSIGN = "callsign"
    CREW = "crew"
