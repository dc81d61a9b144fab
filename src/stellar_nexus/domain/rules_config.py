"""Declarative rule configuration and static balancing tables."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .enums import ExplorationType, GuildType, Rarity, ResourceType, ShipType
from .models import EnemyTemplate, GuildSeed, MarketItem, ShipTemplate, StarterResource


@dataclass(frozen=True, slots=True)
class ProgressionRules:
    """Experience, levels and new-account defaults."""

    experience_per_level: int = 1000
    starting_credits: int = 1000
    starting_nexium: int = 25
    level_up_credits_per_level: int = 100
    level_up_credit_bonus_per_level: int = 50  # times U(0, 1)
    nexium_level_interval: int = 5
    nexium_bonus_max: int = 2


@dataclass(frozen=True, slots=True)
class ShipRules:
    """Ship purchase, upgrade and repair constants."""

    min_tier: int = 1
    max_tier: int = 4
    repair_cost_per_point: int = 10
    name_suffix_length: int = 4


@dataclass(frozen=True, slots=True)
class ExplorationRules:
    """Success and experience tuning for explorations."""

    success_cap: float = 0.95
    level_bonus: float = 0.1
    success_experience_multiplier: float = 1.5
    failure_experience_multiplier: float = 0.5
    level_experience_bonus: int = 2
    salvage_min: int = 10
    salvage_max: int = 29


@dataclass(frozen=True, slots=True)
class CombatRules:
    """PvE and PvP resolution constants."""

    player_damage_roll_factor: float = 0.3
    player_damage_weapon_factor: int = 10
    enemy_damage_roll_factor: float = 0.2
    enemy_damage_weapon_factor: int = 8
    pve_experience_per_difficulty: int = 25
    pve_win_experience: int = 50
    pve_loss_experience: int = 25
    pvp_damage_roll_factor: float = 0.25
    pvp_damage_weapon_factor: int = 12
    pvp_speed_divisor: int = 200
    pvp_winner_experience: int = 150
    pvp_loser_experience: int = 50
    enemy_level_scaling: float = 0.1
    enemy_weapon_power: int = 50
    enemy_difficulty_power: int = 100
    enemy_difficulty_health: int = 80
    enemy_base_health: int = 100
    max_enemy_difficulty: int = 5
    enemy_difficulty_level_step: int = 5


@dataclass(frozen=True, slots=True)
class EconomyRules:
    """Market refresh and history constants."""

    market_refresh_seconds: float = 3600.0
    price_volatility: float = 0.3  # total swing, centred on the current price
    restock_min: int = -5
    restock_max: int = 4
    market_history_limit: int = 50


@dataclass(frozen=True, slots=True)
class GuildRules:
    """Guild progression and contribution constants."""

    experience_per_level: int = 1000
    nexium_contribution_value: int = 10
    experience_divisor: int = 10
    personal_experience_ratio: float = 0.5
    member_milestone_interval: int = 5
    member_milestone_increase: int = 25
    credit_milestone_interval: int = 10
    credit_milestone_per_level: int = 1000
    default_max_members: int = 100
    power_per_level: int = 100
    power_per_member: int = 10


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    progression: ProgressionRules = ProgressionRules()
    ships: ShipRules = ShipRules()
    exploration: ExplorationRules = ExplorationRules()
    combat: CombatRules = CombatRules()
    economy: EconomyRules = EconomyRules()
    guilds: GuildRules = GuildRules()


DEFAULT_RULES = RulesConfig()


# --- Static tables --------------------------------------------------------------
# Tier N+1 never has a lower stat than tier N and always costs more.

SHIP_TIERS: Mapping[ShipType, tuple[ShipTemplate, ...]] = MappingProxyType(
    {
        ShipType.SCOUT: (
            ShipTemplate("Swiftwing", 100, 80, 20, 1, 60, 0, 0),
            ShipTemplate("Spectre", 120, 90, 25, 1, 70, 500, 10),
            ShipTemplate("Phantom", 140, 100, 30, 2, 80, 1200, 25),
            ShipTemplate("Celestial Whisper", 160, 110, 35, 2, 90, 2500, 50),
        ),
        ShipType.FIGHTER: (
            ShipTemplate("Vindicator", 150, 70, 15, 3, 40, 0, 0),
            ShipTemplate("Gladiator", 180, 75, 18, 4, 45, 600, 15),
            ShipTemplate("Annihilator", 210, 80, 21, 5, 50, 1400, 30),
            ShipTemplate("Dominator", 240, 85, 24, 6, 55, 3000, 60),
        ),
        ShipType.FREIGHTER: (
            ShipTemplate("Hauler", 200, 50, 100, 1, 30, 0, 0),
            ShipTemplate("Bulkhead", 240, 55, 125, 1, 35, 700, 20),
            ShipTemplate("Citadel", 280, 60, 150, 2, 40, 1600, 35),
            ShipTemplate("Goliath", 320, 65, 175, 2, 45, 3500, 70),
        ),
        ShipType.EXPLORER: (
            ShipTemplate("Pathfinder", 120, 60, 40, 2, 80, 0, 0),
            ShipTemplate("Horizon Seeker", 140, 65, 50, 2, 90, 550, 12),
            ShipTemplate("Nebula Navigator", 160, 70, 60, 3, 100, 1300, 28),
            ShipTemplate("Event Horizon", 180, 75, 70, 3, 110, 2800, 55),
        ),
        ShipType.BATTLECRUISER: (
            ShipTemplate("Warden", 300, 40, 30, 5, 50, 0, 0),
            ShipTemplate("Juggernaut", 360, 42, 35, 6, 55, 800, 18),
            ShipTemplate("Dreadnought", 420, 44, 40, 7, 60, 1800, 40),
            ShipTemplate("Behemoth", 480, 46, 45, 8, 65, 4000, 80),
        ),
        ShipType.FLAGSHIP: (
            ShipTemplate("Sovereign", 250, 55, 50, 4, 70, 0, 0),
            ShipTemplate("Paragon", 300, 58, 60, 5, 75, 750, 16),
            ShipTemplate("Leviathan", 350, 61, 70, 6, 80, 1700, 38),
            ShipTemplate("Imperator", 400, 64, 80, 7, 85, 3800, 75),
        ),
    }
)

# Credits for a brand-new Tier 1 hull. Scouts are only granted at registration.
SHIP_BASE_PRICES: Mapping[ShipType, int] = MappingProxyType(
    {
        ShipType.FIGHTER: 5000,
        ShipType.FREIGHTER: 8000,
        ShipType.EXPLORER: 6000,
        ShipType.BATTLECRUISER: 15000,
        ShipType.FLAGSHIP: 25000,
    }
)

STARTER_SHIP_TYPE = ShipType.SCOUT

STARTER_RESOURCES: tuple[StarterResource, ...] = (
    StarterResource(
        "Iron Ore", ResourceType.MATERIAL, 10, Rarity.COMMON, 5, "Basic metal for construction"
    ),
    StarterResource(
        "Energy Cell", ResourceType.COMPONENT, 5, Rarity.COMMON, 15, "Standard power source"
    ),
    StarterResource(
        "Basic Alloy", ResourceType.MATERIAL, 3, Rarity.UNCOMMON, 25, "Reinforced metal compound"
    ),
)

EXPLORATION_BASE_SUCCESS: Mapping[ExplorationType, float] = MappingProxyType(
    {
        ExplorationType.EXPLORATION: 0.7,
        ExplorationType.HUNTING: 0.6,
        ExplorationType.ARTIFACT_SEARCH: 0.4,
        ExplorationType.FISHING: 0.8,
    }
)

EXPLORATION_BASE_EXPERIENCE: Mapping[ExplorationType, int] = MappingProxyType(
    {
        ExplorationType.EXPLORATION: 30,
        ExplorationType.HUNTING: 40,
        ExplorationType.ARTIFACT_SEARCH: 60,
        ExplorationType.FISHING: 20,
    }
)

# Ship stat that helps each exploration type and its per-point success bonus.
EXPLORATION_SHIP_BONUS: Mapping[ExplorationType, tuple[str, float]] = MappingProxyType(
    {
        ExplorationType.EXPLORATION: ("sensors", 0.001),
        ExplorationType.HUNTING: ("weapons", 0.002),
        ExplorationType.ARTIFACT_SEARCH: ("sensors", 0.0015),
        ExplorationType.FISHING: ("speed", 0.001),
    }
)

# (exclusive upper bound, rarity); values at or above the last bound are legendary.
EXPLORATION_RARITY_THRESHOLDS: tuple[tuple[int, Rarity], ...] = (
    (20, Rarity.COMMON),
    (100, Rarity.UNCOMMON),
    (300, Rarity.RARE),
    (700, Rarity.EPIC),
)

COMBAT_RARITY_THRESHOLDS: tuple[tuple[int, Rarity], ...] = (
    (10, Rarity.COMMON),
    (50, Rarity.UNCOMMON),
    (200, Rarity.RARE),
    (500, Rarity.EPIC),
)

ENEMY_TEMPLATES: tuple[EnemyTemplate, ...] = (
    EnemyTemplate("Space Pirate", weapons=2, difficulty=1, weight=30),
    EnemyTemplate("Rogue Miner", weapons=1, difficulty=1, weight=25),
    EnemyTemplate("Alien Patrol", weapons=3, difficulty=2, weight=20),
    EnemyTemplate("Void Hunter", weapons=4, difficulty=3, weight=12),
    EnemyTemplate("Quantum Specter", weapons=2, difficulty=4, weight=8),
    EnemyTemplate("Dark Fleet Destroyer", weapons=6, difficulty=5, weight=5),
)


def initial_market_items() -> list[MarketItem]:
    """Fresh, mutable copy of the opening market catalog."""
    return [
        MarketItem(
            "Quantum Core",
            ResourceType.COMPONENT,
            2500,
            10,
            Rarity.RARE,
            "Advanced power source for ship upgrades",
        ),
        MarketItem(
            "Nexium Crystal",
            ResourceType.MATERIAL,
            180,
            50,
            Rarity.UNCOMMON,
            "Rare crystalline energy source",
        ),
        MarketItem(
            "Plasma Cannon",
            ResourceType.WEAPON,
            5000,
            5,
            Rarity.EPIC,
            "High-damage energy weapon",
        ),
        MarketItem(
            "Shield Generator",
            ResourceType.COMPONENT,
            3200,
            8,
            Rarity.RARE,
            "Defensive energy barrier system",
        ),
        MarketItem(
            "Hyperspace Fuel",
            ResourceType.MATERIAL,
            75,
            100,
            Rarity.COMMON,
            "Fuel for faster-than-light travel",
        ),
    ]


CRAFTED_ITEM_VALUES: Mapping[Rarity, int] = MappingProxyType(
    {
        Rarity.COMMON: 50,
        Rarity.UNCOMMON: 150,
        Rarity.RARE: 400,
        Rarity.EPIC: 800,
        Rarity.LEGENDARY: 1500,
    }
)

DEFAULT_GUILDS: tuple[GuildSeed, ...] = (
    GuildSeed(
        "Stellar Dominion",
        GuildType.MILITARY,
        "npc_dominion_leader",
        "Elite military guild focused on combat and territorial control",
    ),
    GuildSeed(
        "Cosmic Traders",
        GuildType.TRADE,
        "npc_trader_leader",
        "Merchant guild specializing in commerce and resource trading",
    ),
    GuildSeed(
        "Void Explorers",
        GuildType.EXPLORATION,
        "npc_explorer_leader",
        "Exploration guild dedicated to discovering new sectors and artifacts",
    ),
    GuildSeed(
        "Nexus Researchers",
        GuildType.RESEARCH,
        "npc_researcher_leader",
        "Research guild focused on technology and scientific advancement",
    ),
)
