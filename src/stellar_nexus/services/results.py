"""Result types returned by the game services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from stellar_nexus.domain.combat import PveResolution, PvpResolution
from stellar_nexus.domain.errors import GameError
from stellar_nexus.domain.exploration import ExplorationRoll
from stellar_nexus.domain.guilds import Contribution
from stellar_nexus.domain.models import Enemy, ExperienceResult, MarketItem, Reward

if TYPE_CHECKING:
    from stellar_nexus.generators.content import Sector
    from stellar_nexus.models import Guild, Recipe, Resource, Ship


@dataclass(slots=True)
class UpgradeResult:
    ship: Ship
    credits_paid: int
    nexium_paid: int


@dataclass(slots=True)
class RepairResult:
    ship: Ship
    cost: int


@dataclass(slots=True)
class ExplorationOutcome:
    """Everything an exploration changed, as stored in its history row."""

    exploration_id: int
    sector: Sector
    roll: ExplorationRoll
    experience: ExperienceResult

    @property
    def success(self) -> bool:
        return self.roll.success

    @property
    def rewards(self) -> list[Reward]:
        return self.roll.rewards


@dataclass(slots=True)
class PveOutcome:
    combat_log_id: int
    resolution: PveResolution
    experience: ExperienceResult

    @property
    def victory(self) -> bool:
        return self.resolution.player_won

    @property
    def enemy(self) -> Enemy:
        return self.resolution.enemy


@dataclass(slots=True)
class PvpOutcome:
    combat_log_id: int
    attacker_id: int
    defender_id: int
    resolution: PvpResolution
    attacker_experience: ExperienceResult
    defender_experience: ExperienceResult

    @property
    def winner_id(self) -> int:
        return self.attacker_id if self.resolution.attacker_won else self.defender_id


@dataclass(slots=True)
class PurchaseResult:
    item: MarketItem
    quantity: int
    total_price: int
    resource: Resource


@dataclass(slots=True)
class SaleResult:
    resource_name: str
    quantity: int
    price_per_unit: int
    total_income: int
    remaining: int


@dataclass(slots=True)
class CraftResult:
    recipe: Recipe
    resource: Resource
    quantity: int
    consumed: dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class JoinGuildResult:
    """Outcome of a join attempt; rejected joins change nothing."""

    success: bool
    message: str
    guild: Guild | None = None
    reason: str | None = None

    @classmethod
    def rejected(cls, error: GameError) -> JoinGuildResult:
        return cls(success=False, message=error.message, reason=error.code)


@dataclass(slots=True)
class ContributionOutcome:
    contribution: Contribution
    guild: Guild
    experience: ExperienceResult | None = None


@dataclass(frozen=True, slots=True)
class GuildRanking:
    rank: int
    guild: Guild
    power: int
