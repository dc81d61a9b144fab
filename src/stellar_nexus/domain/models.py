"""Value types shared by the Stellar Nexus rule functions.

These dataclasses are the in-memory currency of the domain layer. Rule
functions never touch the ORM; services translate persisted rows into these
types and write the results back through the persistence gateway.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .enums import GuildType, Rarity, ResourceType, RewardType

# --- Static table rows ----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ShipTemplate:
    """Hand-authored stats and price of one (archetype, tier) cell."""

    variant: str
    health: int
    speed: int
    cargo: int
    weapons: int
    sensors: int
    cost: int
    nexium_cost: int


@dataclass(frozen=True, slots=True)
class StarterResource:
    name: str
    type: ResourceType
    quantity: int
    rarity: Rarity
    value: int
    description: str


@dataclass(frozen=True, slots=True)
class EnemyTemplate:
    """Row of the enemy table; ``weight`` is the relative selection weight."""

    name: str
    weapons: int
    difficulty: int
    weight: int


@dataclass(frozen=True, slots=True)
class GuildSeed:
    name: str
    type: GuildType
    leader_id: str
    description: str


# --- Runtime values -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ShipStats:
    """Combat-relevant snapshot of a ship."""

    health: int
    max_health: int
    speed: int
    cargo: int
    weapons: int
    sensors: int

    @property
    def power(self) -> int:
        """Overall strength used for PvE rolls."""
        return self.health + self.speed + self.weapons * 20 + self.sensors


@dataclass(frozen=True, slots=True)
class Reward:
    """A single granted reward.

    ``kind`` decides how the reward is applied: currencies add to the user's
    balance (credits use ``value``, nexium uses ``quantity``), experience goes
    through the progression rules, and every other kind stacks an inventory
    resource of ``quantity`` units valued at ``value``.
    """

    kind: RewardType
    name: str
    quantity: int = 1
    value: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": str(self.kind),
            "name": self.name,
            "quantity": self.quantity,
            "value": self.value,
        }


@dataclass(frozen=True, slots=True)
class Enemy:
    """A generated PvE opponent."""

    name: str
    difficulty: int
    weapons: int
    power: int
    health: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "difficulty": self.difficulty,
            "weapons": self.weapons,
            "power": self.power,
            "health": self.health,
        }


@dataclass(slots=True)
class ExperienceResult:
    """Outcome of granting experience to a user."""

    experience_gained: int
    previous_level: int
    new_level: int
    rewards: list[Reward] = field(default_factory=list)

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.previous_level


@dataclass(slots=True)
class MarketItem:
    """Entry of the in-memory NPC market catalog."""

    name: str
    type: ResourceType
    price: int
    available: int
    rarity: Rarity
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": str(self.type),
            "price": self.price,
            "available": self.available,
            "rarity": str(self.rarity),
            "description": self.description,
        }
