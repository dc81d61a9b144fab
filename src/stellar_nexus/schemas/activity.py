from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .player import ExperienceRead, RewardRead


class ExploreRequest(BaseModel):
    exploration_type: str = Field(
        ..., description="exploration, hunting, artifact_search or fishing"
    )
    sector: str = Field(default="auto", min_length=1, description="Sector name or 'auto'")


class ExplorationResponse(BaseModel):
    exploration_id: int
    sector: dict[str, Any] = Field(..., description="Generated sector data")
    success: bool
    success_chance: float
    roll: float
    ship_bonus: float
    rewards: list[RewardRead]
    experience: ExperienceRead


class ExplorationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
    user_id: int
    ship_id: int | None = None
    sector: str
    type: str
    success: bool
    experience_gained: int
    rewards: list[dict[str, Any]]
    details: dict[str, Any]
    timestamp: datetime


class SectorRead(BaseModel):
    name: str
    difficulty: int = Field(..., ge=1, le=5)
    discovered: bool


class PveRequest(BaseModel):
    enemy_type: str = Field(default="random", description="Enemy name fragment or 'random'")


class PvpRequest(BaseModel):
    defender_id: int = Field(..., description="User to attack")


class EnemyRead(BaseModel):
    name: str
    difficulty: int
    weapons: int
    power: int
    health: int


class PveResponse(BaseModel):
    combat_log_id: int
    victory: bool
    enemy: EnemyRead
    player_roll: float
    enemy_roll: float
    attacker_damage: int
    defender_damage: int
    ship_health: int
    rewards: list[RewardRead]
    experience: ExperienceRead


class PvpSideRead(BaseModel):
    user_id: int
    roll: float
    damage_dealt: int
    damage_received: int
    remaining_health: int
    experience: ExperienceRead


class PvpResponse(BaseModel):
    combat_log_id: int
    winner_id: int
    attacker: PvpSideRead
    defender: PvpSideRead


class CombatLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
    attacker_id: int
    defender_id: int | None = None
    type: str = Field(..., description="pve or pvp")
    winner: str = Field(..., description="Winning user id, or 'enemy'")
    enemy: dict[str, Any] | None = None
    attacker_damage: int
    defender_damage: int
    experience_gained: int
    rewards: list[dict[str, Any]]
    timestamp: datetime
