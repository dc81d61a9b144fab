from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    discord_id: str = Field(..., min_length=1, description="External identity of the commander")
    username: str = Field(..., min_length=1, description="Display name")


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
    discord_id: str
    username: str
    level: int = Field(..., ge=1)
    experience: int = Field(..., ge=0)
    credits: int = Field(..., ge=0)
    nexium: int = Field(..., ge=0)
    active_ship_id: int | None = None
    guild_id: int | None = None
    alliance_id: int | None = None
    stats: dict[str, int] = Field(..., description="Exploration, combat, artifact and trade counts")
    last_active: datetime


class ShipRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
    user_id: int
    name: str
    type: str = Field(..., description="Ship archetype")
    tier: int = Field(..., ge=1, le=4)
    variant: str = Field(..., description="Hull name of the current tier")
    health: int = Field(..., ge=0)
    max_health: int
    speed: int
    cargo: int
    weapons: int
    sensors: int
    is_active: bool


class ShipActionRequest(BaseModel):
    ship_id: int = Field(..., description="Ship to act on; must belong to the user")


class ShipPurchaseRequest(BaseModel):
    ship_type: str = Field(..., min_length=1, description="Archetype to buy (not scout)")


class UpgradeResponse(BaseModel):
    ship: ShipRead
    credits_paid: int
    nexium_paid: int


class RepairResponse(BaseModel):
    ship: ShipRead
    cost: int


class ResourceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
    user_id: int
    name: str
    type: str
    rarity: str
    quantity: int = Field(..., ge=0)
    value: int = Field(..., description="Per-unit appraisal")
    description: str | None = None


class RewardRead(BaseModel):
    type: str = Field(..., description="credits, nexium, experience or an item kind")
    name: str
    quantity: int
    value: int


class ExperienceRead(BaseModel):
    experience_gained: int
    previous_level: int
    new_level: int
    leveled_up: bool
    rewards: list[RewardRead] = Field(default_factory=list)
