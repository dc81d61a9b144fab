from pydantic import BaseModel, ConfigDict, Field

from .player import ExperienceRead


class GuildRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
    name: str
    type: str = Field(..., description="military, trade, exploration or research")
    description: str | None = None
    level: int = Field(..., ge=1)
    experience: int = Field(..., ge=0)
    member_count: int
    max_members: int
    leader_id: str


class GuildRankingRead(BaseModel):
    rank: int = Field(..., ge=1)
    guild: GuildRead
    power: int


class JoinGuildRequest(BaseModel):
    guild_id: int


class JoinGuildResponse(BaseModel):
    success: bool
    message: str
    guild: GuildRead | None = None
    reason: str | None = Field(None, description="Error code when the join was rejected")


class ContributeRequest(BaseModel):
    resource_type: str = Field(..., description="credits or nexium")
    amount: int = Field(..., description="Must be at least 1")


class MilestoneRead(BaseModel):
    level: int
    type: str
    value: int


class ContributionResponse(BaseModel):
    guild: GuildRead
    value: int
    guild_experience: int
    personal_experience: int
    previous_level: int
    new_level: int
    milestones: list[MilestoneRead]
    experience: ExperienceRead | None = None


class AllianceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    description: str | None = None


class AllianceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
    name: str
    description: str | None = None
    leader_id: int
    member_count: int
    max_members: int
    fleet_power: int
