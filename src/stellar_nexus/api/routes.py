"""HTTP routes for the Stellar Nexus API."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, status

from stellar_nexus.api.runtime import ApiState
from stellar_nexus.database import check_database_health
from stellar_nexus.domain.errors import NotFoundError
from stellar_nexus.domain.models import ExperienceResult, Reward
from stellar_nexus.factory import GameServices
from stellar_nexus.schemas import (
    AllianceCreate,
    AllianceRead,
    BuyRequest,
    CombatLogRead,
    ContributeRequest,
    ContributionResponse,
    CraftRequest,
    CraftResponse,
    EnemyRead,
    ExperienceRead,
    ExplorationRead,
    ExplorationResponse,
    ExploreRequest,
    GuildRankingRead,
    GuildRead,
    JoinGuildRequest,
    JoinGuildResponse,
    MarketDealRead,
    MarketItemRead,
    MarketTransactionRead,
    MilestoneRead,
    PurchaseResponse,
    PveRequest,
    PveResponse,
    PvpRequest,
    PvpResponse,
    PvpSideRead,
    RecipeRead,
    RepairResponse,
    ResourceRead,
    RewardRead,
    SaleResponse,
    SectorRead,
    SellRequest,
    ShipActionRequest,
    ShipPurchaseRequest,
    ShipRead,
    UpgradeResponse,
    UserCreate,
    UserRead,
)

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


def get_services(state: ApiStateDep) -> Iterator[GameServices]:
    with state.services() as services:
        yield services


ServicesDep = Annotated[GameServices, Depends(get_services)]
LimitQuery = Annotated[int, Query(ge=1, le=100)]


def _rewards(rewards: list[Reward]) -> list[RewardRead]:
    return [RewardRead.model_validate(reward.to_dict()) for reward in rewards]


def _experience(result: ExperienceResult) -> ExperienceRead:
    return ExperienceRead(
        experience_gained=result.experience_gained,
        previous_level=result.previous_level,
        new_level=result.new_level,
        leveled_up=result.leveled_up,
        rewards=_rewards(result.rewards),
    )


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "database": check_database_health(state.db_engine),
        "market_last_refresh": state.market.last_refresh.isoformat(),
    }


# --- users and fleet --------------------------------------------------------------


@router.post("/users/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(request: UserCreate, services: ServicesDep) -> UserRead:
    user = services.engine.register_user(request.discord_id, request.username)
    return UserRead.model_validate(user)


@router.get("/users/{discord_id}", response_model=UserRead)
async def get_user(discord_id: str, services: ServicesDep) -> UserRead:
    user = services.engine.get_user_by_discord_id(discord_id)
    if user is None:
        raise NotFoundError("user", discord_id)
    return UserRead.model_validate(user)


@router.get("/ships/catalog")
async def ship_catalog(services: ServicesDep) -> dict[str, Any]:
    return services.engine.get_ship_catalog()


@router.get("/users/{user_id}/ships", response_model=list[ShipRead])
async def list_ships(user_id: int, services: ServicesDep) -> list[ShipRead]:
    return [ShipRead.model_validate(ship) for ship in services.engine.get_user_ships(user_id)]


@router.post("/users/{user_id}/ships/activate", response_model=ShipRead)
async def activate_ship(
    user_id: int, request: ShipActionRequest, services: ServicesDep
) -> ShipRead:
    ship = services.engine.activate_ship(user_id, request.ship_id)
    return ShipRead.model_validate(ship)


@router.post("/users/{user_id}/ships/upgrade", response_model=UpgradeResponse)
async def upgrade_ship(
    user_id: int, request: ShipActionRequest, services: ServicesDep
) -> UpgradeResponse:
    result = services.engine.upgrade_ship(user_id, request.ship_id)
    return UpgradeResponse(
        ship=ShipRead.model_validate(result.ship),
        credits_paid=result.credits_paid,
        nexium_paid=result.nexium_paid,
    )


@router.post(
    "/users/{user_id}/ships/purchase",
    response_model=ShipRead,
    status_code=status.HTTP_201_CREATED,
)
async def purchase_ship(
    user_id: int, request: ShipPurchaseRequest, services: ServicesDep
) -> ShipRead:
    ship = services.engine.purchase_ship(user_id, request.ship_type)
    return ShipRead.model_validate(ship)


@router.post("/users/{user_id}/ships/repair", response_model=RepairResponse)
async def repair_ship(
    user_id: int, request: ShipActionRequest, services: ServicesDep
) -> RepairResponse:
    result = services.engine.repair_ship(user_id, request.ship_id)
    return RepairResponse(ship=ShipRead.model_validate(result.ship), cost=result.cost)


@router.get("/users/{user_id}/resources", response_model=list[ResourceRead])
async def list_resources(user_id: int, services: ServicesDep) -> list[ResourceRead]:
    resources = services.engine.get_user_resources(user_id)
    return [ResourceRead.model_validate(resource) for resource in resources]


# --- exploration ------------------------------------------------------------------


@router.post("/users/{user_id}/explore", response_model=ExplorationResponse)
async def explore(
    user_id: int, request: ExploreRequest, services: ServicesDep
) -> ExplorationResponse:
    outcome = services.exploration.explore(user_id, request.exploration_type, request.sector)
    return ExplorationResponse(
        exploration_id=outcome.exploration_id,
        sector=outcome.sector.to_dict(),
        success=outcome.success,
        success_chance=outcome.roll.success_chance,
        roll=outcome.roll.roll,
        ship_bonus=outcome.roll.ship_bonus,
        rewards=_rewards(outcome.rewards),
        experience=_experience(outcome.experience),
    )


@router.get("/users/{user_id}/explorations", response_model=list[ExplorationRead])
async def exploration_history(
    user_id: int, services: ServicesDep, limit: LimitQuery = 10
) -> list[ExplorationRead]:
    history = services.exploration.get_exploration_history(user_id, limit)
    return [ExplorationRead.model_validate(row) for row in history]


@router.get("/sectors", response_model=list[SectorRead])
async def available_sectors(
    services: ServicesDep, level: Annotated[int, Query(ge=1)] = 1
) -> list[SectorRead]:
    sectors = services.exploration.get_available_sectors(level)
    return [SectorRead.model_validate(sector.to_dict()) for sector in sectors]


# --- combat -----------------------------------------------------------------------


@router.post("/users/{user_id}/combat/pve", response_model=PveResponse)
async def pve_combat(user_id: int, request: PveRequest, services: ServicesDep) -> PveResponse:
    outcome = services.combat.pve_combat(user_id, request.enemy_type)
    resolution = outcome.resolution
    return PveResponse(
        combat_log_id=outcome.combat_log_id,
        victory=outcome.victory,
        enemy=EnemyRead.model_validate(outcome.enemy.to_dict()),
        player_roll=resolution.player_roll,
        enemy_roll=resolution.enemy_roll,
        attacker_damage=resolution.attacker_damage,
        defender_damage=resolution.defender_damage,
        ship_health=resolution.ship_health,
        rewards=_rewards(resolution.rewards),
        experience=_experience(outcome.experience),
    )


@router.post("/users/{user_id}/combat/pvp", response_model=PvpResponse)
async def pvp_combat(user_id: int, request: PvpRequest, services: ServicesDep) -> PvpResponse:
    outcome = services.combat.pvp_combat(user_id, request.defender_id)
    attacker, defender = outcome.resolution.attacker, outcome.resolution.defender
    return PvpResponse(
        combat_log_id=outcome.combat_log_id,
        winner_id=outcome.winner_id,
        attacker=PvpSideRead(
            user_id=outcome.attacker_id,
            roll=attacker.roll,
            damage_dealt=attacker.damage_dealt,
            damage_received=attacker.damage_received,
            remaining_health=attacker.remaining_health,
            experience=_experience(outcome.attacker_experience),
        ),
        defender=PvpSideRead(
            user_id=outcome.defender_id,
            roll=defender.roll,
            damage_dealt=defender.damage_dealt,
            damage_received=defender.damage_received,
            remaining_health=defender.remaining_health,
            experience=_experience(outcome.defender_experience),
        ),
    )


@router.get("/users/{user_id}/combat", response_model=list[CombatLogRead])
async def combat_history(
    user_id: int, services: ServicesDep, limit: LimitQuery = 10
) -> list[CombatLogRead]:
    return [
        CombatLogRead.model_validate(log)
        for log in services.combat.get_combat_history(user_id, limit)
    ]


# --- market and crafting ----------------------------------------------------------


@router.get("/market/items", response_model=list[MarketItemRead])
async def market_items(services: ServicesDep) -> list[MarketItemRead]:
    return [
        MarketItemRead.model_validate(item.to_dict())
        for item in services.economy.get_market_items()
    ]


@router.post("/market/buy", response_model=PurchaseResponse)
async def buy_item(request: BuyRequest, services: ServicesDep) -> PurchaseResponse:
    result = services.economy.buy_item(request.user_id, request.item_name, request.quantity)
    return PurchaseResponse(
        item=MarketItemRead.model_validate(result.item.to_dict()),
        quantity=result.quantity,
        total_price=result.total_price,
        resource=ResourceRead.model_validate(result.resource),
    )


@router.post("/market/sell", response_model=SaleResponse)
async def sell_resource(request: SellRequest, services: ServicesDep) -> SaleResponse:
    result = services.economy.sell_resource(
        request.user_id, request.resource_id, request.quantity, request.price_per_unit
    )
    return SaleResponse(
        resource_name=result.resource_name,
        quantity=result.quantity,
        price_per_unit=result.price_per_unit,
        total_income=result.total_income,
        remaining=result.remaining,
    )


@router.get("/market/history", response_model=list[MarketTransactionRead])
async def market_history(
    services: ServicesDep, limit: LimitQuery = 50
) -> list[MarketTransactionRead]:
    return [
        MarketTransactionRead.model_validate(row)
        for row in services.economy.get_market_history(limit)
    ]


@router.get("/market/deals", response_model=list[MarketDealRead])
async def daily_deals(
    services: ServicesDep, level: Annotated[int, Query(ge=1)] = 1
) -> list[MarketDealRead]:
    deals = services.economy.generate_daily_deals(level)
    return [MarketDealRead.model_validate(deal.to_dict()) for deal in deals]


@router.get("/recipes", response_model=list[RecipeRead])
async def list_recipes(services: ServicesDep) -> list[RecipeRead]:
    return [RecipeRead.model_validate(recipe) for recipe in services.economy.get_all_recipes()]


@router.post("/users/{user_id}/craft", response_model=CraftResponse)
async def craft_item(user_id: int, request: CraftRequest, services: ServicesDep) -> CraftResponse:
    result = services.economy.craft_item(user_id, request.recipe_id)
    return CraftResponse(
        recipe=RecipeRead.model_validate(result.recipe),
        resource=ResourceRead.model_validate(result.resource),
        quantity=result.quantity,
        consumed=result.consumed,
    )


# --- guilds and alliances ---------------------------------------------------------


@router.get("/guilds", response_model=list[GuildRead])
async def list_guilds(services: ServicesDep) -> list[GuildRead]:
    return [GuildRead.model_validate(guild) for guild in services.guilds.get_all_guilds()]


@router.get("/guilds/rankings", response_model=list[GuildRankingRead])
async def guild_rankings(services: ServicesDep) -> list[GuildRankingRead]:
    return [
        GuildRankingRead(
            rank=ranking.rank,
            guild=GuildRead.model_validate(ranking.guild),
            power=ranking.power,
        )
        for ranking in services.guilds.get_guild_rankings()
    ]


@router.get("/guilds/{guild_id}/members", response_model=list[UserRead])
async def guild_members(guild_id: int, services: ServicesDep) -> list[UserRead]:
    return [UserRead.model_validate(user) for user in services.guilds.get_guild_members(guild_id)]


@router.post("/users/{user_id}/guild/join", response_model=JoinGuildResponse)
async def join_guild(
    user_id: int, request: JoinGuildRequest, services: ServicesDep
) -> JoinGuildResponse:
    result = services.guilds.join_guild(user_id, request.guild_id)
    return JoinGuildResponse(
        success=result.success,
        message=result.message,
        guild=GuildRead.model_validate(result.guild) if result.guild is not None else None,
        reason=result.reason,
    )


@router.post("/users/{user_id}/guild/leave", response_model=GuildRead)
async def leave_guild(user_id: int, services: ServicesDep) -> GuildRead:
    return GuildRead.model_validate(services.guilds.leave_guild(user_id))


@router.post("/users/{user_id}/guild/contribute", response_model=ContributionResponse)
async def contribute(
    user_id: int, request: ContributeRequest, services: ServicesDep
) -> ContributionResponse:
    outcome = services.guilds.contribute(user_id, request.resource_type, request.amount)
    contribution = outcome.contribution
    return ContributionResponse(
        guild=GuildRead.model_validate(outcome.guild),
        value=contribution.value,
        guild_experience=contribution.guild_experience,
        personal_experience=contribution.personal_experience,
        previous_level=contribution.previous_level,
        new_level=contribution.new_level,
        milestones=[MilestoneRead.model_validate(m.to_dict()) for m in contribution.milestones],
        experience=_experience(outcome.experience) if outcome.experience is not None else None,
    )


@router.get("/alliances", response_model=list[AllianceRead])
async def list_alliances(services: ServicesDep) -> list[AllianceRead]:
    return [AllianceRead.model_validate(a) for a in services.guilds.get_all_alliances()]


@router.post(
    "/users/{user_id}/alliances",
    response_model=AllianceRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_alliance(
    user_id: int, request: AllianceCreate, services: ServicesDep
) -> AllianceRead:
    alliance = services.guilds.create_alliance(user_id, request.name, request.description)
    return AllianceRead.model_validate(alliance)


@router.get("/alliances/{alliance_id}/members", response_model=list[UserRead])
async def alliance_members(alliance_id: int, services: ServicesDep) -> list[UserRead]:
    members = services.guilds.get_alliance_members(alliance_id)
    return [UserRead.model_validate(user) for user in members]
