from .activity import (
    CombatLogRead,
    EnemyRead,
    ExplorationRead,
    ExplorationResponse,
    ExploreRequest,
    PveRequest,
    PveResponse,
    PvpRequest,
    PvpResponse,
    PvpSideRead,
    SectorRead,
)
from .guild import (
    AllianceCreate,
    AllianceRead,
    ContributeRequest,
    ContributionResponse,
    GuildRankingRead,
    GuildRead,
    JoinGuildRequest,
    JoinGuildResponse,
    MilestoneRead,
)
from .market import (
    BuyRequest,
    CraftRequest,
    CraftResponse,
    MarketDealRead,
    MarketItemRead,
    MarketTransactionRead,
    PurchaseResponse,
    RecipeRead,
    SaleResponse,
    SellRequest,
)
from .player import (
    ExperienceRead,
    RepairResponse,
    ResourceRead,
    RewardRead,
    ShipActionRequest,
    ShipPurchaseRequest,
    ShipRead,
    UpgradeResponse,
    UserCreate,
    UserRead,
)

__all__ = [
    "AllianceCreate",
    "AllianceRead",
    "BuyRequest",
    "CombatLogRead",
    "ContributeRequest",
    "ContributionResponse",
    "CraftRequest",
    "CraftResponse",
    "EnemyRead",
    "ExperienceRead",
    "ExplorationRead",
    "ExplorationResponse",
    "ExploreRequest",
    "GuildRankingRead",
    "GuildRead",
    "JoinGuildRequest",
    "JoinGuildResponse",
    "MarketDealRead",
    "MarketItemRead",
    "MarketTransactionRead",
    "MilestoneRead",
    "PurchaseResponse",
    "PveRequest",
    "PveResponse",
    "PvpRequest",
    "PvpResponse",
    "PvpSideRead",
    "RecipeRead",
    "RepairResponse",
    "ResourceRead",
    "RewardRead",
    "SaleResponse",
    "SectorRead",
    "SellRequest",
    "ShipActionRequest",
    "ShipPurchaseRequest",
    "ShipRead",
    "UpgradeResponse",
    "UserCreate",
    "UserRead",
]
