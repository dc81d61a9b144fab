"""Service layer for the Stellar Nexus rules engine.

Services own every state transition. Each one works through the
persistence gateway (``IGameStorage``) and, where it grants experience or
rewards, through the game engine (``IGameEngine``):

- GameEngine: registration, fleet management, experience and reward application
- ExplorationService: explorations and sector listings
- CombatService: PvE encounters, PvP duels and combat history
- EconomyService: NPC market, player sales, crafting and daily deals
- GuildService: guild membership, contributions, rankings and alliances

Production Usage:
    from stellar_nexus.factory import create_services
    services = create_services(session, market=market, streams=streams)
    outcome = services.exploration.explore(user.id, "hunting")

Testing Usage:
    from stellar_nexus.repository.storage import GameStorage
    from stellar_nexus.services.game_engine import GameEngine

    engine = GameEngine(GameStorage(session), random.Random(7))
    user = engine.register_user("1234", "nova")
"""

from stellar_nexus.services.combat_service import CombatService
from stellar_nexus.services.economy_service import EconomyService
from stellar_nexus.services.exploration_service import ExplorationService
from stellar_nexus.services.game_engine import GameEngine
from stellar_nexus.services.guild_service import GuildService

__all__ = [
    "CombatService",
    "EconomyService",
    "ExplorationService",
    "GameEngine",
    "GuildService",
]
