"""Service Factory for Stellar Nexus.

This module provides factory functions for creating service instances with
proper dependency wiring. Use these functions in production code to ensure
all service dependencies share one persistence gateway and the right
random streams.

For testing, construct services directly with a seeded ``random.Random``.

Example:
    # Production usage
    from stellar_nexus.factory import create_rng_streams, create_services
    streams = create_rng_streams(settings.rng_seed)
    services = create_services(session, market=market, streams=streams)
    services.combat.pve_combat(user.id)

    # Testing usage
    from stellar_nexus.repository.storage import GameStorage
    from stellar_nexus.services.game_engine import GameEngine

    engine = GameEngine(GameStorage(session), random.Random(3))
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from sqlalchemy.orm import Session

from stellar_nexus.domain.economy import Clock, MarketCatalog
from stellar_nexus.domain.rules_config import DEFAULT_RULES, RulesConfig
from stellar_nexus.generators.content import ContentGenerator
from stellar_nexus.repository.storage import GameStorage
from stellar_nexus.services.combat_service import CombatService
from stellar_nexus.services.economy_service import EconomyService
from stellar_nexus.services.exploration_service import ExplorationService
from stellar_nexus.services.game_engine import GameEngine
from stellar_nexus.services.guild_service import GuildService
from stellar_nexus.utils.rng import generate_seed, make_rng

STREAM_NAMES = ("engine", "exploration", "combat", "content", "market", "recipes")


@dataclass(slots=True)
class RngStreams:
    """One independent random source per subsystem."""

    engine: random.Random
    exploration: random.Random
    combat: random.Random
    content: random.Random
    market: random.Random
    recipes: random.Random


@dataclass(slots=True)
class GameServices:
    """Every service bound to one session."""

    storage: GameStorage
    engine: GameEngine
    exploration: ExplorationService
    combat: CombatService
    economy: EconomyService
    guilds: GuildService


def create_rng_streams(seed: str | int | None = None) -> RngStreams:
    """Create the per-subsystem random streams.

    Args:
        seed: Base seed; each stream derives its own seed from it. ``None``
            seeds every stream from OS entropy.

    Returns:
        RngStreams with one generator per subsystem
    """
    if seed is None:
        return RngStreams(*(make_rng() for _ in STREAM_NAMES))
    return RngStreams(*(make_rng(generate_seed(name, seed)) for name in STREAM_NAMES))


def create_market_catalog(
    rng: random.Random,
    *,
    refresh_interval_seconds: float | None = None,
    clock: Clock | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> MarketCatalog:
    """Create the process-wide NPC market.

    Args:
        rng: Random source for price drift and restocking
        refresh_interval_seconds: Override of the rules' refresh interval
        clock: Time source; defaults to the UTC wall clock
        rules: Rules providing volatility and restock ranges

    Returns:
        MarketCatalog stocked with the opening items
    """
    if clock is None:
        return MarketCatalog(
            rng=rng, rules=rules.economy, refresh_interval_seconds=refresh_interval_seconds
        )
    return MarketCatalog(
        rng=rng,
        clock=clock,
        rules=rules.economy,
        refresh_interval_seconds=refresh_interval_seconds,
    )


def create_game_engine(
    session: Session, rng: random.Random, *, rules: RulesConfig = DEFAULT_RULES
) -> GameEngine:
    """Create a GameEngine with all dependencies.

    Args:
        session: Database session
        rng: Random source for ship names and level-up rewards
        rules: Rules configuration

    Returns:
        Fully initialized GameEngine
    """
    return GameEngine(GameStorage(session), rng, rules)


def create_guild_service(
    session: Session, streams: RngStreams, *, rules: RulesConfig = DEFAULT_RULES
) -> GuildService:
    """Create a GuildService with all dependencies.

    Args:
        session: Database session
        streams: Random streams; the engine stream rolls level-up rewards
        rules: Rules configuration

    Returns:
        Fully initialized GuildService with GameEngine dependency
    """
    storage = GameStorage(session)
    return GuildService(storage, GameEngine(storage, streams.engine, rules), rules)


def create_services(
    session: Session,
    *,
    market: MarketCatalog,
    streams: RngStreams,
    rules: RulesConfig = DEFAULT_RULES,
) -> GameServices:
    """Create every service around one shared persistence gateway.

    Sharing the gateway lets a service call the game engine inside its own
    transaction.

    Args:
        session: Database session
        market: The process-wide NPC market
        streams: Random streams for each subsystem
        rules: Rules configuration

    Returns:
        GameServices bundle
    """
    storage = GameStorage(session)
    engine = GameEngine(storage, streams.engine, rules)
    content = ContentGenerator(streams.content)
    return GameServices(
        storage=storage,
        engine=engine,
        exploration=ExplorationService(storage, engine, content, streams.exploration, rules),
        combat=CombatService(storage, engine, streams.combat, rules),
        economy=EconomyService(storage, market, content, rules),
        guilds=GuildService(storage, engine, rules),
    )
