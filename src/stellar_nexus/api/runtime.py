"""Runtime primitives backing the Stellar Nexus HTTP API."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from stellar_nexus.config import Settings, get_settings
from stellar_nexus.database import create_db_engine, create_session_factory, init_db
from stellar_nexus.domain.economy import Clock
from stellar_nexus.domain.rules_config import DEFAULT_RULES, RulesConfig
from stellar_nexus.factory import (
    GameServices,
    create_guild_service,
    create_market_catalog,
    create_rng_streams,
    create_services,
)
from stellar_nexus.models.seed_data import seed_recipes

logger = logging.getLogger(__name__)


class ApiState:
    """Process-wide resources shared by the FastAPI layer.

    Holds the database engine, the NPC market and the random streams. Each
    request gets its own session and service bundle through :meth:`services`.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        rules: RulesConfig = DEFAULT_RULES,
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        self.db_engine = create_db_engine(self.settings)
        self.session_factory = create_session_factory(self.db_engine)
        self.streams = create_rng_streams(self.settings.rng_seed)
        self.market = create_market_catalog(
            self.streams.market,
            refresh_interval_seconds=self.settings.market_refresh_interval_seconds,
            clock=clock,
            rules=rules,
        )

    def startup(self) -> None:
        """Create missing tables and seed the default guilds and recipe book."""
        init_db(self.db_engine)
        with self.session_factory() as session:
            guilds = create_guild_service(session, self.streams, rules=self.rules)
            guilds.initialize_default_guilds()
            seeded = seed_recipes(session, self.streams.recipes, self.settings.recipe_book_level)
            session.commit()
        logger.info("Game database ready (%d recipes seeded)", seeded)

    @contextmanager
    def services(self) -> Iterator[GameServices]:
        session = self.session_factory()
        try:
            yield create_services(
                session, market=self.market, streams=self.streams, rules=self.rules
            )
        finally:
            session.close()

    async def shutdown(self) -> None:
        self.db_engine.dispose()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
