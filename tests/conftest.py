"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`stellar_nexus` package without requiring an editable install in CI. It
also provides the shared database and random-source fixtures.
"""

import random
import sys
from collections.abc import Iterable
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from stellar_nexus.models import Base  # noqa: E402
from stellar_nexus.repository.storage import GameStorage  # noqa: E402
from stellar_nexus.services.game_engine import GameEngine  # noqa: E402


class ScriptedRandom(random.Random):
    """``random.Random`` whose ``random()`` replays scripted draws first.

    Integer helpers (``randint``, ``randrange``, ``choice``) keep using the
    seeded generator, so a script only needs the uniform draws a rule makes.
    Once the script runs out, ``random()`` falls back to the seeded stream.
    """

    def __init__(self, draws: Iterable[float] = (), seed: int = 0) -> None:
        super().__init__(seed)
        self.draws = list(draws)

    def random(self) -> float:
        if self.draws:
            return self.draws.pop(0)
        return super().random()

    # Overriding random() alone makes random.Random route integer draws
    # through random(); defining getrandbits keeps them on the seeded stream.
    def getrandbits(self, k: int) -> int:
        return super().getrandbits(k)


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing and dispose it after use."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine):
    """Create a new database session for a test."""
    Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)  # noqa: N806
    session = Session()
    yield session
    session.close()


@pytest.fixture
def storage(session):
    return GameStorage(session)


@pytest.fixture
def game_engine(storage):
    return GameEngine(storage, random.Random(1234))


@pytest.fixture
def player(game_engine):
    """A freshly registered commander with the starter scout and bundle."""
    return game_engine.register_user("100", "nova")


@pytest.fixture
def rival(game_engine):
    return game_engine.register_user("200", "vega")
