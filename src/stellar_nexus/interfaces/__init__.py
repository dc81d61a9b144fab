"""Protocol-based interfaces for Stellar Nexus services.

Services depend on these contracts; ``factory.py`` wires the production
implementations and tests may inject fakes.
"""

from stellar_nexus.interfaces.engine import IGameEngine
from stellar_nexus.interfaces.storage import IGameStorage

__all__ = ["IGameEngine", "IGameStorage"]
