"""SQLAlchemy models for Stellar Nexus.

This module exports all database models and the seed data functions.
"""

from .base import Base, TimestampCreatedMixin, utc_now
from .guild import Alliance, Guild
from .history import CombatLog, Exploration, MarketTransaction
from .recipe import Recipe
from .resource import Resource
from .seed_data import seed_recipes
from .ship import Ship
from .user import STAT_FIELDS, User

__all__ = [
    "STAT_FIELDS",
    "Alliance",
    "Base",
    "CombatLog",
    "Exploration",
    "Guild",
    "MarketTransaction",
    "Recipe",
    "Resource",
    "Ship",
    "TimestampCreatedMixin",
    "User",
    "seed_recipes",
    "utc_now",
]
