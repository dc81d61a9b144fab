"""Pure game rules for Stellar Nexus.

This package holds everything that can run without a database:

* Value types and enumerations (see :mod:`models` and :mod:`enums`).
* The error hierarchy raised by services (see :mod:`errors`).
* Rule configuration and static balancing tables (see :mod:`rules_config`).
* Rule functions for progression, rewards, exploration, combat, the market
  and guilds. Every function that rolls dice takes a ``random.Random``.
"""

from . import (
    combat,
    economy,
    enums,
    errors,
    exploration,
    guilds,
    models,
    progression,
    rewards,
    rules_config,
)

__all__ = [
    "combat",
    "economy",
    "enums",
    "errors",
    "exploration",
    "guilds",
    "models",
    "progression",
    "rewards",
    "rules_config",
]
