"""Game engine protocol.

The exploration, combat, economy and guild services grant experience and
rewards through this contract rather than touching progression directly.
"""

from collections.abc import Sequence
from typing import Protocol

from stellar_nexus.domain.enums import Rarity
from stellar_nexus.domain.models import ExperienceResult, Reward
from stellar_nexus.models import User


class IGameEngine(Protocol):
    """Protocol for experience and reward application."""

    def gain_experience(self, user_id: int, amount: int) -> ExperienceResult:
        """Add experience, recompute the level and return the level-up rewards.

        Args:
            user_id: The user gaining experience
            amount: Non-negative experience amount

        Returns:
            ExperienceResult whose ``rewards`` the caller must apply
        """
        ...

    def apply_rewards(
        self,
        user: User,
        rewards: Sequence[Reward],
        *,
        rarity_thresholds: tuple[tuple[int, Rarity], ...] | None = None,
    ) -> None:
        """Credit every reward to ``user``.

        Args:
            user: The recipient
            rewards: Rewards to apply
            rarity_thresholds: Per-unit value thresholds used to classify
                stacked items; defaults to the exploration thresholds
        """
        ...
