"""Unit tests for guild progression rules."""

from types import SimpleNamespace

import pytest
from hypothesis import given
from hypothesis import strategies as st

from stellar_nexus.domain.enums import ContributionType, MilestoneType
from stellar_nexus.domain.errors import InvalidRequestError
from stellar_nexus.domain.guilds import (
    GuildMilestone,
    evaluate_contribution,
    guild_level,
    guild_power,
    milestones_between,
    rank_guilds,
)


class TestContribution:
    def test_credits(self):
        contribution = evaluate_contribution("credits", 1000, 0)
        assert contribution.resource_type is ContributionType.CREDITS
        assert contribution.value == 1000
        assert contribution.guild_experience == 100
        assert contribution.personal_experience == 50
        assert not contribution.leveled_up
        assert contribution.milestones == []

    def test_nexium_is_worth_ten_credits(self):
        contribution = evaluate_contribution("nexium", 50, 0)
        assert contribution.value == 500
        assert contribution.guild_experience == 50

    def test_level_up_unlocks_milestone(self):
        contribution = evaluate_contribution("credits", 1000, 3990)
        assert (contribution.previous_level, contribution.new_level) == (4, 5)
        assert contribution.milestones == [GuildMilestone(5, MilestoneType.MEMBER_INCREASE, 25)]

    @pytest.mark.parametrize(("resource_type", "amount"), [("ore", 10), ("credits", 0)])
    def test_rejected_contributions(self, resource_type, amount):
        with pytest.raises(InvalidRequestError) as exc_info:
            evaluate_contribution(resource_type, amount, 0)
        assert exc_info.value.code == "INVALID_REQUEST"

    @given(
        amount=st.integers(min_value=1, max_value=1_000_000),
        experience=st.integers(min_value=0, max_value=1_000_000),
    )
    def test_levels_follow_experience(self, amount, experience):
        contribution = evaluate_contribution("credits", amount, experience)
        assert contribution.new_level == guild_level(experience + amount // 10)
        assert contribution.new_level >= contribution.previous_level


class TestMilestones:
    def test_levels_four_to_ten(self):
        assert milestones_between(4, 10) == [
            GuildMilestone(5, MilestoneType.MEMBER_INCREASE, 25),
            GuildMilestone(10, MilestoneType.MEMBER_INCREASE, 25),
            GuildMilestone(10, MilestoneType.CREDITS, 10_000),
        ]

    def test_no_levels_crossed(self):
        assert milestones_between(7, 7) == []

    def test_to_dict(self):
        assert GuildMilestone(10, MilestoneType.CREDITS, 10_000).to_dict() == {
            "level": 10,
            "type": "credits",
            "value": 10_000,
        }


class TestRanking:
    def test_guild_level(self):
        assert [guild_level(xp) for xp in (0, 999, 1000, 5500)] == [1, 1, 2, 6]

    def test_guild_power(self):
        assert guild_power(2, 3, 150) == 2 * 100 + 3 * 10 + 150

    def test_rank_by_level_then_experience(self):
        alpha = SimpleNamespace(name="alpha", level=2, experience=1100, member_count=1)
        beta = SimpleNamespace(name="beta", level=3, experience=2000, member_count=1)
        gamma = SimpleNamespace(name="gamma", level=2, experience=1500, member_count=9)

        ranked = rank_guilds([alpha, beta, gamma])

        assert [(rank, guild.name) for rank, guild in ranked] == [
            (1, "beta"),
            (2, "gamma"),
            (3, "alpha"),
        ]
