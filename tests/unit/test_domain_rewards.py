"""Unit tests for the reward tables."""

from math import floor

import pytest
from hypothesis import given
from hypothesis import strategies as st

from stellar_nexus.domain.enums import ExplorationType, Rarity, RewardType
from stellar_nexus.domain.models import Reward
from stellar_nexus.domain.rewards import (
    ANCIENT_ARTIFACTS,
    FISHING_CATCHES,
    calculate_combat_rewards,
    calculate_exploration_rewards,
    calculate_level_up_rewards,
    calculate_market_price,
    calculate_quest_rewards,
    determine_rarity,
    salvage_reward,
)
from stellar_nexus.domain.rules_config import (
    COMBAT_RARITY_THRESHOLDS,
    EXPLORATION_RARITY_THRESHOLDS,
)
from stellar_nexus.utils.rng import make_rng


class TestDetermineRarity:
    @pytest.mark.parametrize(
        ("value", "rarity"),
        [
            (0, Rarity.COMMON),
            (19, Rarity.COMMON),
            (20, Rarity.UNCOMMON),
            (299, Rarity.RARE),
            (300, Rarity.EPIC),
            (700, Rarity.LEGENDARY),
        ],
    )
    def test_exploration_thresholds(self, value, rarity):
        assert determine_rarity(value, EXPLORATION_RARITY_THRESHOLDS) is rarity

    def test_combat_thresholds_are_stricter(self):
        assert determine_rarity(15, COMBAT_RARITY_THRESHOLDS) is Rarity.UNCOMMON
        assert determine_rarity(15, EXPLORATION_RARITY_THRESHOLDS) is Rarity.COMMON

    @given(value=st.integers(min_value=0, max_value=100_000))
    def test_rarity_grows_with_value(self, value):
        lower = determine_rarity(value, EXPLORATION_RARITY_THRESHOLDS)
        higher = determine_rarity(value + 50, EXPLORATION_RARITY_THRESHOLDS)
        assert higher.rank >= lower.rank


class TestExplorationRewards:
    def test_fishing_haul(self):
        rewards = calculate_exploration_rewards(ExplorationType.FISHING, 1, 50, make_rng("fish"))
        assert [r.kind for r in rewards] == [RewardType.MATERIAL, RewardType.CREDITS]
        assert rewards[0].name in FISHING_CATCHES
        assert 15 <= rewards[1].value < 40

    def test_artifact_search_hit(self, scripted):
        # 0.1 < 0.6 finds an artifact; 0.5 places its value mid-range
        rewards = calculate_exploration_rewards(
            ExplorationType.ARTIFACT_SEARCH, 1, 50, scripted([0.1, 0.5])
        )
        assert len(rewards) == 1
        assert rewards[0].kind is RewardType.ARTIFACT
        assert rewards[0].name in ANCIENT_ARTIFACTS
        assert rewards[0].value == floor(150 + 350 * 0.5)

    def test_artifact_search_miss_pays_survey_fee(self, scripted):
        rewards = calculate_exploration_rewards(
            ExplorationType.ARTIFACT_SEARCH, 1, 50, scripted([0.9, 0.0])
        )
        assert rewards == [Reward(RewardType.CREDITS, "Archaeological Survey Fee", value=25)]

    def test_sector_survey_leads_with_credits(self):
        rewards = calculate_exploration_rewards(
            ExplorationType.EXPLORATION, 3, 80, make_rng("survey")
        )
        assert rewards[0].kind is RewardType.CREDITS
        assert rewards[1].kind is RewardType.MATERIAL
        assert rewards[1].value == rewards[1].quantity * 5

    def test_hunting_materials_worth_fifteen_each(self):
        rewards = calculate_exploration_rewards(ExplorationType.HUNTING, 1, 50, make_rng("hunt"))
        assert rewards[0].name == "Bounty Payment"
        assert rewards[1].value == rewards[1].quantity * 15

    def test_salvage(self):
        reward = salvage_reward(make_rng("salvage"))
        assert reward.kind is RewardType.CREDITS
        assert 10 <= reward.value <= 29


class TestCombatRewards:
    def test_pay_only_when_bonus_rolls_miss(self, scripted):
        rewards = calculate_combat_rewards(1, 1, scripted([0.5, 0.99, 0.99]))
        assert rewards == [
            Reward(RewardType.CREDITS, "Combat Pay", value=floor((50 + 100 * 0.5) * 1.2))
        ]

    def test_bonus_rolls_hit(self, scripted):
        # pay, material chance, nexium chance (material draws follow the chance)
        rng = scripted([0.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0])
        rewards = calculate_combat_rewards(5, 1, rng)
        kinds = [reward.kind for reward in rewards]
        assert kinds[0] is RewardType.CREDITS
        assert RewardType.MATERIAL in kinds
        assert kinds[-1] is RewardType.NEXIUM
        nexium = rewards[-1]
        assert nexium.value == nexium.quantity * 100


class TestLevelUpRewards:
    def test_level_ten(self, scripted):
        rewards = calculate_level_up_rewards(10, scripted([0.0]))
        assert rewards[0] == Reward(RewardType.CREDITS, "Level Up Bonus", value=1000)
        assert rewards[1].kind is RewardType.NEXIUM
        assert 2 <= rewards[1].quantity <= 4
        assert rewards[2].name == "Advanced Navigation System"

    def test_plain_level(self, scripted):
        rewards = calculate_level_up_rewards(3, scripted([0.0]))
        assert rewards == [Reward(RewardType.CREDITS, "Level Up Bonus", value=300)]


class TestQuestAndMarket:
    def test_easy_quest_pays_credits_and_experience(self):
        rewards = calculate_quest_rewards(1, 2, 1, make_rng("quest"))
        assert [r.kind for r in rewards] == [RewardType.CREDITS, RewardType.EXPERIENCE]

    def test_hard_quest_can_pay_component_and_nexium(self, scripted):
        rewards = calculate_quest_rewards(4, 1, 1, scripted([0.0, 0.0, 0.0, 0.0, 0.0]))
        assert [r.kind for r in rewards] == [
            RewardType.CREDITS,
            RewardType.EXPERIENCE,
            RewardType.COMPONENT,
            RewardType.NEXIUM,
        ]

    def test_market_price_scales_with_rarity(self, scripted):
        assert calculate_market_price(100, Rarity.RARE, scripted([0.0])) == 200
        assert calculate_market_price(100, Rarity.COMMON, scripted([0.0])) == 80
