"""Tests for guild membership, contributions, rankings and alliances."""

import pytest

from stellar_nexus.domain.errors import (
    AlreadyInAllianceError,
    InsufficientCreditsError,
    InvalidRequestError,
    NotInGuildError,
    StateConflictError,
)
from stellar_nexus.services.guild_service import GuildService


@pytest.fixture
def service(storage, game_engine):
    service = GuildService(storage, game_engine)
    service.initialize_default_guilds()
    return service


@pytest.fixture
def guild(service):
    return service.get_all_guilds()[0]


@pytest.fixture
def member(service, guild, player):
    service.join_guild(player.id, guild.id)
    return player


def test_default_guilds_are_seeded_once(service):
    guilds = service.get_all_guilds()
    assert len(guilds) == 4
    assert all((g.member_count, g.max_members, g.level) == (1, 100, 1) for g in guilds)
    assert service.initialize_default_guilds() == 0


def test_existing_guilds_skip_seeding(storage, game_engine):
    storage.create_guild("Drift Runners", "trade", "npc_drift")

    service = GuildService(storage, game_engine)

    assert service.initialize_default_guilds() == 0
    assert [g.name for g in service.get_all_guilds()] == ["Drift Runners"]


class TestMembership:
    def test_join(self, service, guild, player):
        result = service.join_guild(player.id, guild.id)

        assert result.success is True
        assert result.message == f"Welcome to {guild.name}!"
        assert result.reason is None
        assert guild.member_count == 2
        assert player.guild_id == guild.id
        assert service.get_guild_members(guild.id) == [player]

    def test_cannot_join_twice(self, service, guild, member):
        result = service.join_guild(member.id, guild.id)
        assert (result.success, result.reason) == (False, "ALREADY_IN_GUILD")
        assert guild.member_count == 2

    def test_unknown_guild(self, service, player):
        result = service.join_guild(player.id, 999)
        assert (result.success, result.reason) == (False, "NOT_FOUND")
        assert player.guild_id is None

    def test_full_guild(self, service, storage, guild, player):
        storage.update_guild(guild.id, max_members=1)
        result = service.join_guild(player.id, guild.id)
        assert (result.success, result.reason) == (False, "GUILD_FULL")
        assert result.guild is None

    def test_leave(self, service, guild, member):
        left = service.leave_guild(member.id)

        assert left is guild
        assert guild.member_count == 1
        assert member.guild_id is None

    def test_leave_without_guild(self, service, player):
        with pytest.raises(NotInGuildError):
            service.leave_guild(player.id)


class TestContributions:
    def test_credit_contribution(self, service, guild, member):
        outcome = service.contribute(member.id, "credits", 1000)

        assert member.credits == 0
        assert guild.experience == 100
        assert member.experience == 50
        assert outcome.experience.experience_gained == 50
        assert outcome.contribution.milestones == []

    def test_nexium_counts_tenfold(self, service, guild, member):
        service.contribute(member.id, "nexium", 10)
        assert member.nexium == 15
        assert guild.experience == 10

    def test_needs_credits(self, service, guild, member):
        with pytest.raises(InsufficientCreditsError):
            service.contribute(member.id, "credits", 1001)
        assert guild.experience == 0

    def test_requires_guild(self, service, player):
        with pytest.raises(NotInGuildError):
            service.contribute(player.id, "credits", 100)

    def test_unknown_currency(self, service, member):
        with pytest.raises(InvalidRequestError):
            service.contribute(member.id, "iron", 100)

    def test_member_milestone_raises_capacity(self, service, storage, guild, member):
        storage.update_guild(guild.id, experience=3990, level=4)

        outcome = service.contribute(member.id, "credits", 100)

        assert guild.level == 5
        assert guild.max_members == 125
        assert [m.type for m in outcome.contribution.milestones] == ["member_increase"]

    def test_credit_milestone_pays_every_member(
        self, service, storage, guild, member, rival
    ):
        service.join_guild(rival.id, guild.id)
        storage.update_guild(guild.id, experience=8990, level=9)

        service.contribute(member.id, "credits", 100)

        assert guild.level == 10
        assert guild.max_members == 125
        assert member.credits == 1000 - 100 + 10_000
        assert rival.credits == 1000 + 10_000


class TestRankings:
    def test_contributing_guild_ranks_first(self, service, guild, member):
        service.contribute(member.id, "credits", 500)

        rankings = service.get_guild_rankings()

        assert [r.rank for r in rankings] == [1, 2, 3, 4]
        assert rankings[0].guild is guild
        assert rankings[0].power == 1 * 100 + 2 * 10 + 50

    def test_guild_vs_guild_data(self, service):
        data = service.get_guild_vs_guild_data()
        assert len(data) == 4
        assert set(data[0]) == {"id", "name", "type", "level", "member_count", "rank", "power"}
        assert data[0]["power"] == 110


class TestAlliances:
    def test_create_alliance(self, service, player):
        alliance = service.create_alliance(player.id, "  Iron Pact ", "Mutual defence")

        assert alliance.name == "Iron Pact"
        assert alliance.leader_id == player.id
        assert alliance.fleet_power == 260
        assert player.alliance_id == alliance.id
        assert service.get_alliance_members(alliance.id) == [player]
        assert service.get_all_alliances() == [alliance]

    def test_one_alliance_per_user(self, service, player):
        service.create_alliance(player.id, "Iron Pact")
        with pytest.raises(AlreadyInAllianceError):
            service.create_alliance(player.id, "Second Pact")

    def test_name_taken(self, service, player, rival):
        service.create_alliance(player.id, "Iron Pact")
        with pytest.raises(StateConflictError) as exc_info:
            service.create_alliance(rival.id, "Iron Pact")
        assert exc_info.value.code == "ALLIANCE_NAME_TAKEN"
        assert rival.alliance_id is None

    def test_blank_name(self, service, player):
        with pytest.raises(InvalidRequestError):
            service.create_alliance(player.id, "   ")
