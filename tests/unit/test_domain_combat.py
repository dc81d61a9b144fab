"""Unit tests for PvE and PvP combat resolution."""

from math import floor

import pytest
from hypothesis import given
from hypothesis import strategies as st

from stellar_nexus.domain.combat import (
    RANDOM_ENEMY,
    enemy_difficulty_cap,
    generate_enemy,
    resolve_pve,
    resolve_pvp,
    select_enemy_template,
)
from stellar_nexus.domain.models import ShipStats
from stellar_nexus.utils.rng import make_rng

SCOUT = ShipStats(health=100, max_health=100, speed=80, cargo=20, weapons=1, sensors=60)
WARDEN = ShipStats(health=300, max_health=300, speed=40, cargo=30, weapons=5, sensors=50)


class TestEnemySelection:
    @pytest.mark.parametrize(("level", "cap"), [(1, 1), (5, 2), (10, 3), (30, 5)])
    def test_difficulty_cap(self, level, cap):
        assert enemy_difficulty_cap(level) == cap

    @pytest.mark.parametrize(
        ("enemy_type", "name"),
        [
            ("pirate", "Space Pirate"),
            ("VOID", "Void Hunter"),
            ("destroyer", "Dark Fleet Destroyer"),
            ("leviathan", "Space Pirate"),
        ],
    )
    def test_named_lookup(self, enemy_type, name):
        assert select_enemy_template(enemy_type, 1, make_rng("enemy")).name == name

    def test_random_encounters_respect_level(self):
        rng = make_rng("encounters")
        for _ in range(50):
            assert select_enemy_template(RANDOM_ENEMY, 1, rng).difficulty == 1

    def test_enemy_scales_with_level(self):
        base = generate_enemy("pirate", 1, make_rng("e"))
        assert (base.weapons, base.power, base.health) == (2, 200, 180)

        scaled = generate_enemy("pirate", 11, make_rng("e"))
        assert (scaled.weapons, scaled.power, scaled.health) == (4, 400, 360)


class TestResolvePve:
    def test_player_win_rolls_rewards(self, scripted):
        enemy = generate_enemy("pirate", 1, make_rng("e"))
        resolution = resolve_pve(SCOUT, enemy, 1, scripted([0.5, 0.1]))

        assert resolution.player_won is True
        assert resolution.player_roll == pytest.approx(SCOUT.power * 0.5)
        assert resolution.attacker_damage == floor(resolution.player_roll * 0.3 + 10)
        assert resolution.defender_damage == floor(resolution.enemy_roll * 0.2 + 2 * 8)
        assert resolution.experience == 1 * 25 + 50
        assert resolution.ship_health == 100 - resolution.defender_damage
        assert resolution.rewards[0].name == "Combat Pay"

    def test_player_loss_has_no_rewards(self, scripted):
        enemy = generate_enemy("pirate", 1, make_rng("e"))
        resolution = resolve_pve(SCOUT, enemy, 1, scripted([0.1, 0.9]))

        assert resolution.player_won is False
        assert resolution.experience == 1 * 25 + 25
        assert resolution.rewards == []

    def test_ship_health_floors_at_zero(self, scripted):
        fragile = ShipStats(health=5, max_health=100, speed=80, cargo=20, weapons=1, sensors=60)
        enemy = generate_enemy("destroyer", 10, make_rng("e"))
        resolution = resolve_pve(fragile, enemy, 10, scripted([0.0, 0.99]))
        assert resolution.ship_health == 0


class TestResolvePvp:
    def test_winner_can_take_more_damage(self, scripted):
        resolution = resolve_pvp(SCOUT, WARDEN, scripted([0.5, 0.2]))

        assert resolution.attacker_won is True
        assert resolution.attacker.experience == 150
        assert resolution.defender.experience == 50
        assert resolution.attacker.damage_received > resolution.defender.damage_received

    def test_speed_reduces_damage_received(self, scripted):
        resolution = resolve_pvp(SCOUT, SCOUT, scripted([0.6, 0.2]))

        dealt = resolution.attacker.damage_dealt
        assert dealt == floor(resolution.attacker.roll * 0.25 + 12)
        assert resolution.defender.damage_received == floor(dealt * (1 - 80 / 200))

    def test_defender_wins_ties(self, scripted):
        resolution = resolve_pvp(SCOUT, SCOUT, scripted([0.4, 0.4]))
        assert resolution.attacker_won is False
        assert resolution.defender.experience == 150

    @given(seed=st.integers(min_value=0, max_value=10_000))
    def test_health_stays_in_bounds(self, seed):
        resolution = resolve_pvp(SCOUT, WARDEN, make_rng(seed))
        for side, ship in ((resolution.attacker, SCOUT), (resolution.defender, WARDEN)):
            assert side.damage_received >= 0
            assert 0 <= side.remaining_health <= ship.health
