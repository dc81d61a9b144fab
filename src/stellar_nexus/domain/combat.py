"""PvE and PvP combat resolution.

Both resolutions draw one uniform roll per side, scaled by the side's power.
The higher roll wins; damage is derived from the rolls and weapon ratings
independently of who won.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from math import floor

from stellar_nexus.utils.rng import random_float, weighted_choice

from .models import Enemy, EnemyTemplate, Reward, ShipStats
from .rewards import calculate_combat_rewards
from .rules_config import DEFAULT_RULES, ENEMY_TEMPLATES, CombatRules

RANDOM_ENEMY = "random"


@dataclass(slots=True)
class PveResolution:
    """Result of a player ship fighting a generated enemy."""

    enemy: Enemy
    player_won: bool
    player_roll: float
    enemy_roll: float
    attacker_damage: int
    defender_damage: int
    experience: int
    ship_health: int
    rewards: list[Reward] = field(default_factory=list)


@dataclass(slots=True)
class PvpSide:
    """One participant's view of a PvP fight."""

    roll: float
    damage_dealt: int
    damage_received: int
    remaining_health: int
    experience: int


@dataclass(slots=True)
class PvpResolution:
    attacker_won: bool
    attacker: PvpSide
    defender: PvpSide


def enemy_difficulty_cap(level: int, rules: CombatRules = DEFAULT_RULES.combat) -> int:
    """Highest enemy difficulty a random encounter may pick at ``level``."""
    return min(rules.max_enemy_difficulty, level // rules.enemy_difficulty_level_step + 1)


def select_enemy_template(
    enemy_type: str,
    level: int,
    rng: random.Random,
    rules: CombatRules = DEFAULT_RULES.combat,
) -> EnemyTemplate:
    """Pick the enemy template for ``enemy_type``.

    ``"random"`` draws from the weighted table restricted to the level's
    difficulty cap. Any other value matches template names by
    case-insensitive substring and falls back to the first template.
    """
    if enemy_type == RANDOM_ENEMY:
        cap = enemy_difficulty_cap(level, rules)
        candidates = [t for t in ENEMY_TEMPLATES if t.difficulty <= cap]
        return weighted_choice(rng, candidates, [t.weight for t in candidates])

    needle = enemy_type.lower()
    for template in ENEMY_TEMPLATES:
        if needle in template.name.lower():
            return template
    return ENEMY_TEMPLATES[0]


def generate_enemy(
    enemy_type: str,
    level: int,
    rng: random.Random,
    rules: CombatRules = DEFAULT_RULES.combat,
) -> Enemy:
    """Build a level-scaled enemy."""
    template = select_enemy_template(enemy_type, level, rng, rules)
    multiplier = 1 + (level - 1) * rules.enemy_level_scaling
    return Enemy(
        name=template.name,
        difficulty=template.difficulty,
        weapons=floor(template.weapons * multiplier),
        power=floor(
            (
                template.weapons * rules.enemy_weapon_power
                + template.difficulty * rules.enemy_difficulty_power
            )
            * multiplier
        ),
        health=floor(
            (template.difficulty * rules.enemy_difficulty_health + rules.enemy_base_health)
            * multiplier
        ),
    )


def _damage_dealt(roll: float, weapons: int, roll_factor: float, weapon_factor: float) -> int:
    return floor(roll * roll_factor + weapons * weapon_factor)


def resolve_pve(
    ship: ShipStats,
    enemy: Enemy,
    level: int,
    rng: random.Random,
    rules: CombatRules = DEFAULT_RULES.combat,
) -> PveResolution:
    """Fight ``enemy`` with ``ship``; rewards are rolled only on a win."""
    player_roll = random_float(rng, 0, ship.power)
    enemy_roll = random_float(rng, 0, enemy.power)

    attacker_damage = _damage_dealt(
        player_roll,
        ship.weapons,
        rules.player_damage_roll_factor,
        rules.player_damage_weapon_factor,
    )
    defender_damage = _damage_dealt(
        enemy_roll,
        enemy.weapons,
        rules.enemy_damage_roll_factor,
        rules.enemy_damage_weapon_factor,
    )
    player_won = player_roll > enemy_roll
    experience = enemy.difficulty * rules.pve_experience_per_difficulty + (
        rules.pve_win_experience if player_won else rules.pve_loss_experience
    )
    rewards = calculate_combat_rewards(enemy.difficulty, level, rng) if player_won else []

    return PveResolution(
        enemy=enemy,
        player_won=player_won,
        player_roll=player_roll,
        enemy_roll=enemy_roll,
        attacker_damage=attacker_damage,
        defender_damage=defender_damage,
        experience=experience,
        ship_health=max(0, ship.health - defender_damage),
        rewards=rewards,
    )


def _damage_received(
    opponent_dealt: int, own_speed: int, rules: CombatRules = DEFAULT_RULES.combat
) -> int:
    return max(0, floor(opponent_dealt * (1 - own_speed / rules.pvp_speed_divisor)))


def resolve_pvp(
    attacker: ShipStats,
    defender: ShipStats,
    rng: random.Random,
    rules: CombatRules = DEFAULT_RULES.combat,
) -> PvpResolution:
    """Fight two player ships.

    Victory and damage are rolled independently: the winner may take more
    damage than the loser.
    """
    attacker_roll = random_float(rng, 0, attacker.power)
    defender_roll = random_float(rng, 0, defender.power)

    attacker_dealt = _damage_dealt(
        attacker_roll,
        attacker.weapons,
        rules.pvp_damage_roll_factor,
        rules.pvp_damage_weapon_factor,
    )
    defender_dealt = _damage_dealt(
        defender_roll,
        defender.weapons,
        rules.pvp_damage_roll_factor,
        rules.pvp_damage_weapon_factor,
    )
    attacker_received = _damage_received(defender_dealt, attacker.speed, rules)
    defender_received = _damage_received(attacker_dealt, defender.speed, rules)

    attacker_won = attacker_roll > defender_roll
    winner_xp, loser_xp = rules.pvp_winner_experience, rules.pvp_loser_experience

    return PvpResolution(
        attacker_won=attacker_won,
        attacker=PvpSide(
            roll=attacker_roll,
            damage_dealt=attacker_dealt,
            damage_received=attacker_received,
            remaining_health=max(0, attacker.health - attacker_received),
            experience=winner_xp if attacker_won else loser_xp,
        ),
        defender=PvpSide(
            roll=defender_roll,
            damage_dealt=defender_dealt,
            damage_received=defender_received,
            remaining_health=max(0, defender.health - defender_received),
            experience=loser_xp if attacker_won else winner_xp,
        ),
    )
