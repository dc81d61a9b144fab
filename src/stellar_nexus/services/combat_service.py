"""Combat service: PvE encounters, PvP duels and combat history."""

from __future__ import annotations

import logging
import random

from stellar_nexus.domain.combat import RANDOM_ENEMY, generate_enemy, resolve_pve, resolve_pvp
from stellar_nexus.domain.enums import CombatType
from stellar_nexus.domain.errors import CannotSelfAttackError, NoActiveShipError, NotFoundError
from stellar_nexus.domain.rules_config import COMBAT_RARITY_THRESHOLDS, DEFAULT_RULES, RulesConfig
from stellar_nexus.interfaces.engine import IGameEngine
from stellar_nexus.interfaces.storage import IGameStorage
from stellar_nexus.models import CombatLog, Ship, User, utc_now

from .results import PveOutcome, PvpOutcome

logger = logging.getLogger(__name__)

ENEMY_WINNER = "enemy"


class CombatService:
    def __init__(
        self,
        storage: IGameStorage,
        engine: IGameEngine,
        rng: random.Random,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> None:
        self.storage = storage
        self.engine = engine
        self.rng = rng
        self.rules = rules

    def _load_combatant(self, user_id: int) -> tuple[User, Ship]:
        user = self.storage.get_user(user_id, for_update=True)
        if user is None:
            raise NotFoundError("user", user_id)
        ship = self.storage.get_active_ship(user_id, for_update=True)
        if ship is None:
            raise NoActiveShipError(user_id)
        return user, ship

    def pve_combat(self, user_id: int, enemy_type: str = RANDOM_ENEMY) -> PveOutcome:
        """Fight a generated enemy with the user's active ship.

        The enemy is scaled to the user's level. A win pays combat rewards;
        either way the ship takes the enemy's damage and the user gains
        experience.

        Raises:
            NotFoundError: If the user is missing
            NoActiveShipError: If the user has no active ship
        """
        with self.storage.transaction():
            user, ship = self._load_combatant(user_id)
            enemy = generate_enemy(enemy_type, user.level, self.rng, self.rules.combat)
            resolution = resolve_pve(ship.stats, enemy, user.level, self.rng, self.rules.combat)

            ship.health = resolution.ship_health
            self.engine.apply_rewards(
                user, resolution.rewards, rarity_thresholds=COMBAT_RARITY_THRESHOLDS
            )
            experience = self.engine.gain_experience(user_id, resolution.experience)
            self.engine.apply_rewards(user, experience.rewards)
            user.combat_count += 1
            user.last_active = utc_now()

            log = self.storage.add_combat_log(
                user_id,
                defender_id=None,
                type=str(CombatType.PVE),
                winner=str(user_id) if resolution.player_won else ENEMY_WINNER,
                enemy=enemy.to_dict(),
                attacker_damage=resolution.attacker_damage,
                defender_damage=resolution.defender_damage,
                experience_gained=resolution.experience,
                rewards=[reward.to_dict() for reward in resolution.rewards],
            )

        logger.info(
            "PvE user=%s enemy=%s won=%s ship_health=%d",
            user_id,
            enemy.name,
            resolution.player_won,
            resolution.ship_health,
        )
        return PveOutcome(log.id, resolution, experience)

    def pvp_combat(self, attacker_id: int, defender_id: int) -> PvpOutcome:
        """Fight two users' active ships against each other.

        Raises:
            CannotSelfAttackError: If both ids are the same user
            NotFoundError: If either user is missing
            NoActiveShipError: If either user has no active ship
        """
        if attacker_id == defender_id:
            raise CannotSelfAttackError(
                "a commander cannot attack themselves", details={"user_id": attacker_id}
            )

        with self.storage.transaction():
            attacker, attacker_ship = self._load_combatant(attacker_id)
            defender, defender_ship = self._load_combatant(defender_id)
            resolution = resolve_pvp(
                attacker_ship.stats, defender_ship.stats, self.rng, self.rules.combat
            )

            attacker_ship.health = resolution.attacker.remaining_health
            defender_ship.health = resolution.defender.remaining_health
            attacker_xp = self.engine.gain_experience(attacker_id, resolution.attacker.experience)
            self.engine.apply_rewards(attacker, attacker_xp.rewards)
            defender_xp = self.engine.gain_experience(defender_id, resolution.defender.experience)
            self.engine.apply_rewards(defender, defender_xp.rewards)

            now = utc_now()
            for user in (attacker, defender):
                user.combat_count += 1
                user.last_active = now

            log = self.storage.add_combat_log(
                attacker_id,
                defender_id=defender_id,
                type=str(CombatType.PVP),
                winner=str(attacker_id if resolution.attacker_won else defender_id),
                attacker_damage=resolution.attacker.damage_dealt,
                defender_damage=resolution.defender.damage_dealt,
                experience_gained=resolution.attacker.experience,
                rewards=[],
            )

        outcome = PvpOutcome(
            log.id, attacker_id, defender_id, resolution, attacker_xp, defender_xp
        )
        logger.info(
            "PvP attacker=%s defender=%s winner=%s", attacker_id, defender_id, outcome.winner_id
        )
        return outcome

    def get_combat_history(self, user_id: int, limit: int = 10) -> list[CombatLog]:
        """Fights the user took part in on either side, most recent first."""
        return self.storage.get_user_combat_history(user_id, limit)
