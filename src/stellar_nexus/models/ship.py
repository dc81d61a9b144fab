"""Ship model."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stellar_nexus.domain.models import ShipStats

from .base import Base, TimestampCreatedMixin

if TYPE_CHECKING:
    from .user import User


class Ship(Base, TimestampCreatedMixin):
    """A ship owned by a user.

    Every stat except ``health`` is fixed by ``(type, tier)``. ``health``
    drops in combat and resets to ``max_health`` on repair or upgrade.

    Attributes:
        id: Primary key
        user_id: Owner
        name: Generated display name
        type: Ship archetype (scout, fighter, ...)
        tier: Power level, 1-4
        variant: Name of the archetype at this tier
        is_active: Whether this is the owner's active ship
    """

    __tablename__ = "ships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    tier: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    variant: Mapped[str] = mapped_column(String, nullable=False)

    health: Mapped[int] = mapped_column(Integer, nullable=False)
    max_health: Mapped[int] = mapped_column(Integer, nullable=False)
    speed: Mapped[int] = mapped_column(Integer, nullable=False)
    cargo: Mapped[int] = mapped_column(Integer, nullable=False)
    weapons: Mapped[int] = mapped_column(Integer, nullable=False)
    sensors: Mapped[int] = mapped_column(Integer, nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    owner: Mapped["User"] = relationship("User", back_populates="ships")

    __table_args__ = (
        CheckConstraint("tier BETWEEN 1 AND 4", name="ck_ships_tier"),
        CheckConstraint("health >= 0", name="ck_ships_health_min"),
        CheckConstraint("health <= max_health", name="ck_ships_health_max"),
        Index("idx_ships_user", "user_id"),
        Index("idx_ships_user_active", "user_id", "is_active"),
    )

    @property
    def stats(self) -> ShipStats:
        return ShipStats(
            health=self.health,
            max_health=self.max_health,
            speed=self.speed,
            cargo=self.cargo,
            weapons=self.weapons,
            sensors=self.sensors,
        )

    def __repr__(self) -> str:
        return f"<Ship(id={self.id}, name='{self.name}', type='{self.type}', tier={self.tier})>"
