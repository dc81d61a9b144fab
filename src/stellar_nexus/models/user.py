"""Player account model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampCreatedMixin, utc_now

if TYPE_CHECKING:
    from .guild import Guild
    from .ship import Ship

STAT_FIELDS = ("exploration_count", "combat_count", "artifact_count", "trade_count")


class User(Base, TimestampCreatedMixin):
    """A registered commander.

    ``level`` always equals ``experience // 1000 + 1``; the game engine is
    the only writer of both. The four activity counters only ever grow and
    are exposed together through :attr:`stats`.

    Attributes:
        id: Primary key
        discord_id: Unique external identity
        username: Display name
        level: Commander level
        experience: Lifetime experience
        credits: Soft currency
        nexium: Premium currency
        active_ship_id: Currently active ship, if any
        guild_id: Guild membership, if any
        alliance_id: Alliance membership, if any
        last_active: Last time the commander did anything
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    discord_id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String, nullable=False)

    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    credits: Mapped[int] = mapped_column(Integer, nullable=False, default=1000)
    nexium: Mapped[int] = mapped_column(Integer, nullable=False, default=25)

    active_ship_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    guild_id: Mapped[int | None] = mapped_column(
        ForeignKey("guilds.id", ondelete="SET NULL"), nullable=True, index=True
    )
    alliance_id: Mapped[int | None] = mapped_column(
        ForeignKey("alliances.id", ondelete="SET NULL", use_alter=True, name="fk_users_alliance"),
        nullable=True,
    )

    exploration_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    combat_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    artifact_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    trade_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    last_active: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    ships: Mapped[list["Ship"]] = relationship("Ship", back_populates="owner")
    guild: Mapped["Guild | None"] = relationship("Guild", back_populates="members")

    __table_args__ = (
        CheckConstraint("level >= 1", name="ck_users_level"),
        CheckConstraint("experience >= 0", name="ck_users_experience"),
        CheckConstraint("credits >= 0", name="ck_users_credits"),
        CheckConstraint("nexium >= 0", name="ck_users_nexium"),
    )

    @property
    def stats(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in STAT_FIELDS}

    def __repr__(self) -> str:
        return f"<User(id={self.id}, discord_id='{self.discord_id}', level={self.level})>"
