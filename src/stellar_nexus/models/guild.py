"""Guild and alliance models."""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampCreatedMixin

if TYPE_CHECKING:
    from .user import User


class Guild(Base, TimestampCreatedMixin):
    """An NPC-led guild players can join and level up.

    Attributes:
        id: Primary key
        name: Unique guild name
        type: military, trade, exploration or research
        level: ``experience // 1000 + 1``
        member_count: Current members; never above ``max_members``
        leader_id: Tag of the NPC leader
    """

    __tablename__ = "guilds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    type: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    member_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_members: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    leader_id: Mapped[str] = mapped_column(String, nullable=False)

    members: Mapped[list["User"]] = relationship("User", back_populates="guild")

    __table_args__ = (
        CheckConstraint("member_count >= 0", name="ck_guilds_member_count_min"),
        CheckConstraint("member_count <= max_members", name="ck_guilds_capacity"),
    )

    def __repr__(self) -> str:
        return f"<Guild(id={self.id}, name='{self.name}', level={self.level})>"


class Alliance(Base, TimestampCreatedMixin):
    """A player-founded alliance."""

    __tablename__ = "alliances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    leader_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    member_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    max_members: Mapped[int] = mapped_column(Integer, nullable=False, default=20)
    fleet_power: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Alliance(id={self.id}, name='{self.name}', members={self.member_count})>"
