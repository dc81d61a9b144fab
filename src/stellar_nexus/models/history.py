"""Append-only history rows: explorations, combat logs and market trades."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utc_now


class Exploration(Base):
    """One completed exploration and what it yielded."""

    __tablename__ = "explorations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    ship_id: Mapped[int | None] = mapped_column(
        ForeignKey("ships.id", ondelete="SET NULL"), nullable=True
    )
    sector: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    success: Mapped[bool] = mapped_column(nullable=False)
    experience_gained: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rewards: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    __table_args__ = (Index("idx_explorations_user_time", "user_id", "timestamp"),)


class CombatLog(Base):
    """One resolved fight. ``defender_id`` is empty for PvE."""

    __tablename__ = "combat_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    attacker_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    defender_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    type: Mapped[str] = mapped_column(String, nullable=False)
    winner: Mapped[str] = mapped_column(String, nullable=False)
    enemy: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    attacker_damage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    defender_damage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    experience_gained: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rewards: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    __table_args__ = (
        Index("idx_combat_logs_attacker", "attacker_id", "timestamp"),
        Index("idx_combat_logs_defender", "defender_id", "timestamp"),
    )


class MarketTransaction(Base):
    """One market trade. ``seller_id`` is empty when the NPC market sold."""

    __tablename__ = "market_transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    seller_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    buyer_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    item_type: Mapped[str] = mapped_column(String, nullable=False)
    item_name: Mapped[str] = mapped_column(String, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_unit: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    __table_args__ = (Index("idx_market_transactions_time", "timestamp"),)
