"""Inventory resource model."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampCreatedMixin


class Resource(Base, TimestampCreatedMixin):
    """A stack of one kind of item held by a user.

    Stacks are keyed by ``(user_id, name, type, rarity)``: acquiring more of
    the same item grows the existing row. ``value`` is the per-unit
    appraisal and follows the most recent acquisition.
    """

    __tablename__ = "resources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    rarity: Mapped[str] = mapped_column(String, nullable=False, default="common")
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_resources_quantity"),
        UniqueConstraint("user_id", "name", "type", "rarity", name="uq_resources_stack"),
        Index("idx_resources_user", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Resource(id={self.id}, name='{self.name}', quantity={self.quantity})>"
