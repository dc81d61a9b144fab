"""Crafting recipe model."""

from typing import Any

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampCreatedMixin


class Recipe(Base, TimestampCreatedMixin):
    """A crafting definition.

    Attributes:
        materials: ``[{"name": ..., "quantity": ...}]`` consumed per craft
        result: ``{"name": ..., "quantity": ..., "stats": {...}}`` produced per craft
        crafting_time: Minutes the craft takes
    """

    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    materials: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    result: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    rarity: Mapped[str] = mapped_column(String, nullable=False, default="common")
    crafting_time: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    category: Mapped[str | None] = mapped_column(String, nullable=True)

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, name='{self.name}', level={self.level})>"
