"""Declarative base, JSON column mapping and timestamp helpers for the schema."""

from datetime import UTC, datetime
from typing import Any, ClassVar

from sqlalchemy import JSON, DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Timezone-aware current time; every stored timestamp is UTC."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all Stellar Nexus tables.

    Datetimes are stored timezone-aware and plain ``dict``/``list`` payloads
    (rewards, sector details, recipe materials) map to JSON columns.
    """

    type_annotation_map: ClassVar[dict[Any, Any]] = {
        datetime: DateTime(timezone=True),
        dict[str, Any]: JSON,
        list[dict[str, Any]]: JSON,
    }


class TimestampCreatedMixin:
    """Adds ``created_at``, filled by the database and by Python on insert."""

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )
