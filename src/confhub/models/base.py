"""Declarative base and shared column mixins for SQLAlchemy 2.0 models."""

from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base for all confhub models."""


class TimestampMixin:
    """Adds created_at and modified_at columns.

    Both are filled client-side so the values are available on the
    instance right after flush without a refresh round-trip.

    Attributes:
        created_at: When the row was inserted.
        modified_at: When the row was last written.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
    modified_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
