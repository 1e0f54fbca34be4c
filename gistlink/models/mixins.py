"""Mixins for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, func


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns.

    Rows inserted through the ORM get one shared timestamp for both columns so
    an untouched row has ``created_at == updated_at``; updates must bump
    ``updated_at`` explicitly via :meth:`touch`.
    """

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __init__(self, **kwargs):
        now = utcnow()
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", kwargs["created_at"])
        super().__init__(**kwargs)

    def touch(self) -> None:
        """Mark the row as modified now."""
        self.updated_at = utcnow()
