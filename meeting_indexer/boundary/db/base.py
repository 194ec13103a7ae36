"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models, reusable mixins for common fields
(timestamps, UUIDs) and the enum column type shared by status fields.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Timezone-aware UTC now, used for all timestamp defaults."""
    return datetime.now(timezone.utc)


def enum_column(enum_cls: type[enum.Enum]) -> Enum:
    """
    Non-native enum column storing member values.

    Values (``"pending"``) rather than names (``"PENDING"``) are stored so
    raw SQL status updates and ORM writes agree.
    """
    return Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
    )


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


class UUIDMixin:
    """
    Mixin providing UUID primary key to all models.

    Uses the portable ``Uuid`` type: native UUID on PostgreSQL, CHAR(32)
    on SQLite test databases.

    Attributes:
        id: UUID v4 primary key, auto-generated on insert
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )


class TimestampMixin:
    """
    Mixin providing automatic timestamp tracking to all models.

    created_at is set once on row creation and never changes.
    updated_at is refreshed on every ORM update via onupdate hook.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
        updated_at: Last modification timestamp (UTC, auto-updated)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
