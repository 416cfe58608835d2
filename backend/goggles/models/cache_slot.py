"""CacheSlot ORM — persisted tier of the result cache as a key/value table.

Invariants:
    - key is the primary key; one row per persisted slot
    - value is opaque text (JSON collection or ms-epoch timestamp), decoded in core

Design Decisions:
    - Key/value rows instead of a records table: the persisted tier is written
      and read as a whole, never queried by field
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from goggles.db.base import Base


class CacheSlot(Base):
    """One persisted cache value."""
    __tablename__ = "cache_slots"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
