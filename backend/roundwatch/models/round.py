"""Round ORM — one materialized time bucket.

Invariants:
    - round_timestamp is canonical (core/timestamps.py) and globally unique:
      cadences landing on the same instant share one Round
    - status starts as "CREATED"; an external actor advances it afterwards
    - Rounds are never deleted

Design Decisions:
    - Timestamp stored as its canonical string: exact-match lookups and
      lexicographic window queries, identical on SQLite and PostgreSQL
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from roundwatch.db.base import Base


class Round(Base):
    """Round entity — a single check-in event."""
    __tablename__ = "rounds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    round_timestamp: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
