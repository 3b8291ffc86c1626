"""RoundType ORM — a named cadence (duration amount + unit).

Invariants:
    - duration_amount is a positive integer
    - duration_unit is "minutes"; anything else is a fatal configuration error
      at walk time, not at insert time

Design Decisions:
    - Unit stored as free text: rows are created out-of-band and validated by
      core.cadence.resolve_cadence where they are used
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from roundwatch.db.base import Base


class RoundType(Base):
    """Cadence definition, e.g. "15 Minute Round"."""
    __tablename__ = "round_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    duration_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    duration_unit: Mapped[str] = mapped_column(
        String(20), nullable=False, default="minutes",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
