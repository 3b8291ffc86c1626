"""RoundTypeLink ORM — which cadences a Round serves.

Invariants:
    - At most one link per (round_id, round_type_id)
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from roundwatch.db.base import Base


class RoundTypeLink(Base):
    """Join row between rounds and round_types."""
    __tablename__ = "round_type_links"
    __table_args__ = (
        UniqueConstraint("round_id", "round_type_id", name="uq_round_type_link"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    round_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("rounds.id"), nullable=False, index=True,
    )
    round_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("round_types.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
