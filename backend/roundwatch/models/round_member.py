"""RoundMember ORM — a subject who must be checked during a Round.

Invariants:
    - At most one member per (round_id, subject_id)
    - Snapshotted when the round is first touched for a cadence; never
      updated when the roster changes later
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from roundwatch.db.base import Base


class RoundMember(Base):
    """Membership snapshot row."""
    __tablename__ = "round_members"
    __table_args__ = (
        UniqueConstraint("round_id", "subject_id", name="uq_round_member"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    round_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("rounds.id"), nullable=False, index=True,
    )
    subject_id: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
