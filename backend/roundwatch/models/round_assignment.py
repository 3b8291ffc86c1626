"""RoundAssignment ORM — puts a subject on a cadence's roster.

Invariants:
    - A subject may be assigned to several RoundTypes
    - Changing assignments never rewrites RoundMember rows already snapshotted
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from roundwatch.db.base import Base


class RoundAssignment(Base):
    """Roster entry: subject_id is checked on every round of round_type_id."""
    __tablename__ = "round_assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    round_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("round_types.id"), nullable=False, index=True,
    )
    subject_id: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
