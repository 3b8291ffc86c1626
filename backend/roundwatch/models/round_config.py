"""RoundConfig ORM — enables or disables a RoundType for materialization.

Invariants:
    - At most one config per RoundType (unique round_type_id)
    - Disabled configs are skipped by both the materializer and the projector
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from roundwatch.db.base import Base


class RoundConfig(Base):
    """Enablement toggle for one cadence."""
    __tablename__ = "round_configs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    round_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("round_types.id"), nullable=False, unique=True,
    )
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
