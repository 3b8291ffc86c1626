"""Round Store — the persistence capability set the materializer and projector consume.

Invariants:
    - "Not found" is None, never an exception and never a zero-valued row
    - Writes are flushed, not committed: one transaction per materializer run
    - link_round_to_type and create_round_member are idempotent on their
      unique keys and report whether a row was written
    - get_latest_round_for_type orders by canonical timestamp (then id), so
      the resume point of a cadence only ever moves forward

Design Decisions:
    - Implements core/repository_protocols.RoundStore structurally; returns
      ORM rows, which satisfy the *Like protocols
    - Check-then-insert for idempotency instead of dialect-specific upserts:
      identical on SQLite and PostgreSQL, and the materializer is single-writer
"""

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roundwatch.models.round import Round
from roundwatch.models.round_assignment import RoundAssignment
from roundwatch.models.round_config import RoundConfig
from roundwatch.models.round_member import RoundMember
from roundwatch.models.round_type import RoundType
from roundwatch.models.round_type_link import RoundTypeLink

logger = logging.getLogger(__name__)


class SqlAlchemyRoundStore:
    """RoundStore implementation backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_round_configs(self) -> Sequence[RoundConfig]:
        result = await self.db.execute(
            select(RoundConfig).order_by(RoundConfig.id),
        )
        return result.scalars().all()

    async def get_round_type(self, round_type_id: int) -> RoundType | None:
        result = await self.db.execute(
            select(RoundType).where(RoundType.id == round_type_id),
        )
        return result.scalar_one_or_none()

    async def get_latest_round_for_type(self, round_type_id: int) -> Round | None:
        """Most recent round linked to this cadence, or None before its first walk."""
        result = await self.db.execute(
            select(Round)
            .join(RoundTypeLink, RoundTypeLink.round_id == Round.id)
            .where(RoundTypeLink.round_type_id == round_type_id)
            .order_by(Round.round_timestamp.desc(), Round.id.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def get_round_by_timestamp(self, round_timestamp: str) -> Round | None:
        result = await self.db.execute(
            select(Round).where(Round.round_timestamp == round_timestamp),
        )
        return result.scalar_one_or_none()

    async def list_rounds_in_window(self, start: str, end: str) -> Sequence[Round]:
        """Rounds with start <= round_timestamp <= end (canonical strings)."""
        result = await self.db.execute(
            select(Round)
            .where(Round.round_timestamp >= start)
            .where(Round.round_timestamp <= end)
            .order_by(Round.round_timestamp)
        )
        return result.scalars().all()

    async def create_round(self, round_timestamp: str, status: str) -> Round:
        db_round = Round(round_timestamp=round_timestamp, status=status)
        self.db.add(db_round)
        await self.db.flush()
        return db_round

    async def link_round_to_type(self, round_id: int, round_type_id: int) -> bool:
        result = await self.db.execute(
            select(RoundTypeLink.id)
            .where(RoundTypeLink.round_id == round_id)
            .where(RoundTypeLink.round_type_id == round_type_id)
        )
        if result.scalar_one_or_none() is not None:
            logger.debug(
                f"Round {round_id} already linked to type {round_type_id}",
                extra={"round_type_id": round_type_id},
            )
            return False
        self.db.add(RoundTypeLink(round_id=round_id, round_type_id=round_type_id))
        await self.db.flush()
        return True

    async def list_members_for_round(self, round_id: int) -> Sequence[RoundMember]:
        result = await self.db.execute(
            select(RoundMember)
            .where(RoundMember.round_id == round_id)
            .order_by(RoundMember.id)
        )
        return result.scalars().all()

    async def list_assignments_for_type(
        self, round_type_id: int,
    ) -> Sequence[RoundAssignment]:
        result = await self.db.execute(
            select(RoundAssignment)
            .where(RoundAssignment.round_type_id == round_type_id)
            .order_by(RoundAssignment.id)
        )
        return result.scalars().all()

    async def create_round_member(self, round_id: int, subject_id: str) -> bool:
        result = await self.db.execute(
            select(RoundMember.id)
            .where(RoundMember.round_id == round_id)
            .where(RoundMember.subject_id == subject_id)
        )
        if result.scalar_one_or_none() is not None:
            return False
        self.db.add(RoundMember(round_id=round_id, subject_id=subject_id))
        await self.db.flush()
        return True
