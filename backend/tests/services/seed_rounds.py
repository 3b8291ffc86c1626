"""Seed helpers — insert cadences and rounds, and read back what the materializer wrote."""

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from roundwatch.models.round import Round
from roundwatch.models.round_assignment import RoundAssignment
from roundwatch.models.round_config import RoundConfig
from roundwatch.models.round_member import RoundMember
from roundwatch.models.round_type import RoundType
from roundwatch.models.round_type_link import RoundTypeLink

NOW = datetime(2022, 1, 10, 9, 30, tzinfo=timezone.utc)


async def seed_cadence(
    db: AsyncSession, minutes: int, enabled: bool = True,
    unit: str = "minutes", subjects: tuple[str, ...] = (),
) -> RoundType:
    """Insert a RoundType with its RoundConfig and roster, committed."""
    round_type = RoundType(
        name=f"{minutes} Minute Round",
        duration_amount=minutes, duration_unit=unit,
    )
    db.add(round_type)
    await db.flush()
    db.add(RoundConfig(round_type_id=round_type.id, enabled=enabled))
    for subject_id in subjects:
        db.add(RoundAssignment(round_type_id=round_type.id, subject_id=subject_id))
    await db.commit()
    return round_type


async def seed_round(
    db: AsyncSession, round_timestamp: str, status: str = "CREATED",
    round_type_ids: tuple[int, ...] = (),
) -> Round:
    db_round = Round(round_timestamp=round_timestamp, status=status)
    db.add(db_round)
    await db.flush()
    for round_type_id in round_type_ids:
        db.add(RoundTypeLink(round_id=db_round.id, round_type_id=round_type_id))
    await db.commit()
    return db_round


async def count_rows(db: AsyncSession, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def round_timestamps(db: AsyncSession) -> list[str]:
    result = await db.execute(select(Round.round_timestamp).order_by(Round.round_timestamp))
    return list(result.scalars().all())


async def linked_type_ids(db: AsyncSession, round_timestamp: str) -> set[int]:
    result = await db.execute(
        select(RoundTypeLink.round_type_id)
        .join(Round, Round.id == RoundTypeLink.round_id)
        .where(Round.round_timestamp == round_timestamp)
    )
    return set(result.scalars().all())


async def member_ids(db: AsyncSession, round_timestamp: str) -> set[str]:
    result = await db.execute(
        select(RoundMember.subject_id)
        .join(Round, Round.id == RoundMember.round_id)
        .where(Round.round_timestamp == round_timestamp)
    )
    return set(result.scalars().all())
