"""Round Status — materializer trigger, live status timeline, round membership.

Invariants:
    - POST /materialize commits once, after the whole run succeeded
    - GET /status never writes; each entry is {"roundTimestamp", "status"}
    - Omitted `now` means the current UTC minute; omitted `start` means
      now - status_window_hours
    - Windows longer than max_status_window_hours are rejected (400)

Design Decisions:
    - `now` floored to the minute by default: every trigger tick lands on the
      same canonical timestamps regardless of scheduler jitter
    - Overlapping POST /materialize calls are not serialized here; the
      deployment runs one trigger at a time
"""

import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from roundwatch.config import get_settings
from roundwatch.core.errors import ResourceNotFoundError
from roundwatch.core.timestamps import floor_to_minute, normalize_instant
from roundwatch.infrastructure.database import get_db
from roundwatch.models.round import Round
from roundwatch.schemas.rounds import MaterializeRequest
from roundwatch.services.round_materializer import materialize_rounds
from roundwatch.services.round_store import SqlAlchemyRoundStore
from roundwatch.services.status_projector import project_round_status

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/rounds", tags=["rounds"])


def _resolve_now(now: datetime | None) -> datetime:
    if now is None:
        return floor_to_minute(datetime.now(timezone.utc))
    return normalize_instant(now)


@router.post("/materialize")
async def materialize(
    body: MaterializeRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Run the materializer up to `now` and commit the result."""
    now = _resolve_now(body.now if body else None)
    summary = await materialize_rounds(SqlAlchemyRoundStore(db), now)
    await db.commit()
    return summary.to_dict()


@router.get("/status")
async def round_status(
    start: datetime | None = Query(None),
    now: datetime | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Live status timeline for the window [start, now]."""
    settings = get_settings()
    now = _resolve_now(now)
    if start is None:
        start = now - timedelta(hours=settings.status_window_hours)
    views = await project_round_status(
        SqlAlchemyRoundStore(db), start, now,
        max_window=timedelta(hours=settings.max_status_window_hours),
    )
    return [v.to_dict() for v in views]


@router.get("/{round_id}/members")
async def round_members(round_id: int, db: AsyncSession = Depends(get_db)):
    """Membership snapshot of one round."""
    db_round = await db.get(Round, round_id)
    if db_round is None:
        raise ResourceNotFoundError("Round", str(round_id))
    members = await SqlAlchemyRoundStore(db).list_members_for_round(round_id)
    return {
        "round_id": db_round.id,
        "roundTimestamp": db_round.round_timestamp,
        "status": db_round.status,
        "members": [m.subject_id for m in members],
    }
